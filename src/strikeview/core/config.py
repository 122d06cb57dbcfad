"""strikeview configuration: YAML files -> History and startup Parameters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import ValidationError
from yaml import YAMLError

from strikeview.data.history import History
from strikeview.data.parameters import Parameters

ROOT_KEY = "strikeview"

# Directories next to the base file whose *.yaml files are merged on top
OVERRIDE_DIRS = ("history", "data")


class ConfigError(ValueError):
    """The config file exists but cannot be turned into a session setup."""


class StrikeviewConfig:
    """Loads the ``strikeview:`` YAML tree and builds the navigation model.

    ``history/*.yaml`` and ``data/*.yaml`` next to the base file are merged
    on top of it in name order, so a deployment can shorten the history
    range or switch off historical data without editing the defaults.
    """

    def __init__(self, config_path: str | Path = "config/default.yaml"):
        self._config_path = Path(config_path)
        self._config: DictConfig | None = None

    def load(self, validate: bool = False) -> DictConfig:
        """Read, merge and optionally validate the config.

        Raises:
            FileNotFoundError: If the base file does not exist.
            ConfigError: On unparsable YAML, a missing ``strikeview:`` root,
                or (when validating) values rejected by the schema.
        """
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config not found: {self._config_path}")

        try:
            merged = self._merge_files()
        except (YAMLError, OmegaConfBaseException) as e:
            raise ConfigError(f"Cannot read {self._config_path}: {e}") from e

        if not isinstance(merged.get(ROOT_KEY), DictConfig):
            raise ConfigError(f"Missing '{ROOT_KEY}:' mapping in {self._config_path}")

        if validate or OmegaConf.select(
            merged, f"{ROOT_KEY}.system.validate_config", default=False
        ):
            from strikeview.core.config_schema import validate_config

            try:
                validate_config(OmegaConf.to_container(merged, resolve=True))
            except ValidationError as e:
                raise ConfigError(str(e)) from e

        self._config = merged
        return self._config

    def _merge_files(self) -> DictConfig:
        base = OmegaConf.load(self._config_path)
        if not isinstance(base, DictConfig):
            raise ConfigError(f"Config root must be a mapping: {self._config_path}")

        config_dir = self._config_path.parent
        for subdir in OVERRIDE_DIRS:
            sub_path = config_dir / subdir
            if sub_path.is_dir():
                for yaml_file in sorted(sub_path.glob("*.yaml")):
                    base = OmegaConf.merge(base, OmegaConf.load(yaml_file))
        return base

    def override(self, dotpath: str, value: Any) -> None:
        """Override a config value using dot notation.

        Example: config.override("strikeview.history.time_increment", 15)
        """
        OmegaConf.update(self.cfg, dotpath, value)

    @property
    def cfg(self) -> DictConfig:
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        return self._config

    def section(self, name: str) -> Any:
        return self.cfg[ROOT_KEY].get(name)

    # ------------------------------------------------------------------
    # Model builders
    # ------------------------------------------------------------------

    def history(self) -> History:
        try:
            return History.from_omegaconf(self.section("history"))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid history section: {e}") from e

    def parameters(self, history: History | None = None) -> Parameters:
        try:
            return Parameters.from_omegaconf(self.section("parameters"), history)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid parameters section: {e}") from e

    def historical_data(self) -> bool:
        data = self.section("data")
        return bool(data.get("historical", True)) if data is not None else True
