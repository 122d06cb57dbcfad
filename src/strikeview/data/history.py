"""History — granularity and span of navigable strike history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from omegaconf import DictConfig, OmegaConf

DEFAULT_OFFSET_INCREMENT = 30  # minutes per navigation step
MAX_HISTORY_RANGE = 24 * 60  # minutes


@dataclass(frozen=True)
class History:
    """How far back the user may navigate, and in which steps.

    ``range`` is expected to be at least ``time_increment``; that is checked
    by the config schema, not here.  A zero ``time_increment`` is tolerated
    and turns every step into a no-op.
    """

    time_increment: int = DEFAULT_OFFSET_INCREMENT
    range: int = MAX_HISTORY_RANGE

    @property
    def max_steps(self) -> int:
        """Whole increments that fit into the range (0 if steps are disabled)."""
        if self.time_increment == 0:
            return 0
        return self.range // self.time_increment

    @classmethod
    def from_omegaconf(cls, cfg: Any) -> History:
        """Build from an OmegaConf node, a plain dict, or ``None``."""
        if cfg is None:
            return cls()

        if isinstance(cfg, DictConfig):
            cfg = OmegaConf.to_container(cfg, resolve=True)

        if not isinstance(cfg, dict):
            cfg = dict(cfg)

        return cls(
            time_increment=int(cfg.get("time_increment", DEFAULT_OFFSET_INCREMENT)),
            range=int(cfg.get("range", MAX_HISTORY_RANGE)),
        )
