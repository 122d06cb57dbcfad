"""Pydantic schema for strikeview configuration validation.

Mirrors the YAML structure in config/default.yaml. Used when
``validate=True`` is passed to ``StrikeviewConfig.load()``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from strikeview.core.types import UNSET_REGION
from strikeview.data.history import DEFAULT_OFFSET_INCREMENT, MAX_HISTORY_RANGE
from strikeview.data.interval import DEFAULT_INTERVAL_DURATION


class SystemConfig(BaseModel):
    name: str = "strikeview"
    version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    validate_config: bool = False
    log_file: str | None = None
    log_json: bool = False


class HistorySection(BaseModel):
    time_increment: int = Field(default=DEFAULT_OFFSET_INCREMENT, ge=0)
    range: int = Field(default=MAX_HISTORY_RANGE, gt=0)

    @model_validator(mode="after")
    def _range_covers_increment(self) -> HistorySection:
        if self.range < self.time_increment:
            raise ValueError(
                f"history.range ({self.range}) must be >= "
                f"history.time_increment ({self.time_increment})"
            )
        return self


class IntervalSection(BaseModel):
    offset: int = Field(default=0, le=0)
    duration: int = Field(default=DEFAULT_INTERVAL_DURATION, ge=0)


class LocalReferenceSection(BaseModel):
    x: int
    y: int


class ParametersSection(BaseModel):
    region: int = UNSET_REGION
    raster_baselength: int = Field(default=0, ge=0)
    count_threshold: int = Field(default=0, ge=0)
    interval: IntervalSection = Field(default_factory=IntervalSection)
    local_reference: LocalReferenceSection | None = None


class DataSection(BaseModel):
    historical: bool = True


class StrikeviewRootConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    history: HistorySection = Field(default_factory=HistorySection)
    parameters: ParametersSection = Field(default_factory=ParametersSection)
    data: DataSection = Field(default_factory=DataSection)

    model_config = {"extra": "allow"}


class StrikeviewConfigSchema(BaseModel):
    """Top-level wrapper matching YAML root key ``strikeview:``."""

    strikeview: StrikeviewRootConfig

    model_config = {"extra": "allow"}


def validate_config(cfg_dict: dict) -> StrikeviewConfigSchema:
    """Validate a raw config dict (e.g. from OmegaConf) against the schema.

    Raises ``pydantic.ValidationError`` on invalid config.
    """
    return StrikeviewConfigSchema.model_validate(cfg_dict)
