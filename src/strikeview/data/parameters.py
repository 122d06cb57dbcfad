"""Parameters — immutable snapshot of what strike data to request.

Every navigation method returns a new :class:`Parameters`; instances are
never modified in place, so UI state and in-flight requests can safely
hold on to an older snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, NamedTuple

from omegaconf import DictConfig, OmegaConf

from strikeview.core.types import GLOBAL_REGION, LOCAL_REGION, UNSET_REGION
from strikeview.data.history import History
from strikeview.data.interval import TimeInterval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalReference:
    """Raster cell anchoring a local-region query."""

    x: int
    y: int

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LocalReference:
        return cls(x=int(d["x"]), y=int(d["y"]))


class ParametersChange(NamedTuple):
    """A navigation result: the new parameters and whether they differ."""

    parameters: Parameters
    changed: bool


@dataclass(frozen=True)
class Parameters:
    region: int = UNSET_REGION
    raster_baselength: int = 0
    interval: TimeInterval = field(default_factory=TimeInterval)
    count_threshold: int = 0
    local_reference: LocalReference | None = None

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_global(self) -> bool:
        return self.region == GLOBAL_REGION

    @property
    def is_local(self) -> bool:
        return self.region == LOCAL_REGION

    @property
    def interval_duration(self) -> int:
        return self.interval.duration

    @property
    def interval_offset(self) -> int:
        return self.interval.offset

    def is_realtime(self) -> bool:
        return self.interval.is_realtime()

    def interval_position(self, history: History) -> int:
        """Window index along the history: 0 is the oldest window and
        :meth:`interval_max_position` is realtime.

        Offsets between two steps count from the realtime end.  Returns 0
        when ``history.time_increment`` is 0.
        """
        if history.time_increment == 0:
            return 0
        steps_back = -self.interval.offset // history.time_increment
        return max(0, self.interval_max_position(history) - steps_back)

    def interval_max_position(self, history: History) -> int:
        """Index of the realtime window; positions run from 0 (oldest) to here."""
        if history.time_increment == 0:
            return 0
        # A window longer than the whole range has nowhere to move
        return max(0, (history.range - self.interval.duration) // history.time_increment)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def rew_interval(self, history: History) -> ParametersChange:
        return self._with_change(*self.interval.rew_interval(history))

    def ffwd_interval(self, history: History) -> ParametersChange:
        return self._with_change(*self.interval.ffwd_interval(history))

    def go_realtime(self) -> ParametersChange:
        return self._with_change(*self.interval.go_realtime())

    def animation_step(self, history: History) -> Parameters:
        return replace(self, interval=self.interval.animation_step(history))

    def with_interval_offset(self, offset: int, history: History) -> Parameters:
        return replace(self, interval=self.interval.with_offset(offset, history))

    def with_position(self, position: int, history: History) -> Parameters:
        offset = (-self.interval_max_position(history) + position) * history.time_increment
        return self.with_interval_offset(offset, history)

    def with_interval_duration(self, duration: int) -> Parameters:
        return replace(self, interval=self.interval.with_duration(duration))

    def _with_change(self, interval: TimeInterval, changed: bool) -> ParametersChange:
        if not changed:
            return ParametersChange(self, False)
        return ParametersChange(replace(self, interval=interval), True)

    # ------------------------------------------------------------------
    # Region / raster selection
    # ------------------------------------------------------------------

    def with_region(self, region: int) -> Parameters:
        """Select *region*; a local reference only survives a local region."""
        reference = self.local_reference if region == LOCAL_REGION else None
        return replace(self, region=region, local_reference=reference)

    def with_local_reference(self, reference: LocalReference) -> Parameters:
        return replace(self, region=LOCAL_REGION, local_reference=reference)

    def with_raster_baselength(self, raster_baselength: int) -> Parameters:
        return replace(self, raster_baselength=raster_baselength)

    def with_count_threshold(self, count_threshold: int) -> Parameters:
        return replace(self, count_threshold=count_threshold)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "region": self.region,
            "raster_baselength": self.raster_baselength,
            "interval": self.interval.to_dict(),
            "count_threshold": self.count_threshold,
            "local_reference": (
                self.local_reference.to_dict() if self.local_reference else None
            ),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Parameters:
        reference = d.get("local_reference")
        return cls(
            region=int(d.get("region", UNSET_REGION)),
            raster_baselength=int(d.get("raster_baselength", 0)),
            interval=TimeInterval.from_dict(d.get("interval") or {}),
            count_threshold=int(d.get("count_threshold", 0)),
            local_reference=LocalReference.from_dict(reference) if reference else None,
        )

    @classmethod
    def from_omegaconf(cls, cfg: Any, history: History | None = None) -> Parameters:
        """Build startup parameters from config.

        The configured offset is clamped into *history* so a stale config
        cannot start the app outside the navigable range.
        """
        if cfg is None:
            return cls()

        if isinstance(cfg, DictConfig):
            cfg = OmegaConf.to_container(cfg, resolve=True)

        params = cls.from_dict(dict(cfg))
        if params.local_reference is not None and not params.is_local:
            logger.warning(
                "Ignoring local_reference for non-local region %d", params.region
            )
            params = replace(params, local_reference=None)

        history = history or History()
        clamped = params.with_interval_offset(params.interval_offset, history)
        if clamped.interval_offset != params.interval_offset:
            logger.warning(
                "Configured interval offset %d clamped to %d",
                params.interval_offset,
                clamped.interval_offset,
            )
        return clamped
