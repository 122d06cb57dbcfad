"""TimeInterval — the visible window of strike data, relative to now.

A window ends ``offset`` minutes from now (``offset <= 0``) and reaches
``duration`` minutes further back.  ``offset == 0`` is realtime.  All
navigation saturates at the history limits instead of raising; callers
learn whether anything moved from :class:`IntervalChange`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, NamedTuple

from strikeview.data.history import History

DEFAULT_INTERVAL_DURATION = 60  # minutes


class IntervalChange(NamedTuple):
    """A navigation result: the new interval and whether it differs."""

    interval: TimeInterval
    changed: bool


@dataclass(frozen=True)
class TimeInterval:
    offset: int = 0
    duration: int = DEFAULT_INTERVAL_DURATION

    def is_realtime(self) -> bool:
        return self.offset == 0

    def oldest_offset(self, history: History) -> int:
        """Smallest offset whose window still lies inside ``history.range``."""
        return min(0, self.duration - history.range)

    def clamp_offset(self, offset: int, history: History) -> int:
        return max(self.oldest_offset(history), min(offset, 0))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def rew_interval(self, history: History) -> IntervalChange:
        """Step one increment into the past, stopping at the oldest window."""
        target = max(self.offset - history.time_increment, self.oldest_offset(history))
        if target >= self.offset:
            return IntervalChange(self, False)
        return IntervalChange(replace(self, offset=target), True)

    def ffwd_interval(self, history: History) -> IntervalChange:
        """Step one increment towards now, stopping at realtime."""
        target = min(self.offset + history.time_increment, 0)
        if target <= self.offset:
            return IntervalChange(self, False)
        return IntervalChange(replace(self, offset=target), True)

    def animation_step(self, history: History) -> TimeInterval:
        return self.ffwd_interval(history).interval

    def with_offset(self, offset: int, history: History) -> TimeInterval:
        return replace(self, offset=self.clamp_offset(offset, history))

    def with_duration(self, duration: int) -> TimeInterval:
        return replace(self, duration=duration)

    def go_realtime(self) -> IntervalChange:
        if self.is_realtime():
            return IntervalChange(self, False)
        return IntervalChange(replace(self, offset=0), True)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {"offset": self.offset, "duration": self.duration}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TimeInterval:
        return cls(
            offset=int(d.get("offset", 0)),
            duration=int(d.get("duration", DEFAULT_INTERVAL_DURATION)),
        )
