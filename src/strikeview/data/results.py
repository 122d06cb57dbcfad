"""Data channels and fetch outcomes exchanged with the data layer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from strikeview.data.parameters import Parameters


class DataChannel(enum.Enum):
    STRIKES = "strikes"
    STATIONS = "stations"


@dataclass(frozen=True)
class ResultEvent:
    """Outcome of a data request issued for *parameters*."""

    parameters: Parameters
    channels: frozenset[DataChannel] = field(
        default_factory=lambda: frozenset({DataChannel.STRIKES})
    )
    failed: bool = False

    def contains_realtime_data(self) -> bool:
        return self.parameters.is_realtime()
