"""Strike-data request model: history, time interval and parameters."""

from strikeview.data.history import History
from strikeview.data.interval import IntervalChange, TimeInterval
from strikeview.data.parameters import LocalReference, Parameters, ParametersChange
from strikeview.data.results import DataChannel, ResultEvent

__all__ = [
    "DataChannel",
    "History",
    "IntervalChange",
    "LocalReference",
    "Parameters",
    "ParametersChange",
    "ResultEvent",
    "TimeInterval",
]
