"""Application layer: data handler and history navigation controller."""

from strikeview.app.buttons import ButtonColumn
from strikeview.app.data_handler import DataHandler
from strikeview.app.history_controller import HistoryController

__all__ = [
    "ButtonColumn",
    "DataHandler",
    "HistoryController",
]
