"""Core constants and enums shared across strikeview."""

from __future__ import annotations

import enum

# Region selectors.  Positive values are provider-specific geographic regions.
GLOBAL_REGION = 0
UNSET_REGION = -1
LOCAL_REGION = -2


class HistoryCommand(enum.Enum):
    """Navigation commands accepted by the history controller."""

    REWIND = "rewind"
    FORWARD = "forward"
    GO_REALTIME = "go_realtime"


class Visibility(enum.Enum):
    VISIBLE = "visible"
    INVISIBLE = "invisible"


class Topic:
    """Event bus topic names."""

    DATA_REQUEST = "data.request"
    DATA_RESULT = "data.result"
    LIMIT_REACHED = "history.limit_reached"
    SERVICE_RESTART = "service.restart"
    BUTTON_COLUMN = "ui.button_column"
