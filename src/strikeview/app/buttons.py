"""ButtonColumn — visibility and lock state of the on-screen button column."""

from __future__ import annotations

import logging

from strikeview.core.bus import EventBus
from strikeview.core.types import Topic, Visibility

logger = logging.getLogger(__name__)


class ButtonColumn:
    """Tracks which buttons are shown and whether the column accepts input.

    The column is locked while a data fetch triggered by a button is in
    flight and unlocked once a result arrives.  Lock changes are not
    published on their own: :meth:`update` publishes the current layout
    on ``ui.button_column`` for the rendering layer.
    """

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._buttons: dict[str, Visibility] = {}
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    def add(self, name: str, visibility: Visibility = Visibility.VISIBLE) -> None:
        self._buttons[name] = visibility

    def set_visibility(self, name: str, visibility: Visibility) -> None:
        if name not in self._buttons:
            raise KeyError(f"Unknown button: {name}")
        self._buttons[name] = visibility

    def visibility(self, name: str) -> Visibility:
        return self._buttons[name]

    def visible_buttons(self) -> list[str]:
        return [n for n, v in self._buttons.items() if v is Visibility.VISIBLE]

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def update(self) -> None:
        self._bus.publish(
            Topic.BUTTON_COLUMN,
            visible=self.visible_buttons(),
            locked=self._locked,
        )
