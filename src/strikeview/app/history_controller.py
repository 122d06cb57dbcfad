"""HistoryController — maps history navigation commands to state changes.

The controller owns no UI toolkit objects.  A front end dispatches a
:class:`HistoryCommand` and reacts to the events published on the bus:

* ``history.limit_reached``: rewinding hit the oldest window
* ``service.restart``: realtime was (re)entered, polling must restart
* ``data.request``: historical data for the new window is needed
* ``ui.button_column``: button visibility / lock changed
"""

from __future__ import annotations

import logging

from strikeview.app.buttons import ButtonColumn
from strikeview.app.data_handler import DataHandler
from strikeview.core.types import HistoryCommand, Topic, Visibility
from strikeview.data.results import DataChannel, ResultEvent

logger = logging.getLogger(__name__)

REWIND_BUTTON = "history_rewind"
FORWARD_BUTTON = "history_forward"
REALTIME_BUTTON = "go_realtime"


class HistoryController:
    """Drives the rewind / forward / go-realtime buttons.

    Commands arriving while the button column is locked (a fetch is still
    in flight) are dropped, which keeps navigation requests serialized.
    """

    def __init__(
        self,
        data_handler: DataHandler,
        button_column: ButtonColumn | None = None,
    ) -> None:
        self._handler = data_handler
        self._bus = data_handler.bus
        self._column = button_column or ButtonColumn(self._bus)

        self._column.add(REWIND_BUTTON)
        self._column.add(FORWARD_BUTTON, Visibility.INVISIBLE)
        self._column.add(REALTIME_BUTTON, Visibility.INVISIBLE)

        self._bus.subscribe(Topic.DATA_RESULT, self.on_result)
        self.set_realtime_data(True)

    @property
    def button_column(self) -> ButtonColumn:
        return self._column

    def buttons(self) -> list[str]:
        return [REWIND_BUTTON, FORWARD_BUTTON, REALTIME_BUTTON]

    def close(self) -> None:
        self._bus.unsubscribe(Topic.DATA_RESULT, self.on_result)

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------

    def dispatch(self, command: HistoryCommand) -> bool:
        """Apply *command*; returns True if the interval changed."""
        if self._column.locked:
            logger.debug("Ignoring %s: button column locked", command.value)
            return False

        if command is HistoryCommand.REWIND:
            return self._rewind()
        if command is HistoryCommand.FORWARD:
            return self._forward()
        if command is HistoryCommand.GO_REALTIME:
            return self._go_realtime()
        raise ValueError(f"Unknown history command: {command!r}")

    def _rewind(self) -> bool:
        if not self._handler.rew_interval():
            logger.info("Historic time step limit reached")
            self._bus.publish(
                Topic.LIMIT_REACHED,
                offset=self._handler.parameters.interval_offset,
            )
            return False

        self._column.lock()
        self._set_history_buttons(Visibility.VISIBLE)
        self._column.update()
        self._handler.update_data({DataChannel.STRIKES})
        return True

    def _forward(self) -> bool:
        if not self._handler.ffwd_interval():
            return False
        if self._handler.is_realtime:
            self._configure_for_realtime_operation()
        else:
            self._handler.update_data()
        return True

    def _go_realtime(self) -> bool:
        if not self._handler.go_realtime():
            return False
        self._configure_for_realtime_operation()
        return True

    def _configure_for_realtime_operation(self) -> None:
        self._column.lock()
        self._set_history_buttons(Visibility.INVISIBLE)
        self._column.update()
        logger.info("Back to realtime, restarting data service")
        self._bus.publish(Topic.SERVICE_RESTART, parameters=self._handler.parameters)

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def set_realtime_data(self, realtime_data: bool) -> None:
        if self._handler.is_capable_of_historical_data:
            self._column.set_visibility(REWIND_BUTTON, Visibility.VISIBLE)
            self._set_history_buttons(
                Visibility.INVISIBLE if realtime_data else Visibility.VISIBLE
            )
        else:
            self._column.set_visibility(REWIND_BUTTON, Visibility.INVISIBLE)
            self._set_history_buttons(Visibility.INVISIBLE)
        self._column.update()

    def _set_history_buttons(self, visibility: Visibility) -> None:
        self._column.set_visibility(FORWARD_BUTTON, visibility)
        self._column.set_visibility(REALTIME_BUTTON, visibility)

    def on_result(self, event: ResultEvent) -> None:
        """Data consumer: sync buttons with the data that actually arrived."""
        self._column.unlock()
        if event.failed:
            self._column.update()
        else:
            self.set_realtime_data(event.contains_realtime_data())
