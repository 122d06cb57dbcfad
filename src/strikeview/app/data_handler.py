"""DataHandler — owner of the current Parameters snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from strikeview.core.bus import EventBus
from strikeview.core.types import Topic
from strikeview.data.history import History
from strikeview.data.parameters import Parameters, ParametersChange
from strikeview.data.results import DataChannel, ResultEvent

logger = logging.getLogger(__name__)


class DataHandler:
    """Holds the "current" request parameters and applies navigation to them.

    Each navigation call swaps in a new :class:`Parameters` value; older
    snapshots handed out earlier remain valid.  Data is never fetched here:
    :meth:`update_data` publishes a ``data.request`` event and whoever
    performs the fetch reports back through :meth:`deliver_result`.

    When the provider cannot serve historical data, all history navigation
    is refused.
    """

    def __init__(
        self,
        bus: EventBus | None = None,
        history: History | None = None,
        parameters: Parameters | None = None,
        capable_of_historical_data: bool = True,
    ) -> None:
        self._bus = bus or EventBus()
        self._history = history or History()
        self._parameters = parameters or Parameters()
        self._historical = capable_of_historical_data

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def history(self) -> History:
        return self._history

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @property
    def is_capable_of_historical_data(self) -> bool:
        return self._historical

    @property
    def is_realtime(self) -> bool:
        return self._parameters.is_realtime()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def rew_interval(self) -> bool:
        if not self._historical:
            return False
        return self._apply("rewind", self._parameters.rew_interval(self._history))

    def ffwd_interval(self) -> bool:
        if not self._historical:
            return False
        return self._apply("forward", self._parameters.ffwd_interval(self._history))

    def go_realtime(self) -> bool:
        return self._apply("realtime", self._parameters.go_realtime())

    def animation_step(self) -> Parameters:
        if self._historical:
            self._parameters = self._parameters.animation_step(self._history)
        return self._parameters

    def set_position(self, position: int) -> Parameters:
        if self._historical:
            self._parameters = self._parameters.with_position(position, self._history)
            logger.debug("Position set to %d", position)
        return self._parameters

    def set_interval_offset(self, offset: int) -> Parameters:
        if self._historical:
            self._parameters = self._parameters.with_interval_offset(
                offset, self._history
            )
        return self._parameters

    def set_interval_duration(self, duration: int) -> Parameters:
        self._parameters = self._parameters.with_interval_duration(duration)
        return self._parameters

    def _apply(self, action: str, change: ParametersChange) -> bool:
        parameters, changed = change
        if changed:
            self._parameters = parameters
            logger.debug("%s -> offset %d", action, parameters.interval_offset)
        else:
            logger.debug("%s ignored at offset %d", action, parameters.interval_offset)
        return changed

    # ------------------------------------------------------------------
    # Data flow
    # ------------------------------------------------------------------

    def update_data(self, channels: Iterable[DataChannel] | None = None) -> None:
        """Ask the data layer to fetch *channels* for the current snapshot."""
        requested = frozenset(channels) if channels is not None else frozenset(
            {DataChannel.STRIKES}
        )
        logger.info(
            "Requesting %s for offset %d",
            ",".join(sorted(c.value for c in requested)),
            self._parameters.interval_offset,
        )
        if self._bus.subscriber_count(Topic.DATA_REQUEST) == 0:
            logger.warning("No data layer subscribed to '%s'", Topic.DATA_REQUEST)
            return
        self._bus.publish(
            Topic.DATA_REQUEST, parameters=self._parameters, channels=requested
        )

    def deliver_result(self, event: ResultEvent) -> None:
        """Republish a fetch outcome to data consumers."""
        if event.failed:
            logger.warning("Data request for offset %d failed", event.parameters.interval_offset)
        self._bus.publish(Topic.DATA_RESULT, event=event)
