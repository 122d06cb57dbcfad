"""In-process event bus carrying navigation side effects to the outer app."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous topic -> callback dispatcher.

    Callbacks run in subscription order on the publishing call stack.  A
    failing callback is logged and does not prevent the remaining
    subscribers from running.  Topics used by strikeview are listed on
    :class:`strikeview.core.types.Topic`.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callable[..., Any]]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Callable[..., Any]) -> None:
        self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Callable[..., Any]) -> None:
        if callback in self._subscribers.get(topic, []):
            self._subscribers[topic].remove(callback)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    def publish(self, topic: str, **payload: Any) -> int:
        """Deliver *payload* to every subscriber of *topic*.

        Returns the number of callbacks that completed without raising.
        """
        delivered = 0
        # Snapshot so callbacks may (un)subscribe while being dispatched
        for callback in list(self._subscribers.get(topic, [])):
            try:
                callback(**payload)
            except Exception:
                logger.exception("EventBus callback error on '%s'", topic)
            else:
                delivered += 1
        logger.debug("Published '%s' to %d subscriber(s)", topic, delivered)
        return delivered
