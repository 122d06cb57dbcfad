"""Shared pytest fixtures for strikeview tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from omegaconf import OmegaConf

from strikeview.app.data_handler import DataHandler
from strikeview.core.bus import EventBus
from strikeview.data.history import History
from strikeview.data.interval import TimeInterval
from strikeview.data.parameters import Parameters


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def config_path(project_root: Path) -> Path:
    return project_root / "config" / "default.yaml"


@pytest.fixture
def default_config(config_path: Path):
    return OmegaConf.load(config_path)


@pytest.fixture
def history() -> History:
    """The app default: 30 minute steps over 24 hours."""
    return History(time_increment=30, range=1440)


@pytest.fixture
def zero_window() -> Parameters:
    """Realtime parameters with a zero-length window."""
    return Parameters(interval=TimeInterval(offset=0, duration=0))


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus: EventBus):
    """Collects every event published on the bus as (topic, payload)."""
    events: list[tuple[str, dict]] = []

    def attach(*topics: str) -> list[tuple[str, dict]]:
        for topic in topics:
            bus.subscribe(topic, lambda _t=topic, **kw: events.append((_t, kw)))
        return events

    return attach


@pytest.fixture
def handler(bus: EventBus, history: History) -> DataHandler:
    return DataHandler(bus=bus, history=history)


@pytest.fixture
def restore_logging():
    """Undo setup_logging() changes to the ``strikeview`` logger."""
    import logging

    root = logging.getLogger("strikeview")
    saved = (list(root.handlers), root.level, root.propagate)
    yield root
    for h in root.handlers:
        if h not in saved[0]:
            h.close()
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    root.propagate = saved[2]
