"""Structured logging for strikeview.

structlog renders both its own events and plain ``logging.getLogger(__name__)``
records, so the navigation modules stay on the stdlib API.  The active
history settings are carried as context variables and show up on every
line emitted during a session.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from strikeview.data.history import History

LOGGER_NAME = "strikeview"


def bind_history_context(history: History) -> None:
    """Attach the navigable history settings to all following log lines."""
    structlog.contextvars.bind_contextvars(
        time_increment=history.time_increment,
        history_range=history.range,
    )


def _handlers(log_file: str | None) -> list[logging.Handler]:
    # stderr keeps stdout free for the CLI's JSON session lines
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(path), encoding="utf-8"))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_json: bool = False,
) -> None:
    """Route the ``strikeview`` logger tree through structlog.

    Args:
        level: Log level name; unknown names fall back to INFO.
        log_file: Optional extra log file. Parent directories are created.
        log_json: Render JSON lines instead of the console format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    pre_chain: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
        structlog.processors.format_exc_info,
    ]
    renderer = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    root = logging.getLogger(LOGGER_NAME)
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    for handler in _handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(numeric_level)
    root.propagate = False
