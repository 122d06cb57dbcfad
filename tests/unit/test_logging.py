"""Tests for strikeview.utils.logging — structlog setup."""

from __future__ import annotations

import json
import logging

import structlog

from strikeview.data.history import History
from strikeview.utils.logging import bind_history_context, setup_logging


class TestSetupLogging:
    def test_level_and_isolation(self, restore_logging):
        setup_logging("WARNING")
        assert restore_logging.level == logging.WARNING
        assert restore_logging.propagate is False
        assert len(restore_logging.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, restore_logging):
        setup_logging("CHATTY")
        assert restore_logging.level == logging.INFO

    def test_repeated_setup_replaces_handlers(self, restore_logging):
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(restore_logging.handlers) == 1

    def test_json_file_output(self, restore_logging, tmp_path):
        log_file = tmp_path / "logs" / "strikeview.log"
        setup_logging("INFO", log_file=str(log_file), log_json=True)
        logging.getLogger("strikeview.test").info("rewound to %d", -30)
        for h in restore_logging.handlers:
            h.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "rewound to -30"
        assert record["level"] == "info"
        assert record["logger"] == "strikeview.test"


class TestHistoryContext:
    def test_history_settings_on_every_line(self, restore_logging, tmp_path):
        log_file = tmp_path / "session.log"
        setup_logging("INFO", log_file=str(log_file), log_json=True)
        structlog.contextvars.clear_contextvars()
        try:
            bind_history_context(History(time_increment=15, range=720))
            logging.getLogger("strikeview.test").info("session started")
        finally:
            structlog.contextvars.clear_contextvars()
        for h in restore_logging.handlers:
            h.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["time_increment"] == 15
        assert record["history_range"] == 720
