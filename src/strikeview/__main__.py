"""strikeview CLI entry point.

Runs a scripted history-navigation session and prints the request
parameters after every command.  Data requests are answered immediately
with a successful (empty) result, standing in for the real data layer.

Usage:
    python -m strikeview rew rew ffwd now
    python -m strikeview pos=10 step step --log-level DEBUG
    python -m strikeview --config custom.yaml duration=120 rew
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from strikeview.app.data_handler import DataHandler
from strikeview.app.history_controller import HistoryController
from strikeview.core.bus import EventBus
from strikeview.core.config import StrikeviewConfig
from strikeview.core.types import HistoryCommand, Topic
from strikeview.data.parameters import Parameters
from strikeview.data.results import ResultEvent
from strikeview.utils.logging import bind_history_context, setup_logging

logger = logging.getLogger("strikeview.cli")

COMMANDS = {
    "rew": HistoryCommand.REWIND,
    "ffwd": HistoryCommand.FORWARD,
    "now": HistoryCommand.GO_REALTIME,
}
SETTERS = ("pos", "offset", "duration")


def parse_step(token: str) -> tuple[str, int | None]:
    """Split a session token into (verb, argument).

    Raises:
        ValueError: If *token* is not a known command or has a bad argument.
    """
    if token in COMMANDS or token == "step":
        return token, None
    verb, sep, arg = token.partition("=")
    if not sep or verb not in SETTERS:
        raise ValueError(f"unknown command '{token}'")
    try:
        return verb, int(arg)
    except ValueError:
        raise ValueError(f"'{verb}' needs an integer, got '{arg}'") from None


class Session:
    """Wires handler, controller and an instant-answer data layer together."""

    def __init__(self, handler: DataHandler) -> None:
        self.handler = handler
        self.controller = HistoryController(handler)
        self.notices: list[str] = []
        bus = handler.bus
        bus.subscribe(Topic.DATA_REQUEST, self._answer)
        bus.subscribe(Topic.SERVICE_RESTART, self._answer)
        bus.subscribe(Topic.LIMIT_REACHED, self._limit_reached)

    def _answer(self, parameters: Parameters, **_: object) -> None:
        self.handler.deliver_result(ResultEvent(parameters=parameters))

    def _limit_reached(self, **_: object) -> None:
        self.notices.append("historic time step limit reached")

    def run(self, verb: str, arg: int | None) -> bool:
        if verb in COMMANDS:
            return self.controller.dispatch(COMMANDS[verb])
        before = self.handler.parameters
        if verb == "step":
            after = self.handler.animation_step()
        elif verb == "pos":
            after = self.handler.set_position(arg)
        elif verb == "offset":
            after = self.handler.set_interval_offset(arg)
        else:
            after = self.handler.set_interval_duration(arg)
        if after != before:
            self.handler.update_data()
        return after != before

    def describe(self) -> dict:
        p = self.handler.parameters
        h = self.handler.history
        return {
            "offset": p.interval_offset,
            "duration": p.interval_duration,
            "position": p.interval_position(h),
            "max_position": p.interval_max_position(h),
            "realtime": p.is_realtime(),
            "buttons": self.controller.button_column.visible_buttons(),
        }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="strikeview",
        description="strikeview - lightning strike history navigation",
    )
    parser.add_argument(
        "commands",
        nargs="*",
        metavar="COMMAND",
        help="rew | ffwd | now | step | pos=N | offset=N | duration=N",
    )
    parser.add_argument(
        "--config",
        "-c",
        default="config/default.yaml",
        help="Path to configuration YAML file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        default=False,
        help="Validate config against Pydantic schema before starting",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Path to log file (default: no file logging)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=False,
        help="Output logs as JSON instead of human-readable",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        default=False,
        help="Simulate a data provider without historical data",
    )
    args = parser.parse_args(argv)

    try:
        steps = [parse_step(token) for token in args.commands]
    except ValueError as e:
        parser.error(str(e))

    config = StrikeviewConfig(args.config)
    try:
        config.load(validate=args.validate_config)
        history = config.history()
        parameters = config.parameters(history)
        historical = config.historical_data()
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: Config validation failed:\n{e}", file=sys.stderr)
        return 1

    system = config.section("system") or {}
    setup_logging(
        args.log_level or system.get("log_level", "INFO"),
        log_file=args.log_file or system.get("log_file", None),
        log_json=args.log_json or system.get("log_json", False),
    )
    bind_history_context(history)
    logger.info(
        "Session started: %d steps of %d min, window %d min",
        history.max_steps,
        history.time_increment,
        parameters.interval_duration,
    )

    handler = DataHandler(
        bus=EventBus(),
        history=history,
        parameters=parameters,
        capable_of_historical_data=historical and not args.no_history,
    )
    session = Session(handler)

    print(json.dumps({"command": "start", **session.describe()}))
    for verb, arg in steps:
        changed = session.run(verb, arg)
        line = {"command": verb if arg is None else f"{verb}={arg}", "changed": changed}
        line.update(session.describe())
        if session.notices:
            line["notice"] = session.notices.pop()
        print(json.dumps(line))
    return 0


if __name__ == "__main__":
    sys.exit(main())
