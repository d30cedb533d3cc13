"""Command-line entry point for Tracky."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable

from . import __version__
from .config import TrackySettings, get_settings
from .errors import (
    AlreadyRunningError,
    NoLogsError,
    NoneSelectedError,
    NotRunningError,
    TrackerError,
    TrackerExistsError,
    TrackerNotFoundError,
)
from .model import Clock
from .service import TrackerService
from .storage import StateStore, StateStoreError

logger = logging.getLogger(__name__)

NO_TRACKERS_MESSAGE = "No trackers exist"

ERROR_MESSAGES: dict[type[TrackerError], str] = {
    NoneSelectedError: "No tracker selected",
    TrackerNotFoundError: "{title} does not exist",
    TrackerExistsError: "{title} already exists",
    AlreadyRunningError: "Tracker is already running",
    NotRunningError: "Tracker is not running",
    NoLogsError: "Tracker has no logs",
}


def configure_logging(level: str) -> None:
    """Configure root logging for the CLI."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def describe_error(exc: TrackerError) -> str:
    """Render a tracker error as a user-facing message."""

    template = ERROR_MESSAGES[type(exc)]
    return template.format(title=exc.title)


def cmd_new(service: TrackerService, args: argparse.Namespace) -> str:
    title = service.new_tracker(args.title)
    return f"Created new tracker {title}"


def cmd_start(service: TrackerService, args: argparse.Namespace) -> str:
    return service.start_tracker(args.title, args.note)


def cmd_stop(service: TrackerService, args: argparse.Namespace) -> str:
    result = service.stop_tracker(args.title)
    return f"Stopped {result.note} after {result.formatted_duration}"


def cmd_current(service: TrackerService, args: argparse.Namespace) -> str:
    return f"Current tracker: {service.current_tracker()}"


def cmd_switch(service: TrackerService, args: argparse.Namespace) -> str:
    return f"Switched to {service.switch_tracker(args.to)}"


def cmd_delete(service: TrackerService, args: argparse.Namespace) -> str:
    return f"Deleted {service.delete_tracker(args.title)}"


def cmd_status(service: TrackerService, args: argparse.Namespace) -> str:
    return service.status(args.title).render()


def cmd_logs(service: TrackerService, args: argparse.Namespace) -> str:
    return "\n".join(service.list_logs(args.title))


def cmd_list(service: TrackerService, args: argparse.Namespace) -> str:
    listings = service.list_trackers()
    if not listings:
        return NO_TRACKERS_MESSAGE
    return "\n".join(listing.render() for listing in listings)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tracky", description="Personal time tracker")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd")

    p_new = sub.add_parser("new", help="Create a new tracker")
    p_new.add_argument("title")
    p_new.set_defaults(func=cmd_new)

    p_start = sub.add_parser("start", help="Start timer")
    p_start.add_argument("title", nargs="?", help="Tracker to start (default: current)")
    p_start.add_argument("-n", "--note", default=None, help="Note describing the session")
    p_start.set_defaults(func=cmd_start)

    p_stop = sub.add_parser("stop", help="Stop timer")
    p_stop.add_argument("title", nargs="?", help="Tracker to stop (default: current)")
    p_stop.set_defaults(func=cmd_stop)

    p_current = sub.add_parser("current", help="Show the current tracker")
    p_current.set_defaults(func=cmd_current)

    p_switch = sub.add_parser("switch", help="Switch contexts to another tracker")
    p_switch.add_argument("to")
    p_switch.set_defaults(func=cmd_switch)

    p_delete = sub.add_parser("delete", help="Delete a tracker (default: current)")
    p_delete.add_argument("title", nargs="?")
    p_delete.set_defaults(func=cmd_delete)

    p_status = sub.add_parser("status", help="Show a tracker and its recent sessions")
    p_status.add_argument("title", nargs="?")
    p_status.set_defaults(func=cmd_status)

    p_logs = sub.add_parser("logs", help="Display all logs in a tracker")
    p_logs.add_argument("title", nargs="?")
    p_logs.set_defaults(func=cmd_logs)

    p_list = sub.add_parser("list", help="Display all trackers")
    p_list.set_defaults(func=cmd_list)

    return parser


def run(
    argv: list[str] | None = None,
    *,
    settings: TrackySettings | None = None,
    clock: Clock | None = None,
) -> int:
    """Execute one command against the persisted state and return an exit code."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    settings = settings or get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    store = StateStore(settings.data_path)
    try:
        app = store.load()
    except StateStoreError as exc:
        print(f"Could not load trackers: {exc}", file=sys.stderr)
        return 1

    service = TrackerService(app, clock=clock, status_log_count=settings.status_log_count)
    handler: Callable[[TrackerService, argparse.Namespace], str] = args.func
    logger.debug("Dispatching command", extra={"command": args.cmd})

    exit_code = 0
    try:
        output = handler(service, args)
    except TrackerError as exc:
        print(describe_error(exc), file=sys.stderr)
        exit_code = 1
    else:
        if output:
            print(output)

    try:
        store.save(app)
    except StateStoreError as exc:
        print(f"Could not save trackers: {exc}", file=sys.stderr)
        return 1
    return exit_code


def main(argv: list[str] | None = None) -> None:
    exit_code = run(argv)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
