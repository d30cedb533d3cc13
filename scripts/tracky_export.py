"""Export persisted trackers and their logs as JSON or YAML."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable

import yaml

from tracky.config import TrackySettings
from tracky.errors import TrackerNotFoundError
from tracky.model import App, Tracker, utc_now
from tracky.storage import StateStore, StateStoreError


def load_store(settings: TrackySettings) -> StateStore:
    """Construct a StateStore using the provided settings."""

    return StateStore(settings.data_path)


def _normalize_trackers(
    trackers: Iterable[Tracker],
    *,
    current: str | None,
    now: datetime,
) -> list[dict[str, object]]:
    payload: list[dict[str, object]] = []
    for tracker in trackers:
        payload.append(
            {
                "title": tracker.title,
                "current": tracker.title == current,
                "running": tracker.is_running,
                "logs": [
                    {
                        "start_time": log.start_time.isoformat(),
                        "end_time": log.end_time.isoformat() if log.end_time else None,
                        "notes": log.notes,
                        "duration_seconds": int(log.duration(now).total_seconds()),
                    }
                    for log in tracker.logs
                ],
            }
        )
    payload.sort(key=lambda item: item["title"])
    return payload


def build_payload(
    app: App,
    *,
    tracker: str | None = None,
    now: datetime | None = None,
) -> list[dict[str, object]]:
    now = now or utc_now()
    trackers = app.trackers.values()
    if tracker is not None:
        if tracker not in app.trackers:
            raise TrackerNotFoundError(tracker)
        trackers = [app.trackers[tracker]]
    return _normalize_trackers(trackers, current=app.current, now=now)


def export_trackers(args: argparse.Namespace, *, now: datetime | None = None) -> int:
    settings = TrackySettings()
    store = load_store(settings)
    try:
        app = store.load()
    except StateStoreError as exc:
        print(f"Could not load trackers: {exc}", file=sys.stderr)
        return 1

    try:
        payload = build_payload(app, tracker=args.tracker, now=now)
    except TrackerNotFoundError as exc:
        print(f"{exc.title} does not exist", file=sys.stderr)
        return 1

    if args.format == "yaml":
        output_text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    else:
        output_text = json.dumps(payload, indent=2)

    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export trackers and their logs for reporting or backups."
    )
    parser.add_argument("--tracker", help="Export only the named tracker", default=None)
    parser.add_argument(
        "--format",
        choices={"json", "yaml"},
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("--output", help="Optional path to write the export to")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = export_trackers(args)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
