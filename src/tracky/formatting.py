"""Rendering helpers for durations and log timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo

from .model import Log

UNTITLED_NOTE = "untitled"


def format_duration(value: timedelta | int | float) -> str:
    """Render a duration as ``Ns``, ``M:SS`` or ``HH:MM:SS`` depending on its size."""

    seconds = int(value.total_seconds()) if isinstance(value, timedelta) else int(value)
    seconds = max(seconds, 0)
    if seconds < 60:
        return f"{seconds}s"
    minutes, secs = divmod(seconds, 60)
    if seconds < 3600:
        return f"{minutes}:{secs:02d}"
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_clock(value: datetime, tz: tzinfo | None = None) -> str:
    """Wall-clock time of day; ``tz=None`` means the local timezone."""

    return value.astimezone(tz).strftime("%H:%M")


def format_timestamp(value: datetime, tz: tzinfo | None = None) -> str:
    return value.astimezone(tz).strftime("%Y-%m-%d %H:%M")


def note_or_placeholder(notes: str | None) -> str:
    return notes if notes else UNTITLED_NOTE


def format_status_line(log: Log, now: datetime, tz: tzinfo | None = None) -> str:
    """One line of the status summary.

    Running sessions show their live duration, finished sessions the
    clock times they spanned. Both are followed by the note.
    """

    note = note_or_placeholder(log.notes)
    if log.end_time is None:
        return f"{format_duration(log.duration(now))} {note}"
    return f"{format_clock(log.start_time, tz)} -> {format_clock(log.end_time, tz)} {note}"


def format_log_entry(log: Log, tz: tzinfo | None = None) -> str:
    end = format_timestamp(log.end_time, tz) if log.end_time is not None else ""
    return f"{format_timestamp(log.start_time, tz)} -> {end}".rstrip()


__all__ = [
    "UNTITLED_NOTE",
    "format_clock",
    "format_duration",
    "format_log_entry",
    "format_status_line",
    "format_timestamp",
    "note_or_placeholder",
]
