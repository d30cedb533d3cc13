"""Domain entities: the application state, trackers and their logs."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from ..errors import AlreadyRunningError, NoLogsError, NotRunningError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time at the resolution timestamps are persisted with."""

    return datetime.now(timezone.utc).replace(microsecond=0)


class Log(BaseModel):
    """One timed work session belonging to a tracker."""

    start_time: datetime = Field(..., frozen=True, description="When the session began.")
    end_time: datetime | None = Field(
        default=None,
        description="When the session ended; absent while the session is running.",
    )
    notes: str | None = Field(default=None, frozen=True, description="Optional annotation.")

    @field_validator("start_time", "end_time")
    @classmethod
    def _ensure_aware(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "Log":
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("Log end_time must not precede start_time")
        return self

    @field_serializer("start_time", "end_time")
    def _serialize_timestamp(self, value: datetime | None) -> int | None:
        if value is None:
            return None
        return int(value.timestamp())

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def close(self, at: datetime) -> None:
        """Record the end of the session. A log can only be closed once."""

        if self.end_time is not None:
            raise NotRunningError()
        # end_time never precedes start_time, even if the wall clock went backwards
        self.end_time = max(at, self.start_time)

    def duration(self, now: datetime) -> timedelta:
        """Elapsed time of the session; open sessions are measured up to ``now``."""

        end = self.end_time if self.end_time is not None else now
        return max(end - self.start_time, timedelta(0))


class Tracker(BaseModel):
    """A named accumulator of work sessions."""

    title: str = Field(..., frozen=True, description="Unique, case-sensitive tracker title.")
    logs: list[Log] = Field(
        default_factory=list,
        description="Sessions in chronological order; only the last may be open.",
    )

    @model_validator(mode="after")
    def _check_single_open_log(self) -> "Tracker":
        if any(log.is_open for log in self.logs[:-1]):
            raise ValueError(f"Tracker '{self.title}' has an open log that is not the last one")
        return self

    @property
    def last_log(self) -> Log | None:
        return self.logs[-1] if self.logs else None

    @property
    def is_running(self) -> bool:
        last = self.last_log
        return last is not None and last.is_open

    def start_log(self, notes: str | None, at: datetime) -> Log:
        """Append a new open log. Fails while the previous log is still open."""

        if self.is_running:
            raise AlreadyRunningError(self.title)
        log = Log(start_time=at, notes=notes)
        self.logs.append(log)
        return log

    def stop_log(self, at: datetime) -> Log:
        """Close the open log and return it."""

        last = self.last_log
        if last is None:
            raise NoLogsError(self.title)
        if not last.is_open:
            raise NotRunningError(self.title)
        last.close(at)
        return last

    def recent_logs(self, count: int) -> list[Log]:
        """Return up to ``count`` logs, most recent first."""

        if count <= 0:
            return []
        return list(reversed(self.logs[-count:]))


class App(BaseModel):
    """Root aggregate persisted as a whole between invocations."""

    trackers: dict[str, Tracker] = Field(default_factory=dict)
    current: str | None = Field(
        default=None,
        description="Title of the tracker targeted when none is named explicitly.",
    )

    @model_validator(mode="after")
    def _check_tracker_keys(self) -> "App":
        for key, tracker in self.trackers.items():
            if key != tracker.title:
                raise ValueError(f"Tracker stored under '{key}' is titled '{tracker.title}'")
        return self


__all__ = ["App", "Clock", "Log", "Tracker", "utc_now"]
