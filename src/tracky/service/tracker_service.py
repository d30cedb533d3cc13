"""Operations over the tracker domain model.

Every operation mutates the :class:`~tracky.model.App` it was given in
place and either returns a result or raises a
:class:`~tracky.errors.TrackerError`. Preconditions are checked before any
mutation, with one exception: a stale ``App.current`` is cleared when
fallback resolution finds it no longer names a tracker.
"""

from __future__ import annotations

from datetime import tzinfo

from ..errors import (
    NoneSelectedError,
    TrackerExistsError,
    TrackerNotFoundError,
)
from ..formatting import format_log_entry, format_status_line, note_or_placeholder
from ..model import App, Clock, Tracker, utc_now
from .results import StatusReport, StopResult, TrackerListing

STARTED_MESSAGE = "Timer started"


class TrackerService:
    """User-facing tracker operations bound to one application state."""

    def __init__(
        self,
        app: App,
        *,
        clock: Clock | None = None,
        tz: tzinfo | None = None,
        status_log_count: int = 3,
    ) -> None:
        self._app = app
        self._clock = clock or utc_now
        self._tz = tz
        self._status_log_count = status_log_count

    @property
    def app(self) -> App:
        return self._app

    def decide_title(self, title: str | None = None) -> tuple[str, bool]:
        """Pick the tracker an operation acts on.

        Returns the title and whether it came from ``App.current`` rather
        than from the caller.
        """

        if title is not None:
            return title, False
        if self._app.current is not None:
            return self._app.current, True
        raise NoneSelectedError()

    def _resolve(self, title: str | None) -> tuple[str, Tracker]:
        resolved, from_current = self.decide_title(title)
        tracker = self._app.trackers.get(resolved)
        if tracker is not None:
            return resolved, tracker
        if from_current:
            self._app.current = None
            raise NoneSelectedError(resolved)
        raise TrackerNotFoundError(resolved)

    def new_tracker(self, title: str) -> str:
        if title in self._app.trackers:
            raise TrackerExistsError(title)
        self._app.trackers[title] = Tracker(title=title)
        if self._app.current is None:
            self._app.current = title
        return title

    def delete_tracker(self, title: str | None = None) -> str:
        resolved, _ = self._resolve(title)
        del self._app.trackers[resolved]
        if self._app.current == resolved:
            self._app.current = None
        return resolved

    def start_tracker(self, title: str | None = None, note: str | None = None) -> str:
        _, tracker = self._resolve(title)
        tracker.start_log(note, self._clock())
        return STARTED_MESSAGE

    def stop_tracker(self, title: str | None = None) -> StopResult:
        resolved, tracker = self._resolve(title)
        now = self._clock()
        log = tracker.stop_log(now)
        return StopResult(
            title=resolved,
            note=note_or_placeholder(log.notes),
            duration=log.duration(now),
        )

    def switch_tracker(self, title: str) -> str:
        if title not in self._app.trackers:
            raise TrackerNotFoundError(title)
        self._app.current = title
        return title

    def current_tracker(self) -> str:
        """Title of the selected tracker, clearing the selection if it went stale."""

        resolved, _ = self._resolve(None)
        return resolved

    def status(self, title: str | None = None) -> StatusReport:
        resolved, tracker = self._resolve(title)
        now = self._clock()
        lines = [
            format_status_line(log, now, self._tz)
            for log in tracker.recent_logs(self._status_log_count)
        ]
        return StatusReport(title=resolved, running=tracker.is_running, lines=lines)

    def list_logs(self, title: str | None = None) -> list[str]:
        _, tracker = self._resolve(title)
        return [format_log_entry(log, self._tz) for log in tracker.logs]

    def list_trackers(self) -> list[TrackerListing]:
        """All trackers sorted by title. An empty list means no trackers exist."""

        current = self._app.current
        return [
            TrackerListing(title=title, current=title == current)
            for title in sorted(self._app.trackers)
        ]


__all__ = ["STARTED_MESSAGE", "TrackerService"]
