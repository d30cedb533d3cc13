"""Error taxonomy for tracker operations."""

from __future__ import annotations


class TrackerError(RuntimeError):
    """Base class for recoverable tracker errors."""

    def __init__(self, title: str | None = None) -> None:
        super().__init__(title or self.__class__.__name__)
        self.title = title


class NoneSelectedError(TrackerError):
    """Raised when no tracker was named and no current tracker is selected."""


class TrackerNotFoundError(TrackerError):
    """Raised when an explicitly named tracker does not exist."""


class TrackerExistsError(TrackerError):
    """Raised when creating a tracker whose title is already taken."""


class AlreadyRunningError(TrackerError):
    """Raised when starting a tracker whose last log is still open."""


class NotRunningError(TrackerError):
    """Raised when stopping a tracker that has no open log."""


class NoLogsError(TrackerError):
    """Raised when stopping a tracker that has never been started."""


__all__ = [
    "AlreadyRunningError",
    "NoLogsError",
    "NoneSelectedError",
    "NotRunningError",
    "TrackerError",
    "TrackerExistsError",
    "TrackerNotFoundError",
]
