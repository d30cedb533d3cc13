"""Value objects returned by :class:`~tracky.service.TrackerService`."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from ..formatting import format_duration


@dataclass(slots=True)
class StopResult:
    """Outcome of stopping a tracker."""

    title: str
    note: str
    duration: timedelta

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration)


@dataclass(slots=True)
class StatusReport:
    """Summary of a tracker and its most recent sessions."""

    title: str
    running: bool
    lines: list[str] = field(default_factory=list)

    @property
    def state(self) -> str:
        return "running" if self.running else "idle"

    def render(self) -> str:
        header = f"{self.title} ({self.state})"
        return "\n".join([header, *(f"  {line}" for line in self.lines)])


@dataclass(slots=True)
class TrackerListing:
    title: str
    current: bool

    def render(self) -> str:
        marker = ">" if self.current else " "
        return f"{marker} {self.title}"


__all__ = ["StatusReport", "StopResult", "TrackerListing"]
