"""Tracker domain model exports."""

from .entities import App, Clock, Log, Tracker, utc_now

__all__ = ["App", "Clock", "Log", "Tracker", "utc_now"]
