"""Tracky: a personal time tracker for the command line."""

__version__ = "0.3.0"

from .errors import TrackerError
from .model import App, Log, Tracker
from .service import TrackerService

__all__ = ["App", "Log", "Tracker", "TrackerError", "TrackerService", "__version__"]
