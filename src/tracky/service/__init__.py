"""Application service for tracker operations."""

from .results import StatusReport, StopResult, TrackerListing
from .tracker_service import STARTED_MESSAGE, TrackerService

__all__ = [
    "STARTED_MESSAGE",
    "StatusReport",
    "StopResult",
    "TrackerListing",
    "TrackerService",
]
