"""Persistence of the application state between invocations."""

from .json_store import StateStore, StateStoreError

__all__ = ["StateStore", "StateStoreError"]
