"""JSON file persistence for the application state."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ..model import App

logger = logging.getLogger(__name__)


class StateStoreError(RuntimeError):
    """Raised when the state file cannot be read, parsed or written."""


class StateStore:
    """Load and save the whole :class:`App` as a single JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> App:
        """Return the persisted state, or an empty one if nothing was saved yet."""

        if not self._path.exists():
            logger.debug("No state file at %s, starting empty", self._path)
            return App()

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StateStoreError(f"Failed to read state file {self._path}: {exc}") from exc

        if not raw.strip():
            logger.debug("State file %s is empty, starting empty", self._path)
            return App()

        try:
            app = App.model_validate_json(raw)
        except ValidationError as exc:
            raise StateStoreError(f"Invalid state file {self._path}: {exc}") from exc

        logger.debug(
            "Loaded state",
            extra={"path": str(self._path), "trackers": len(app.trackers)},
        )
        return app

    def save(self, app: App) -> None:
        """Write the state atomically, replacing any previous snapshot."""

        payload = app.model_dump_json(indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StateStoreError(f"Failed to write state file {self._path}: {exc}") from exc

        logger.debug(
            "Saved state",
            extra={"path": str(self._path), "trackers": len(app.trackers)},
        )


__all__ = ["StateStore", "StateStoreError"]
