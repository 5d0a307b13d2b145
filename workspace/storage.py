"""Workspace persistence backends.

The whole workspace is stored as one camelCase JSON blob under a single
key. Storage failures never reach the caller: they are logged and the
operation becomes a no-op.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from contracts import Workspace
from errors import StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "sow_workspace"


class WorkspaceStorage(ABC):
    """Load/save/clear for the single persisted workspace."""

    def load(self) -> Optional[Workspace]:
        """Return the stored workspace, or None if absent or unreadable."""
        try:
            raw = self._read()
            if raw is None:
                return None
            return Workspace.model_validate(json.loads(raw))
        except (StorageError, json.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to load workspace: %s", e)
            return None

    def save(self, workspace: Workspace) -> bool:
        """Persist the workspace. Returns False if the write failed."""
        try:
            self._write(json.dumps(workspace.to_json_dict(), indent=2))
            return True
        except StorageError as e:
            logger.error("Failed to save workspace: %s", e)
            return False

    def clear(self) -> None:
        try:
            self._delete()
        except StorageError as e:
            logger.error("Failed to clear workspace: %s", e)

    @abstractmethod
    def _read(self) -> Optional[str]:
        pass

    @abstractmethod
    def _write(self, data: str) -> None:
        pass

    @abstractmethod
    def _delete(self) -> None:
        pass


class JsonFileStorage(WorkspaceStorage):
    """Stores the blob at ``<directory>/sow_workspace.json``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.path = self.directory / f"{STORAGE_KEY}.json"

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}", path=str(self.path)) from e

    def _write(self, data: str) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self.path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}", path=str(self.path)) from e

    def _delete(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot delete {self.path}: {e}", path=str(self.path)) from e


class InMemoryStorage(WorkspaceStorage):
    """Keeps the serialized blob in a dict; used by tests and one-shot runs."""

    def __init__(self):
        self.blobs: Dict[str, str] = {}

    def _read(self) -> Optional[str]:
        return self.blobs.get(STORAGE_KEY)

    def _write(self, data: str) -> None:
        self.blobs[STORAGE_KEY] = data

    def _delete(self) -> None:
        self.blobs.pop(STORAGE_KEY, None)
