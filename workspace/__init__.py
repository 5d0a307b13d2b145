"""Workspace: persisted editing state for the generated drafts."""

from .diff import DiffResult, simple_diff, format_diff
from .storage import STORAGE_KEY, WorkspaceStorage, JsonFileStorage, InMemoryStorage
from .store import WorkspaceStore, SECTION_FIELDS, coerce_section_content, section_text

__all__ = [
    "DiffResult",
    "simple_diff",
    "format_diff",
    "STORAGE_KEY",
    "WorkspaceStorage",
    "JsonFileStorage",
    "InMemoryStorage",
    "WorkspaceStore",
    "SECTION_FIELDS",
    "coerce_section_content",
    "section_text",
]
