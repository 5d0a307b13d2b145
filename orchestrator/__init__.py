"""Orchestrator module for draft generation."""

from .draft_manager import DraftManager, generate_drafts

__all__ = [
    "DraftManager",
    "generate_drafts",
]
