"""Workspace contracts: the persisted editing state around the two drafts."""

from pydantic import Field
from typing import List, Literal, Optional
from datetime import datetime

from .base import ContractModel
from .document_contracts import DocumentDraft


class Change(ContractModel):
    """A proposed edit to a section, pending review."""
    id: str
    section_id: str
    doc_id: Optional[str] = None
    before: str
    after: str
    author: str
    timestamp: datetime = Field(default_factory=datetime.now)
    status: Literal["pending", "accepted", "rejected"] = "pending"


class Reply(ContractModel):
    id: str
    content: str
    author: str
    timestamp: datetime = Field(default_factory=datetime.now)


class Comment(ContractModel):
    id: str
    section_id: str
    content: str
    author: str
    timestamp: datetime = Field(default_factory=datetime.now)
    resolved: bool = False
    replies: List[Reply] = Field(default_factory=list)


class Version(ContractModel):
    """Snapshot of a draft at a point in time."""
    id: str
    timestamp: datetime = Field(default_factory=datetime.now)
    description: str
    draft: DocumentDraft


class Workspace(ContractModel):
    """Everything persisted under the single workspace storage key."""
    sow: Optional[DocumentDraft] = None
    proposal: Optional[DocumentDraft] = None
    versions: List[Version] = Field(default_factory=list)
    changes: List[Change] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
