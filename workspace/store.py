"""Workspace store - the application state around the two drafts.

An explicit context object: callers create one, ``load`` it, mutate it
through the methods below, and every mutation persists through the
storage backend when ``autosave`` is on.
"""

import json
import logging
from typing import Any, List, Optional, Union

from pydantic import TypeAdapter

from contracts import (
    Change,
    Comment,
    DocumentDraft,
    DocumentStatus,
    DraftPair,
    Reply,
    Section,
    Version,
    Workspace,
)
from errors import StatusTransitionError
from generator import generate_id, render_markdown
from workspace.diff import DiffResult, simple_diff
from workspace.storage import InMemoryStorage, WorkspaceStorage

logger = logging.getLogger(__name__)

# Section id -> top-level DocumentDraft field holding the same content
SECTION_FIELDS = {
    "deliverables": "deliverables",
    "timeline": "milestones",
    "assumptions": "assumptions",
    "out-of-scope": "out_of_scope",
    "pricing": "pricing",
    "risks": "risks",
    "dependencies": "dependencies",
}

_SECTION_ADAPTER = TypeAdapter(Section)


def _bullet_lines(text: str) -> List[str]:
    items = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("- "):
            line = line[2:].strip()
        if line:
            items.append(line)
    return items


def coerce_section_content(section: Section, content: Any) -> Section:
    """Rebuild ``section`` with new content shaped for its kind.

    Text sections take any string. Bullet sections also accept a
    newline-separated string (leading ``- `` markers stripped). Table and
    timeline sections also accept a JSON string.

    Raises:
        ValueError: if the content cannot be shaped for the section kind
    """
    if section.kind == "text":
        content = "" if content is None else str(content)
    elif section.kind == "bullets" and isinstance(content, str):
        content = _bullet_lines(content)
    elif section.kind in ("table", "timeline") and isinstance(content, str):
        try:
            content = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Section {section.id} expects structured content: {e}") from e

    return _SECTION_ADAPTER.validate_python({
        "id": section.id,
        "title": section.title,
        "kind": section.kind,
        "content": content,
    })


def section_text(section: Section) -> str:
    """Plain-text form of a section's content, as used in change previews."""
    if section.kind == "text":
        return section.content
    if section.kind == "bullets":
        return "\n".join(section.content)
    return json.dumps(section.to_json_dict()["content"], indent=2)


class WorkspaceStore:
    """Holds sow, proposal, versions, changes and comments for one session."""

    def __init__(self, storage: Optional[WorkspaceStorage] = None, autosave: bool = True):
        self.storage = storage or InMemoryStorage()
        self.autosave = autosave
        self.state = Workspace()

    # Lifecycle

    def load(self) -> Workspace:
        """Replace in-memory state with the persisted workspace, if any."""
        loaded = self.storage.load()
        if loaded is not None:
            self.state = loaded
        return self.state

    def save(self) -> bool:
        return self.storage.save(self.state)

    def _persist(self) -> None:
        if self.autosave:
            self.save()

    def reset(self) -> None:
        self.state = Workspace()
        self.storage.clear()

    # Documents

    @property
    def sow(self) -> Optional[DocumentDraft]:
        return self.state.sow

    @property
    def proposal(self) -> Optional[DocumentDraft]:
        return self.state.proposal

    def set_sow(self, sow: DocumentDraft) -> None:
        self.state.sow = sow
        self._persist()

    def set_proposal(self, proposal: DocumentDraft) -> None:
        self.state.proposal = proposal
        self._persist()

    def set_drafts(self, pair: DraftPair) -> None:
        self.state.sow = pair.sow
        self.state.proposal = pair.proposal
        self._persist()

    def get_document(self, doc_id: str) -> DocumentDraft:
        """Find a draft by id, or by the names ``sow`` / ``proposal``.

        Raises:
            KeyError: if no draft matches
        """
        for name, draft in (("sow", self.state.sow), ("proposal", self.state.proposal)):
            if draft is not None and doc_id in (draft.id, name):
                return draft
        raise KeyError(f"No document {doc_id!r} in workspace")

    def update_section(self, doc_id: str, section_id: str, content: Any) -> DocumentDraft:
        """Replace one section's content and mirror it into the top-level field.

        Markdown is left as generated; call :meth:`refresh_markdown` to
        re-render it.

        Raises:
            KeyError: unknown document or section
            ValueError: content does not fit the section kind
        """
        draft = self.get_document(doc_id)
        for index, section in enumerate(draft.sections):
            if section.id == section_id:
                break
        else:
            raise KeyError(f"No section {section_id!r} in document {draft.id}")

        updated = coerce_section_content(section, content)
        field_name = SECTION_FIELDS.get(section_id)
        if field_name is not None:
            field_type = DocumentDraft.model_fields[field_name].annotation
            mirrored = TypeAdapter(field_type).validate_python(updated.content)
            setattr(draft, field_name, mirrored)

        draft.sections[index] = updated

        self._persist()
        return draft

    def refresh_markdown(self, doc_id: str) -> str:
        draft = self.get_document(doc_id)
        draft.markdown = render_markdown(draft.meta, draft.sections)
        self._persist()
        return draft.markdown

    def update_status(self, doc_id: str, status: Union[DocumentStatus, str]) -> DocumentDraft:
        """Move a draft forward through Draft -> In Review -> Approved.

        Raises:
            StatusTransitionError: on a backward move
        """
        draft = self.get_document(doc_id)
        requested = DocumentStatus(status)
        if not draft.status.can_transition_to(requested):
            raise StatusTransitionError(
                f"Cannot move {draft.id} from {draft.status.value} back to {requested.value}",
                current=draft.status.value,
                requested=requested.value,
            )
        draft.status = requested
        self._persist()
        return draft

    # Versions

    def add_version(self, draft: DocumentDraft, description: str) -> Version:
        """Snapshot a draft. The snapshot does not follow later edits."""
        version = Version(
            id=generate_id("v"),
            description=description,
            draft=draft.model_copy(deep=True),
        )
        self.state.versions.append(version)
        self._persist()
        return version

    def versions_for(self, doc_id: str) -> List[Version]:
        return [v for v in self.state.versions if v.draft.id == doc_id]

    # Comments

    def _find_comment(self, comment_id: str) -> Comment:
        for comment in self.state.comments:
            if comment.id == comment_id:
                return comment
        raise KeyError(f"No comment {comment_id!r}")

    def add_comment(self, section_id: str, content: str, author: str) -> Comment:
        comment = Comment(
            id=generate_id("comment"),
            section_id=section_id,
            content=content,
            author=author,
        )
        self.state.comments.append(comment)
        self._persist()
        return comment

    def reply_to_comment(self, comment_id: str, content: str, author: str) -> Reply:
        comment = self._find_comment(comment_id)
        reply = Reply(id=generate_id("reply"), content=content, author=author)
        comment.replies.append(reply)
        self._persist()
        return reply

    def resolve_comment(self, comment_id: str) -> Comment:
        comment = self._find_comment(comment_id)
        comment.resolved = True
        self._persist()
        return comment

    def comments_for(self, section_id: str, include_resolved: bool = True) -> List[Comment]:
        return [
            c for c in self.state.comments
            if c.section_id == section_id and (include_resolved or not c.resolved)
        ]

    # Changes

    def _find_change(self, change_id: str) -> Change:
        for change in self.state.changes:
            if change.id == change_id:
                return change
        raise KeyError(f"No change {change_id!r}")

    def add_change(
        self, section_id: str, before: str, after: str, author: str, doc_id: Optional[str] = None
    ) -> Change:
        change = Change(
            id=generate_id("change"),
            section_id=section_id,
            doc_id=doc_id,
            before=before,
            after=after,
            author=author,
        )
        self.state.changes.append(change)
        self._persist()
        return change

    def propose_change(self, doc_id: str, section_id: str, after: str, author: str) -> Change:
        """Record a change whose ``before`` is the section's current text."""
        draft = self.get_document(doc_id)
        section = draft.get_section(section_id)
        if section is None:
            raise KeyError(f"No section {section_id!r} in document {draft.id}")
        return self.add_change(section_id, section_text(section), after, author, doc_id=draft.id)

    def accept_change(self, change_id: str) -> Change:
        """Apply a pending change to its document and mark it accepted.

        Changes recorded without a document apply to the SOW.
        """
        change = self._find_change(change_id)
        if change.status != "pending":
            logger.warning("Change %s is already %s", change.id, change.status)
            return change
        if change.doc_id is None and self.state.sow is None:
            raise KeyError("No SOW in workspace to apply the change to")
        target = change.doc_id or self.state.sow.id

        autosave, self.autosave = self.autosave, False
        try:
            self.update_section(target, change.section_id, change.after)
        finally:
            self.autosave = autosave

        change.status = "accepted"
        self._persist()
        return change

    def reject_change(self, change_id: str) -> Change:
        change = self._find_change(change_id)
        change.status = "rejected"
        self._persist()
        return change

    def pending_changes(self) -> List[Change]:
        return [c for c in self.state.changes if c.status == "pending"]

    def diff_change(self, change_id: str) -> DiffResult:
        change = self._find_change(change_id)
        return simple_diff(change.before, change.after)
