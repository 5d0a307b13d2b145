"""Plain-text and markdown export."""

import re

from contracts import DocumentDraft

_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9]")


def export_filename(draft: DocumentDraft, suffix: str) -> str:
    """Download name: title with every non-alphanumeric replaced by ``_``."""
    return f"{_UNSAFE_FILENAME_RE.sub('_', draft.meta.title)}.{suffix.lstrip('.')}"


def export_text(draft: DocumentDraft) -> str:
    title = draft.meta.title
    return (
        f"{title}\n"
        f"{'=' * len(title)}\n\n"
        f"Client: {draft.meta.client_name}\n"
        f"Date: {draft.meta.created_at.strftime('%Y-%m-%d')}\n\n"
        f"{draft.markdown}"
    )


def export_markdown(draft: DocumentDraft) -> str:
    return draft.markdown
