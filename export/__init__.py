"""Document export: plain text, markdown and printable HTML."""

from pathlib import Path
from typing import Union

from contracts import DocumentDraft
from .text_export import export_text, export_markdown, export_filename
from .html_export import markdown_to_html, render_html_document

EXPORTERS = {
    "txt": export_text,
    "md": export_markdown,
    "html": render_html_document,
}


def export_document(draft: DocumentDraft, fmt: str, output_dir: Union[str, Path]) -> Path:
    """Write ``draft`` in ``fmt`` (txt, md, html) and return the file path."""
    if fmt not in EXPORTERS:
        raise ValueError(f"Unknown export format: {fmt}. Available: {list(EXPORTERS)}")
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(draft, fmt)
    path.write_text(EXPORTERS[fmt](draft), encoding="utf-8")
    return path


__all__ = [
    "EXPORTERS",
    "export_document",
    "export_text",
    "export_markdown",
    "export_filename",
    "markdown_to_html",
    "render_html_document",
]
