"""Printable HTML export.

``markdown_to_html`` is a deliberately partial converter that handles only
what the renderer emits: ``#``/``##``/``###`` headings, ``**bold**``,
``*italic*``, ``- `` bullets, fenced code, pipe tables, paragraphs and
line breaks. Anything else passes through as paragraph text.
"""

import html
import re
from typing import List, Optional

from contracts import DocumentDraft, OrgBrand

_FENCE_RE = re.compile(r"```[^\n]*\n?(.*?)```", re.DOTALL)
_PLACEHOLDER_RE = re.compile(r"^\x00(\d+)\x00$")
_HEADING_RE = re.compile(r"^(#{1,3}) (.*)$")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_TABLE_SEPARATOR_RE = re.compile(r"^\|?[\s:|-]*-[\s:|-]*$")

DEFAULT_ACCENT = "#4f46e5"


def render_inline(text: str) -> str:
    """Escape HTML, then apply bold and italic."""
    text = html.escape(text, quote=False)
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    return _ITALIC_RE.sub(r"<em>\1</em>", text)


def _table_cells(line: str) -> List[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def _is_table_start(lines: List[str], i: int) -> bool:
    return (
        lines[i].lstrip().startswith("|")
        and i + 1 < len(lines)
        and bool(_TABLE_SEPARATOR_RE.match(lines[i + 1].strip()))
    )


def _render_table(rows: List[str]) -> str:
    header, body = rows[0], rows[1:]
    parts = ["<table>", "<thead><tr>"]
    parts += [f"<th>{render_inline(cell)}</th>" for cell in _table_cells(header)]
    parts.append("</tr></thead>")
    parts.append("<tbody>")
    for row in body:
        cells = "".join(f"<td>{render_inline(cell)}</td>" for cell in _table_cells(row))
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</tbody>")
    parts.append("</table>")
    return "".join(parts)


def markdown_to_html(markdown: str) -> str:
    """Convert renderer markdown to an HTML fragment.

    Rules:
      * fenced code becomes ``<pre>`` with its content escaped and untouched
      * a ``|`` line followed by a separator line starts a table; the first
        line is the header, the separator is skipped, following ``|`` lines
        are rows
      * ``#``, ``##``, ``###`` lines become headings
      * consecutive ``- `` lines become one ``<ul>``
      * other lines form paragraphs split on blank lines; single newlines
        inside a paragraph become ``<br>``
    """
    code_blocks: List[str] = []

    def stash(match):
        code_blocks.append(f"<pre>{html.escape(match.group(1).rstrip(chr(10)), quote=False)}</pre>")
        return f"\n\x00{len(code_blocks) - 1}\x00\n"

    lines = _FENCE_RE.sub(stash, markdown).split("\n")

    blocks: List[str] = []
    paragraph: List[str] = []
    list_items: List[str] = []

    def flush_paragraph():
        if paragraph:
            blocks.append("<p>" + "<br>".join(paragraph) + "</p>")
            paragraph.clear()

    def flush_list():
        if list_items:
            blocks.append("<ul>" + "".join(list_items) + "</ul>")
            list_items.clear()

    i = 0
    while i < len(lines):
        line = lines[i].rstrip()
        stripped = line.strip()

        if line.startswith("- "):
            flush_paragraph()
            list_items.append(f"<li>{render_inline(line[2:])}</li>")
            i += 1
            continue
        flush_list()

        if not stripped:
            flush_paragraph()
            i += 1
            continue

        placeholder = _PLACEHOLDER_RE.match(stripped)
        if placeholder:
            flush_paragraph()
            blocks.append(code_blocks[int(placeholder.group(1))])
            i += 1
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            flush_paragraph()
            level = len(heading.group(1))
            blocks.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
            i += 1
            continue

        if _is_table_start(lines, i):
            flush_paragraph()
            rows = [lines[i]]
            i += 2
            while i < len(lines) and lines[i].lstrip().startswith("|"):
                rows.append(lines[i])
                i += 1
            blocks.append(_render_table(rows))
            continue

        paragraph.append(render_inline(line))
        i += 1

    flush_list()
    flush_paragraph()
    return "\n".join(blocks)


def render_html_document(draft: DocumentDraft, brand: Optional[OrgBrand] = None) -> str:
    """A standalone printable page: cover block, then the draft markdown.

    Save from a browser with "print to PDF" for a PDF copy.
    """
    brand = brand or draft.brand
    accent = (brand.primary_color if brand and brand.primary_color else None) or DEFAULT_ACCENT
    title = html.escape(draft.meta.title)
    client = html.escape(draft.meta.client_name)
    date = draft.meta.created_at.strftime("%Y-%m-%d")
    prepared_by = f'<p class="meta">Prepared by {html.escape(brand.name)}</p>' if brand else ""

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    @page {{ margin: 1in; }}
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; max-width: 800px; margin: 40px auto; line-height: 1.6; color: #1a1a1a; }}
    .cover {{ text-align: center; padding: 120px 0; page-break-after: always; border-bottom: 3px solid {accent}; }}
    .cover h1 {{ font-size: 36px; margin-bottom: 24px; }}
    .meta {{ color: #666; font-size: 14px; }}
    h1 {{ font-size: 28px; margin: 40px 0 16px; border-bottom: 2px solid {accent}; padding-bottom: 8px; }}
    h2 {{ font-size: 22px; margin: 32px 0 12px; color: #2a2a2a; }}
    h3 {{ font-size: 18px; margin: 24px 0 8px; color: #3a3a3a; }}
    table {{ width: 100%; border-collapse: collapse; margin: 20px 0; font-size: 14px; }}
    th, td {{ border: 1px solid #ddd; padding: 10px; text-align: left; }}
    th {{ background-color: #f5f5f5; font-weight: 600; }}
    pre {{ background: #f5f5f5; padding: 16px; border-radius: 4px; overflow-x: auto; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="cover">
    <h1>{title}</h1>
    <p class="meta"><strong>Client:</strong> {client}</p>
    <p class="meta"><strong>Date:</strong> {date}</p>
    {prepared_by}
  </div>
  <div class="content">
{markdown_to_html(draft.markdown)}
  </div>
</body>
</html>
"""
