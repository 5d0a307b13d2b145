"""Markdown renderer for document drafts.

Serializes a draft's meta and sections into one markdown document. The
output follows section order, so the markdown is a projection of the
outline. Timelines also get a fixed-width ASCII Gantt chart.
"""

import re
from typing import List, Optional, Sequence, Tuple

from contracts import (
    Deliverable,
    DocumentMeta,
    Milestone,
    PricingTable,
    RiskItem,
    Section,
)


GANTT_BLOCK = "███ "
GANTT_GAP = "    "
GANTT_TITLE_WIDTH = 7
GANTT_LABEL = "Week:  "


def format_amount(value: float) -> str:
    """Thousands-separated number without a trailing ``.0`` for whole values."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def render_markdown_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Pipe-delimited table with a header separator row."""
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(str(cell) for cell in row) + " |")
    return "\n".join(lines) + "\n"


def render_bullets(items: Sequence[str]) -> str:
    return "".join(f"- {item}\n" for item in items)


def render_gantt(milestones: Sequence[Milestone]) -> str:
    """Fixed-width text chart, one 4-character column per week.

    Header: ``Week:  `` then each week number right-aligned in 3 characters
    plus a space. Rows: the milestone title padded or cut to 7 characters,
    a space, then ``"███ "`` for weeks inside ``[start_week, end_week]`` and
    four spaces otherwise.
    """
    max_week = max((m.end_week for m in milestones), default=0)
    weeks = range(1, max_week + 1)

    lines = [
        GANTT_LABEL + "".join(f"{w:>3} " for w in weeks),
        " " * len(GANTT_LABEL) + "----" * max_week,
    ]
    for m in milestones:
        label = m.title.ljust(GANTT_TITLE_WIDTH)[:GANTT_TITLE_WIDTH]
        cells = "".join(
            GANTT_BLOCK if m.start_week <= w <= m.end_week else GANTT_GAP
            for w in weeks
        )
        lines.append(f"{label} {cells}")
    return "\n".join(lines) + "\n"


def _render_timeline(milestones: Sequence[Milestone]) -> str:
    md = "".join(f"- **{m.title}** (Weeks {m.start_week}-{m.end_week})\n" for m in milestones)
    md += "\n### Gantt Chart (ASCII)\n\n"
    md += "```\n" + render_gantt(milestones) + "```\n"
    return md


def _render_pricing(pricing: PricingTable) -> str:
    md = f"**Model:** {pricing.model.value}  \n\n"

    if pricing.tm:
        md += "### Time & Materials Rates\n\n"
        rows = [
            (r.role, f"${format_amount(r.rate)}/{r.currency}", pricing.tm.est_hours_by_role.get(r.role, 0))
            for r in pricing.tm.roles
        ]
        md += render_markdown_table(("Role", "Rate", "Est. Hours"), rows) + "\n"

    if pricing.fixed:
        md += f"### Fixed Price: ${format_amount(pricing.fixed.total)}\n\n"
        if pricing.fixed.breakdown:
            rows = [(b.item, f"${format_amount(b.amount)}") for b in pricing.fixed.breakdown]
            md += render_markdown_table(("Item", "Amount"), rows) + "\n"

    if pricing.notes:
        md += f"**Notes:** {pricing.notes}\n"
    return md


def _render_table(content) -> str:
    if isinstance(content, PricingTable):
        return _render_pricing(content)
    if content and isinstance(content[0], Deliverable):
        rows = [(d.title, d.description, d.owner_role or "TBD") for d in content]
        return render_markdown_table(("Title", "Description", "Owner"), rows)
    if content and isinstance(content[0], RiskItem):
        rows = [(r.description, r.mitigation) for r in content]
        return render_markdown_table(("Risk", "Mitigation"), rows)
    return ""


def render_section(section: Section) -> str:
    """``## title`` followed by the body for the section's kind."""
    md = f"## {section.title}\n\n"
    if section.kind == "text":
        md += section.content.rstrip("\n") + "\n"
    elif section.kind == "bullets":
        md += render_bullets(section.content)
    elif section.kind == "timeline":
        md += _render_timeline(section.content)
    elif section.kind == "table":
        md += _render_table(section.content)
    return md + "\n"


def render_header(meta: DocumentMeta) -> str:
    md = f"# {meta.title}\n\n"
    md += f"**Client:** {meta.client_name}  \n"
    if meta.industry:
        md += f"**Industry:** {meta.industry}  \n"
    md += f"**Date:** {meta.created_at.strftime('%Y-%m-%d')}  \n\n"
    return md


def render_markdown(meta: DocumentMeta, sections: Sequence[Section]) -> str:
    """Render a full document: header, then every section in order."""
    return render_header(meta) + "".join(render_section(s) for s in sections)


_TITLE_RE = re.compile(r"^#\s+(.+?)\s*$", re.MULTILINE)
_CLIENT_RE = re.compile(r"^\*\*Client:\*\*\s+(.+?)\s*$", re.MULTILINE)


def extract_headline(markdown: str) -> Tuple[Optional[str], Optional[str]]:
    """Read ``(title, client name)`` back from a rendered document."""
    title = _TITLE_RE.search(markdown)
    client = _CLIENT_RE.search(markdown)
    return (
        title.group(1) if title else None,
        client.group(1) if client else None,
    )
