"""Template draft generator: scheduling, pricing, assembly and markdown."""

from .ids import generate_id
from .scheduler import schedule, phase_groups, weeks_per_phase
from .pricing import price, parse_fixed_price, headline_total, estimate_hours
from .markdown_renderer import (
    render_markdown,
    render_gantt,
    render_section,
    render_markdown_table,
    extract_headline,
)
from .assembler import (
    build_deliverables,
    build_sections,
    build_exec_summary,
    assemble,
    derive_proposal,
    generate_mock_drafts,
)

__all__ = [
    "generate_id",
    "schedule",
    "phase_groups",
    "weeks_per_phase",
    "price",
    "parse_fixed_price",
    "headline_total",
    "estimate_hours",
    "render_markdown",
    "render_gantt",
    "render_section",
    "render_markdown_table",
    "extract_headline",
    "build_deliverables",
    "build_sections",
    "build_exec_summary",
    "assemble",
    "derive_proposal",
    "generate_mock_drafts",
]
