"""Document assembler - the template generator.

Composes a Discovery, its schedule and its pricing with fixed boilerplate
into a fully populated SOW draft, then clones it into the companion
Proposal. Nothing here calls out to an LLM.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from contracts import (
    Discovery,
    Deliverable,
    Milestone,
    PricingTable,
    RiskItem,
    Section,
    TextSection,
    BulletsSection,
    TableSection,
    TimelineSection,
    DocumentDraft,
    DocumentMeta,
    DocumentStatus,
    DraftPair,
    OrgBrand,
)
from generator import boilerplate
from generator.ids import generate_id
from generator.markdown_renderer import render_markdown
from generator.pricing import price
from generator.scheduler import schedule


SOW_TITLE_PREFIX = "Statement of Work"
PROPOSAL_TITLE_PREFIX = "Proposal"


def build_deliverables(modules: Sequence[str]) -> List[Deliverable]:
    """One deliverable per scope module, in module order."""
    rotation = boilerplate.OWNER_ROLE_ROTATION
    deliverables = []
    for i, module in enumerate(modules):
        lowered = module.lower()
        deliverables.append(
            Deliverable(
                id=f"d{i + 1}",
                title=module,
                description=f"Complete {lowered} with documentation and quality assurance",
                acceptance_criteria=[
                    criterion.format(module=lowered)
                    for criterion in boilerplate.DELIVERABLE_ACCEPTANCE
                ],
                owner_role=rotation[i % len(rotation)],
            )
        )
    return deliverables


def resolve_risks(discovery: Discovery) -> List[RiskItem]:
    """Discovery risks, or the single generic risk when none were given."""
    if discovery.risks:
        return list(discovery.risks)
    return [boilerplate.FALLBACK_RISK.model_copy()]


def build_exec_summary(discovery: Discovery) -> str:
    project = discovery.project
    label = boilerplate.PRICING_MODEL_LABELS[discovery.pricing_model]
    focus = " and ".join(project.objectives[:2])
    outcomes = ", ".join(project.success_criteria[:2])

    return (
        f"This Statement of Work outlines our proposed approach to deliver **{project.title}** "
        f"for {discovery.client.name}. Our engagement will span **{discovery.timeline_weeks} weeks** "
        f"and focus on {focus}.\n\n"
        f"We will leverage a {label} model to ensure flexibility and value alignment. "
        f"Our team brings deep expertise in {discovery.client.industry} and a proven track record "
        f"of delivering {len(discovery.scope.modules)}+ work streams on time and within budget.\n\n"
        f"**Key outcomes:** {outcomes}."
    )


def build_sections(
    discovery: Discovery,
    deliverables: List[Deliverable],
    milestones: List[Milestone],
    pricing: PricingTable,
    assumptions: List[str],
    out_of_scope: List[str],
    risks: List[RiskItem],
    dependencies: List[str],
) -> List[Section]:
    """The editable outline, in fixed order.

    Table and timeline sections hold the same objects passed in, so they
    match the draft's top-level fields at creation time.
    """
    return [
        TextSection(id="exec-summary", title="Executive Summary", content=build_exec_summary(discovery)),
        BulletsSection(id="objectives", title="Objectives", content=list(discovery.project.objectives)),
        BulletsSection(id="scope", title="Scope of Work", content=list(discovery.scope.modules)),
        TableSection(id="deliverables", title="Deliverables", content=deliverables),
        TimelineSection(id="timeline", title="Timeline & Milestones", content=milestones),
        BulletsSection(id="assumptions", title="Assumptions", content=assumptions),
        BulletsSection(id="out-of-scope", title="Out of Scope", content=out_of_scope),
        TableSection(id="pricing", title="Pricing", content=pricing),
        TableSection(id="risks", title="Risks & Mitigations", content=risks),
        BulletsSection(id="dependencies", title="Dependencies", content=dependencies),
        BulletsSection(id="acceptance", title="Acceptance Criteria", content=list(discovery.project.success_criteria)),
    ]


def assemble(
    discovery: Discovery,
    milestones: List[Milestone],
    pricing: PricingTable,
    deliverables: List[Deliverable],
    brand: Optional[OrgBrand] = None,
    created_at: Optional[datetime] = None,
) -> DocumentDraft:
    """Build the SOW draft, markdown included.

    Args:
        discovery: Validated discovery record
        milestones: Output of the scheduler
        pricing: Output of the pricing calculator
        deliverables: One per scope module
        brand: Optional organisation brand
        created_at: Creation time (defaults to now)

    Returns:
        DocumentDraft with status Draft and a fresh id
    """
    assumptions = list(boilerplate.ASSUMPTIONS)
    out_of_scope = list(boilerplate.OUT_OF_SCOPE)
    dependencies = list(boilerplate.DEPENDENCIES)
    risks = resolve_risks(discovery)

    meta = DocumentMeta(
        title=f"{SOW_TITLE_PREFIX}: {discovery.project.title}",
        client_name=discovery.client.name,
        created_at=created_at or datetime.now(),
        industry=discovery.client.industry,
    )
    sections = build_sections(
        discovery, deliverables, milestones, pricing,
        assumptions, out_of_scope, risks, dependencies,
    )

    return DocumentDraft(
        id=generate_id("doc"),
        status=DocumentStatus.DRAFT,
        brand=brand,
        meta=meta,
        sections=sections,
        deliverables=deliverables,
        milestones=milestones,
        pricing=pricing,
        assumptions=assumptions,
        out_of_scope=out_of_scope,
        risks=risks,
        dependencies=dependencies,
        markdown=render_markdown(meta, sections),
    )


def derive_proposal(sow: DocumentDraft, project_title: Optional[str] = None) -> DocumentDraft:
    """Clone a SOW into an independently editable Proposal.

    Only ``id`` and ``meta.title`` differ from the source.
    """
    if project_title:
        title = f"{PROPOSAL_TITLE_PREFIX}: {project_title}"
    else:
        title = sow.meta.title.replace(SOW_TITLE_PREFIX, PROPOSAL_TITLE_PREFIX, 1)

    proposal = sow.model_copy(deep=True)
    proposal.id = generate_id("doc")
    proposal.meta.title = title
    return proposal


def generate_mock_drafts(discovery: Discovery, brand: Optional[OrgBrand] = None) -> DraftPair:
    """Deterministic SOW + Proposal for a discovery record.

    Safe for any structurally valid Discovery, including empty lists and
    missing optional blocks.
    """
    timeline_weeks = discovery.timeline_weeks
    milestones = schedule(discovery.scope.modules, timeline_weeks)
    pricing = price(discovery.pricing_model, timeline_weeks, discovery.budget_range)
    deliverables = build_deliverables(discovery.scope.modules)

    sow = assemble(discovery, milestones, pricing, deliverables, brand=brand)
    proposal = derive_proposal(sow, discovery.project.title)
    return DraftPair(sow=sow, proposal=proposal)
