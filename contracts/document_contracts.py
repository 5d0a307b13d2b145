"""Document contracts: the generated SOW/Proposal draft and its parts."""

from pydantic import Field, model_validator
from typing import Annotated, Dict, List, Literal, Optional, Union
from datetime import datetime
from enum import Enum

from .base import ContractModel
from .discovery_contracts import PricingModel, RiskItem, Tone


class Deliverable(ContractModel):
    """A deliverable derived one-to-one from a scope module."""
    id: str = Field(..., description="Positional tag, e.g. 'd1'")
    title: str = Field(...)
    description: str = Field(...)
    acceptance_criteria: List[str] = Field(default_factory=list)
    owner_role: Optional[str] = Field(None)


class Milestone(ContractModel):
    """A week-bounded phase of the engagement timeline."""
    id: str = Field(...)
    title: str = Field(...)
    start_week: int = Field(..., ge=1)
    end_week: int = Field(..., ge=1)
    dependencies: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_week_order(self) -> "Milestone":
        if self.end_week < self.start_week:
            raise ValueError(
                f"Milestone {self.id} ends (week {self.end_week}) before it starts (week {self.start_week})"
            )
        return self


class RoleRate(ContractModel):
    role: str = Field(...)
    rate: float = Field(..., ge=0)
    currency: str = Field(default="USD")


class TimeAndMaterials(ContractModel):
    """Rate card plus estimated hours per role."""
    roles: List[RoleRate] = Field(default_factory=list)
    est_hours_by_role: Dict[str, int] = Field(default_factory=dict)


class BreakdownItem(ContractModel):
    item: str = Field(...)
    amount: float = Field(..., ge=0)


class FixedPrice(ContractModel):
    total: float = Field(..., ge=0)
    breakdown: Optional[List[BreakdownItem]] = Field(None)


class PricingTable(ContractModel):
    """Pricing for the engagement.

    ``model`` says which block the reader should foreground; both ``tm`` and
    ``fixed`` may be populated whatever the model.
    """
    model: PricingModel = Field(...)
    tm: Optional[TimeAndMaterials] = Field(None)
    fixed: Optional[FixedPrice] = Field(None)
    notes: Optional[str] = Field(None)


# Sections are a tagged union on ``kind``; each kind has exactly one payload shape.

class TextSection(ContractModel):
    id: str
    title: str
    kind: Literal["text"] = "text"
    content: str = ""


class BulletsSection(ContractModel):
    id: str
    title: str
    kind: Literal["bullets"] = "bullets"
    content: List[str] = Field(default_factory=list)


class TableSection(ContractModel):
    id: str
    title: str
    kind: Literal["table"] = "table"
    content: Union[PricingTable, List[Deliverable], List[RiskItem]]


class TimelineSection(ContractModel):
    id: str
    title: str
    kind: Literal["timeline"] = "timeline"
    content: List[Milestone] = Field(default_factory=list)


Section = Annotated[
    Union[TextSection, BulletsSection, TableSection, TimelineSection],
    Field(discriminator="kind"),
]


class DocumentStatus(str, Enum):
    """Review lifecycle. Moves forward only."""
    DRAFT = "Draft"
    IN_REVIEW = "In Review"
    APPROVED = "Approved"

    @property
    def rank(self) -> int:
        return list(DocumentStatus).index(self)

    def can_transition_to(self, other: "DocumentStatus") -> bool:
        return other.rank >= self.rank


class OrgBrand(ContractModel):
    """Organisation branding applied to exports."""
    name: str = Field(...)
    logo_url: Optional[str] = Field(None)
    primary_color: Optional[str] = Field(None)
    secondary_color: Optional[str] = Field(None)
    tone: Optional[Tone] = Field(None)


class DocumentMeta(ContractModel):
    title: str = Field(...)
    client_name: str = Field(...)
    created_at: datetime = Field(default_factory=datetime.now)
    industry: Optional[str] = Field(None, description="Kept so the markdown header can be rebuilt from the draft")


class DraftPayload(ContractModel):
    """Draft content without identity: the shape an LLM backend must return."""
    meta: DocumentMeta = Field(...)
    sections: List[Section] = Field(default_factory=list)
    deliverables: List[Deliverable] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)
    pricing: PricingTable = Field(...)
    assumptions: List[str] = Field(default_factory=list)
    out_of_scope: List[str] = Field(default_factory=list)
    risks: List[RiskItem] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    markdown: str = Field(default="")


class DocumentDraft(DraftPayload):
    """Aggregate root for a generated SOW or Proposal.

    ``sections`` is the editable outline and a view over the same deliverables,
    milestones and pricing held in the top-level fields.
    """
    id: str = Field(...)
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT)
    brand: Optional[OrgBrand] = Field(None)

    def get_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None


class DraftPair(ContractModel):
    """The two documents produced by one generation call."""
    sow: DocumentDraft = Field(...)
    proposal: DocumentDraft = Field(...)
