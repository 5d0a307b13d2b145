"""Discovery contracts: the structured intake record for a client engagement."""

from pydantic import Field, ValidationError
from typing import Any, List, Optional
from enum import Enum

from .base import ContractModel
from errors import DiscoveryValidationError


DEFAULT_TIMELINE_WEEKS = 12


class PricingModel(str, Enum):
    """Commercial model for the engagement."""
    TM = "TM"
    FIXED = "Fixed"
    HYBRID = "Hybrid"

    @classmethod
    def _missing_(cls, value: Any):
        if isinstance(value, str):
            key = value.strip().lower().replace(" ", "").replace("-", "")
            aliases = {
                "tm": cls.TM,
                "t&m": cls.TM,
                "timeandmaterials": cls.TM,
                "time&materials": cls.TM,
                "fixed": cls.FIXED,
                "fixedprice": cls.FIXED,
                "hybrid": cls.HYBRID,
            }
            return aliases.get(key)
        return None


class Tone(str, Enum):
    """Writing tone requested for the documents."""
    FORMAL = "formal"
    CONSULTATIVE = "consultative"
    FRIENDLY = "friendly"


class ClientInfo(ContractModel):
    """Who the engagement is for."""
    name: str = Field(..., description="Client/company name")
    industry: str = Field(..., description="Client industry or sector")
    region: Optional[str] = Field(None)
    contact: Optional[str] = Field(None, description="Primary contact, e.g. 'Sarah Chen, VP Product'")


class ProjectInfo(ContractModel):
    """What the engagement should achieve. List order drives bullet order."""
    title: str = Field(...)
    context: str = Field(..., description="Background and current situation")
    objectives: List[str] = Field(...)
    success_criteria: List[str] = Field(...)


class ScopeInfo(ContractModel):
    """Work streams in delivery order."""
    modules: List[str] = Field(..., description="Scope modules; order drives deliverables and milestone grouping")
    custom_notes: Optional[str] = Field(None)


class Constraints(ContractModel):
    """Hard constraints identified during discovery."""
    timeline_weeks: Optional[int] = Field(None, gt=0, description="Engagement length in weeks (default 12)")
    budget_range: Optional[str] = Field(None, description="Free-text budget, e.g. '$150,000 - $220,000'")
    compliance: Optional[List[str]] = Field(None)


class RiskItem(ContractModel):
    """A project risk with mitigation."""
    description: str = Field(...)
    mitigation: str = Field(...)


class TimelineWindow(ContractModel):
    """Optional calendar window for the engagement."""
    start: Optional[str] = Field(None)
    end: Optional[str] = Field(None)


class Discovery(ContractModel):
    """Validated discovery record. The only input of the draft generator."""
    client: ClientInfo = Field(...)
    project: ProjectInfo = Field(...)
    scope: ScopeInfo = Field(...)
    constraints: Optional[Constraints] = Field(None)
    risks: Optional[List[RiskItem]] = Field(None)
    pricing_preference: Optional[PricingModel] = Field(None)
    timeline_window: Optional[TimelineWindow] = Field(None)
    tone: Optional[Tone] = Field(None)

    @property
    def timeline_weeks(self) -> int:
        if self.constraints and self.constraints.timeline_weeks:
            return self.constraints.timeline_weeks
        return DEFAULT_TIMELINE_WEEKS

    @property
    def pricing_model(self) -> PricingModel:
        return self.pricing_preference or PricingModel.TM

    @property
    def budget_range(self) -> Optional[str]:
        return self.constraints.budget_range if self.constraints else None


class PartialDiscovery(ContractModel):
    """Best-effort discovery produced by heuristic extraction.

    Every field is optional; callers merge and validate with
    :meth:`to_discovery` before generating anything from it.
    """
    client: Optional[ClientInfo] = None
    project: Optional[ProjectInfo] = None
    scope: Optional[ScopeInfo] = None
    constraints: Optional[Constraints] = None
    risks: Optional[List[RiskItem]] = None
    pricing_preference: Optional[PricingModel] = None
    timeline_window: Optional[TimelineWindow] = None
    tone: Optional[Tone] = None

    def to_discovery(self, **overrides: Any) -> Discovery:
        """Merge top-level overrides and validate into a full Discovery.

        Raises:
            DiscoveryValidationError: if required fields are still missing
        """
        data = self.model_dump(exclude_none=True)
        for key, value in overrides.items():
            if isinstance(value, ContractModel):
                value = value.model_dump(exclude_none=True)
            data[key] = value
        try:
            return Discovery.model_validate(data)
        except ValidationError as e:
            raise DiscoveryValidationError.from_pydantic(e) from e
