"""Pydantic contracts for SOWSmith.

Every handoff between intake, generation, storage and export is typed
through these contracts.
"""

from .base import ContractModel

from .discovery_contracts import (
    DEFAULT_TIMELINE_WEEKS,
    PricingModel,
    Tone,
    ClientInfo,
    ProjectInfo,
    ScopeInfo,
    Constraints,
    RiskItem,
    TimelineWindow,
    Discovery,
    PartialDiscovery,
)

from .document_contracts import (
    Deliverable,
    Milestone,
    RoleRate,
    TimeAndMaterials,
    BreakdownItem,
    FixedPrice,
    PricingTable,
    TextSection,
    BulletsSection,
    TableSection,
    TimelineSection,
    Section,
    DocumentStatus,
    OrgBrand,
    DocumentMeta,
    DraftPayload,
    DocumentDraft,
    DraftPair,
)

from .workspace_contracts import (
    Change,
    Reply,
    Comment,
    Version,
    Workspace,
)

__all__ = [
    "ContractModel",
    # Discovery
    "DEFAULT_TIMELINE_WEEKS",
    "PricingModel",
    "Tone",
    "ClientInfo",
    "ProjectInfo",
    "ScopeInfo",
    "Constraints",
    "RiskItem",
    "TimelineWindow",
    "Discovery",
    "PartialDiscovery",
    # Document
    "Deliverable",
    "Milestone",
    "RoleRate",
    "TimeAndMaterials",
    "BreakdownItem",
    "FixedPrice",
    "PricingTable",
    "TextSection",
    "BulletsSection",
    "TableSection",
    "TimelineSection",
    "Section",
    "DocumentStatus",
    "OrgBrand",
    "DocumentMeta",
    "DraftPayload",
    "DocumentDraft",
    "DraftPair",
    # Workspace
    "Change",
    "Reply",
    "Comment",
    "Version",
    "Workspace",
]
