"""Fixed vocabulary used by the template generator.

These lists are not derived from discovery content.
"""

from contracts import PricingModel, RiskItem


ASSUMPTIONS = (
    "Client provides timely access to systems, data, and stakeholders",
    "Existing technical infrastructure is documented and accessible",
    "Key stakeholders available for weekly sync meetings",
    "Client has internal resources for UAT and acceptance testing",
    "No major scope changes after kickoff; change requests via formal process",
    "Compliance requirements are fully documented upfront",
)

OUT_OF_SCOPE = (
    "Third-party vendor management or procurement",
    "Hardware infrastructure or cloud account setup",
    "Ongoing maintenance and support post-launch (available separately)",
    "Training for end-users beyond admin/power users",
    "Data migration from legacy systems",
    "Integration with systems not identified in discovery",
    "Custom reporting beyond specified dashboards",
    "Mobile app development (web-responsive only)",
)

DEPENDENCIES = (
    "Client provides API documentation and sandbox access by Week 1",
    "Design approval within 5 business days of presentation",
    "Stakeholder availability for weekly checkpoints",
    "UAT environment provisioned by start of testing phase",
)

FALLBACK_RISK = RiskItem(
    description="Technical complexity may require additional discovery",
    mitigation="Allocate spike weeks for unknowns; maintain contingency buffer",
)

# Deliverable owners rotate over this list by position
OWNER_ROLE_ROTATION = ("Senior Consultant", "Engineer", "Designer")

PRICING_MODEL_LABELS = {
    PricingModel.TM: "time & materials",
    PricingModel.FIXED: "fixed-price",
    PricingModel.HYBRID: "hybrid",
}

DELIVERABLE_ACCEPTANCE = (
    "All {module} requirements met",
    "Documentation provided",
    "Stakeholder sign-off obtained",
)
