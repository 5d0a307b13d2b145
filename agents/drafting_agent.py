"""Drafting Agent - LLM-written SOW content.

Asks the configured model for a complete draft (sections, top-level
fields and markdown) shaped like the template generator's output.
"""

from typing import Optional

from agents.base_agent import BaseAgent
from contracts import Discovery, DraftPayload, DEFAULT_TIMELINE_WEEKS
from providers import LLMProvider


def _joined(items, sep: str = "; ", empty: str = "None specified") -> str:
    return sep.join(items) if items else empty


class DraftingAgent(BaseAgent):
    """Generates a SOW draft payload from a validated Discovery."""

    SYSTEM_PROMPT = """You are an expert consultant generating a Statement of Work (SOW) and Proposal.

Your response MUST be ONLY a valid JSON object. Do not include surrounding prose,
explanations or markdown formatting.
"""

    def __init__(
        self,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        llm_provider: Optional[LLMProvider] = None,
    ):
        super().__init__(
            role="drafting",
            system_prompt=self.SYSTEM_PROMPT,
            output_schema=DraftPayload,
            model=model,
            provider=provider,
            llm_provider=llm_provider,
        )

    def get_task_description(self) -> str:
        return "Draft a Statement of Work from discovery inputs"

    def build_system_prompt(self, discovery: Discovery) -> str:
        """System prompt carrying every discovery field the draft depends on."""
        tone = discovery.tone.value if discovery.tone else "consultative"
        pricing_pref = discovery.pricing_model.value
        constraints = discovery.constraints
        weeks = discovery.timeline_weeks or DEFAULT_TIMELINE_WEEKS
        compliance = constraints.compliance if constraints and constraints.compliance else []
        risks = [r.description for r in discovery.risks or []]

        return f"""{self.SYSTEM_PROMPT}
**Client:** {discovery.client.name} ({discovery.client.industry})
**Project:** {discovery.project.title}
**Context:** {discovery.project.context}
**Objectives:** {_joined(discovery.project.objectives)}
**Success Criteria:** {_joined(discovery.project.success_criteria)}
**Scope Modules:** {_joined(discovery.scope.modules)}
**Timeline:** {weeks} weeks
**Budget Range:** {discovery.budget_range or "TBD"}
**Compliance:** {_joined(compliance, sep=", ")}
**Pricing Preference:** {pricing_pref}
**Tone:** {tone}

**Requirements:**
1. Generate realistic, detailed content based on the discovery inputs
2. meta.title must be "Statement of Work: {discovery.project.title}"
3. Sections, in order: exec-summary (text), objectives (bullets), scope (bullets),
   deliverables (table), timeline (timeline), assumptions (bullets),
   out-of-scope (bullets), pricing (table), risks (table), dependencies (bullets),
   acceptance (bullets)
4. Timeline should span {weeks} weeks with realistic milestone durations; no
   milestone may end before it starts or after week {weeks}
5. Include 5-8 specific deliverables with clear acceptance criteria
6. Include 4-6 milestones that span the timeline
7. Pricing: provide both T&M rates and a fixed-price estimate; set "model" to "{pricing_pref}"
8. Strong out-of-scope safeguards (at least 5 items)
9. Include the identified risks: {_joined(risks)}
10. The top-level deliverables, milestones, pricing, assumptions, outOfScope,
    risks and dependencies fields must repeat the matching section content
11. The markdown field should be a complete document with headings, tables for
    deliverables, pricing and risks, bullet lists and an ASCII Gantt chart
"""

    def draft(self, discovery: Discovery, model: Optional[str] = None) -> DraftPayload:
        """Convenience method for drafting a SOW.

        Args:
            discovery: Validated discovery record
            model: Optional per-call model override

        Returns:
            DraftPayload validated against the document contracts
        """
        result = self.run(
            discovery,
            model=model,
            system_prompt=self.build_system_prompt(discovery),
        )
        return result.output
