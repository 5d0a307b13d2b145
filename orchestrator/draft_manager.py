"""Draft Manager - single entry point for SOW/Proposal generation.

The Draft Manager:
1. Validates the discovery input before any generation
2. Tries the LLM drafting backend when one is configured
3. Falls back to the template generator on any backend failure
4. Returns both documents in the same shape whichever path produced them
"""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from agents import DraftingAgent
from config import settings
from contracts import (
    Discovery,
    DocumentDraft,
    DocumentStatus,
    DraftPair,
    DraftPayload,
    OrgBrand,
)
from errors import DiscoveryValidationError, GenerationBackendError
from generator import derive_proposal, generate_id, generate_mock_drafts, render_markdown
from providers import LLMProvider, get_provider

logger = logging.getLogger(__name__)


class DraftManager:
    """Generation facade over the LLM backend and the template generator.

    Callers never see a backend failure: they get a DraftPair or a
    DiscoveryValidationError for bad input.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        use_llm: Optional[bool] = None,
        brand: Optional[OrgBrand] = None,
        llm_provider: Optional[LLMProvider] = None,
    ):
        """Initialize the Draft Manager.

        Args:
            provider: LLM provider name (openai, anthropic)
            model: Model name override (e.g. gpt-4o)
            use_llm: Enable the LLM path (defaults to settings.use_llm)
            brand: Brand attached to both drafts (defaults to settings brand)
            llm_provider: Ready provider instance, mainly for tests
        """
        self.provider = provider
        self.model = model
        self.use_llm = settings.use_llm if use_llm is None else use_llm
        self.brand = brand or settings.default_brand()
        self._llm_provider = llm_provider
        self.last_backend: Optional[str] = None

    @staticmethod
    def validate(discovery: Union[Discovery, Dict[str, Any]]) -> Discovery:
        """Coerce input into a Discovery or raise DiscoveryValidationError."""
        if isinstance(discovery, Discovery):
            return discovery
        try:
            return Discovery.model_validate(discovery)
        except ValidationError as e:
            raise DiscoveryValidationError.from_pydantic(e) from e

    def _resolve_llm_provider(self) -> Optional[LLMProvider]:
        if not self.use_llm:
            return None
        if self._llm_provider is None:
            try:
                self._llm_provider = get_provider(provider_name=self.provider, model=self.model)
            except ValueError as e:
                logger.warning("LLM backend disabled: %s", e)
                return None
        if not self._llm_provider.is_available():
            logger.info("No API key for %s; using template generator", self._llm_provider.name)
            return None
        return self._llm_provider

    def generate(self, discovery: Union[Discovery, Dict[str, Any]]) -> DraftPair:
        """Produce a SOW and its companion Proposal.

        Args:
            discovery: Discovery record or its camelCase/snake_case dict

        Returns:
            DraftPair with both drafts in status Draft

        Raises:
            DiscoveryValidationError: if the input fails schema checks
        """
        record = self.validate(discovery)

        llm_provider = self._resolve_llm_provider()
        if llm_provider is not None:
            try:
                pair = self._generate_with_llm(record, llm_provider)
                self.last_backend = llm_provider.name
                logger.info("Generated drafts for %s via %s", record.client.name, llm_provider.name)
                return pair
            except GenerationBackendError as e:
                logger.warning("%s; falling back to template generator", e)

        pair = generate_mock_drafts(record, brand=self.brand)
        self.last_backend = "template"
        logger.info("Generated drafts for %s via template generator", record.client.name)
        return pair

    def _generate_with_llm(self, discovery: Discovery, llm_provider: LLMProvider) -> DraftPair:
        agent = DraftingAgent(model=self.model, llm_provider=llm_provider)
        try:
            payload = agent.draft(discovery)
        except Exception as e:
            raise GenerationBackendError(
                f"Drafting backend failed: {type(e).__name__}: {e}",
                provider=llm_provider.name,
            ) from e
        return self._normalize(payload, discovery)

    def _normalize(self, payload: DraftPayload, discovery: Discovery) -> DraftPair:
        """Bring backend output into the template generator's shape."""
        data = payload.model_dump()
        sow = DocumentDraft.model_validate({
            **data,
            "id": generate_id("doc"),
            "status": DocumentStatus.DRAFT,
            "brand": self.brand,
        })
        if not sow.meta.industry:
            sow.meta.industry = discovery.client.industry
        if not sow.markdown.strip():
            sow.markdown = render_markdown(sow.meta, sow.sections)

        proposal = derive_proposal(sow)
        return DraftPair(sow=sow, proposal=proposal)


def generate_drafts(discovery: Union[Discovery, Dict[str, Any]], **kwargs) -> DraftPair:
    """Convenience function to generate both drafts.

    Args:
        discovery: Discovery record or dict
        **kwargs: Passed to DraftManager

    Returns:
        DraftPair
    """
    manager = DraftManager(**kwargs)
    return manager.generate(discovery)
