"""Tests for the Drafting Agent with a mocked provider."""

import json
import logging

import pytest
from pydantic import ValidationError
from unittest.mock import MagicMock

from agents import DraftingAgent
from agents.base_agent import AgentResult
from contracts import DraftPayload, PricingModel
from generator import generate_mock_drafts
from intake import SAMPLE_A, SAMPLE_B
from providers import LLMResponse


def _draft_json() -> str:
    """A valid draft as the backend would return it (camelCase JSON)."""
    return json.dumps(generate_mock_drafts(SAMPLE_A).sow.to_json_dict())


def _mock_provider(content: str) -> MagicMock:
    provider = MagicMock()
    provider.name = "openai"
    provider.default_model = "gpt-4-turbo-preview"
    provider.is_available.return_value = True
    provider.complete.return_value = LLMResponse(
        content=content,
        input_tokens=1200,
        output_tokens=3000,
        model="gpt-4-turbo-preview",
        provider="openai",
    )
    return provider


class TestBuildSystemPrompt:
    """Test prompt construction from discovery."""

    def test_prompt_carries_discovery_fields(self):
        """Every discovery field appears in the prompt."""
        agent = DraftingAgent(llm_provider=_mock_provider("{}"))
        prompt = agent.build_system_prompt(SAMPLE_A)
        assert "**Client:** TechFlow Solutions (SaaS)" in prompt
        assert "**Project:** User Onboarding Transformation" in prompt
        assert "**Timeline:** 12 weeks" in prompt
        assert "**Budget Range:** $150,000 - $220,000" in prompt
        assert "**Compliance:** SOC 2 Type II, GDPR" in prompt
        assert "**Pricing Preference:** Hybrid" in prompt
        assert "**Tone:** consultative" in prompt
        assert "Integration complexity with legacy auth service" in prompt

    def test_prompt_uses_friendly_tone_and_tm(self):
        """Tone and pricing preference come from discovery."""
        agent = DraftingAgent(llm_provider=_mock_provider("{}"))
        prompt = agent.build_system_prompt(SAMPLE_B)
        assert "**Tone:** friendly" in prompt
        assert 'set "model" to "TM"' in prompt


class TestDraft:
    """Test DraftingAgent.draft()."""

    def test_valid_response_returns_payload(self):
        """A valid reply parses into a DraftPayload."""
        provider = _mock_provider(_draft_json())
        agent = DraftingAgent(llm_provider=provider)
        payload = agent.draft(SAMPLE_A)

        assert isinstance(payload, DraftPayload)
        assert payload.meta.client_name == "TechFlow Solutions"
        assert payload.pricing.model == PricingModel.HYBRID
        assert len(payload.milestones) == 6
        assert agent.total_usage.input_tokens == 1200
        assert agent.total_usage.output_tokens == 3000

    def test_single_call_with_configured_sampling(self):
        """One call with the configured sampling settings."""
        provider = _mock_provider(_draft_json())
        DraftingAgent(llm_provider=provider).draft(SAMPLE_A)

        provider.complete.assert_called_once()
        kwargs = provider.complete.call_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 4000
        assert kwargs["model"] == "gpt-4-turbo-preview"
        assert "# OUTPUT FORMAT" in kwargs["system_prompt"]
        assert "TechFlow Solutions" in kwargs["user_message"]

    def test_fenced_response_with_inner_fences(self):
        """The markdown field itself contains a fenced Gantt chart."""
        provider = _mock_provider("```json\n" + _draft_json() + "\n```")
        payload = DraftingAgent(llm_provider=provider).draft(SAMPLE_A)
        assert "### Gantt Chart (ASCII)" in payload.markdown
        assert "```" in payload.markdown

    def test_prose_response_raises(self):
        """A non-JSON reply raises."""
        provider = _mock_provider("Sure! Here is your statement of work.")
        with pytest.raises(json.JSONDecodeError):
            DraftingAgent(llm_provider=provider).draft(SAMPLE_A)
        provider.complete.assert_called_once()

    def test_schema_mismatch_raises(self):
        """JSON not matching the contract raises."""
        provider = _mock_provider(json.dumps({"meta": {"title": "x"}}))
        with pytest.raises(ValidationError):
            DraftingAgent(llm_provider=provider).draft(SAMPLE_A)


class TestRun:
    """Test BaseAgent.run() on the drafting agent."""

    def test_invalid_output_is_not_retried(self):
        """A schema mismatch surfaces after exactly one request."""
        provider = _mock_provider("[]")
        agent = DraftingAgent(llm_provider=provider)
        with pytest.raises(ValidationError):
            agent.run(SAMPLE_A)
        provider.complete.assert_called_once()
        assert "# PREVIOUS ERROR" not in provider.complete.call_args.kwargs["user_message"]

    def test_result_metadata(self):
        """Result carries the provider's model, name and token usage."""
        result = DraftingAgent(llm_provider=_mock_provider(_draft_json())).run(SAMPLE_A)
        assert result.model == "gpt-4-turbo-preview"
        assert result.provider == "openai"
        assert result.token_usage.total_tokens == 4200
        assert "retries" not in AgentResult.model_fields

    def test_task_description_in_debug_log(self, caplog):
        """The debug usage line names what the agent was doing."""
        agent = DraftingAgent(llm_provider=_mock_provider(_draft_json()))
        with caplog.at_level(logging.DEBUG, logger="agents.base_agent"):
            agent.run(SAMPLE_A)
        assert agent.get_task_description() in caplog.text
