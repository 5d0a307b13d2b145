"""Base agent class for LLM-backed generation.

Every agent:
- Calls the LLM with its system prompt + output JSON schema + task input
- Validates output against the expected Pydantic contract
- Tracks token usage
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Type, TypeVar, Optional, Any
from pydantic import BaseModel

from providers import get_provider, LLMProvider
from config import settings

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class TokenUsage(BaseModel):
    """Track token usage across calls."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class AgentResult(BaseModel):
    """Result from an agent run, including output and metadata."""
    output: Any
    token_usage: TokenUsage
    model: str
    provider: str = "openai"
    raw_response: Optional[str] = None


class BaseAgent(ABC):
    """Base class for SOWSmith agents.

    Responsibilities:
    - Calls the LLM with system prompt + output schema + task input
    - Validates output against the expected Pydantic contract
    - Tracks token usage
    """

    def __init__(
        self,
        role: str,
        system_prompt: str,
        output_schema: Type[T],
        model: Optional[str] = None,
        provider: Optional[str] = None,
        llm_provider: Optional[LLMProvider] = None,
    ):
        """Initialize the agent.

        Args:
            role: Agent role, used in log lines
            system_prompt: The agent's system prompt defining its behavior
            output_schema: Pydantic model class for validating output
            model: Override the default model (e.g. 'gpt-4o', 'claude-sonnet')
            provider: Explicit provider name (openai, anthropic).
                     If not specified, auto-detected from model name or taken from settings
            llm_provider: Ready provider instance; takes precedence over ``provider``
        """
        self.role = role
        self.system_prompt = system_prompt
        self.output_schema = output_schema

        self.llm_provider: LLMProvider = llm_provider or get_provider(provider_name=provider, model=model)
        self.model = model or self.llm_provider.default_model

        self.total_usage = TokenUsage()

    def _build_full_system_prompt(self, system_prompt: Optional[str] = None) -> str:
        """Build the complete system prompt including the output schema."""
        parts = [system_prompt or self.system_prompt]

        parts.append("\n\n# OUTPUT FORMAT\n")
        parts.append("You MUST respond with valid JSON matching this schema:\n\n")
        parts.append(f"```json\n{json.dumps(self.output_schema.model_json_schema(by_alias=True), indent=2)}\n```")

        return "".join(parts)

    def _parse_and_validate(self, response_text: str) -> T:
        """Parse LLM response and validate against schema.

        Args:
            response_text: Raw text response from LLM

        Returns:
            Validated Pydantic model instance

        Raises:
            ValidationError: If response doesn't match schema
            json.JSONDecodeError: If response isn't valid JSON
        """
        text = response_text.strip()

        # Strip an outer markdown code block; payload strings may contain fences of their own
        if text.startswith("```"):
            text = text.split("\n", 1)[1] if "\n" in text else ""
            end = text.rfind("```")
            if end != -1:
                text = text[:end]
        elif "```json" in text:
            start = text.find("```json") + 7
            end = text.rfind("```")
            text = text[start:end] if end > start else text[start:]

        data = json.loads(text.strip())
        return self.output_schema.model_validate(data)

    def run(
        self,
        input_data: BaseModel,
        model: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> AgentResult:
        """Execute the agent with a single provider request.

        Args:
            input_data: Input data as a Pydantic model
            model: Optional model override for this call.
                   If None, uses self.model set at init.
            system_prompt: Optional per-call system prompt replacing the class one

        Returns:
            AgentResult with validated output and metadata

        Raises:
            ValidationError: If output does not match the contract
            json.JSONDecodeError: If output isn't valid JSON
            Exception: If LLM call fails
        """
        full_system_prompt = self._build_full_system_prompt(system_prompt)
        input_json = input_data.model_dump_json(indent=2, by_alias=True, exclude_none=True)
        user_message = f"# INPUT\n\n{input_json}"

        response = self.llm_provider.complete(
            system_prompt=full_system_prompt,
            user_message=user_message,
            model=model or self.model,
            max_tokens=settings.max_tokens_per_call,
            temperature=settings.llm_temperature,
        )

        usage = TokenUsage(
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )
        self.total_usage.input_tokens += usage.input_tokens
        self.total_usage.output_tokens += usage.output_tokens
        logger.debug(
            "%s (%s) on %s/%s used %d tokens",
            self.role, self.get_task_description(), response.provider, response.model, usage.total_tokens,
        )

        output = self._parse_and_validate(response.content)

        return AgentResult(
            output=output,
            token_usage=usage,
            model=response.model,
            provider=response.provider,
            raw_response=response.content,
        )

    @abstractmethod
    def get_task_description(self) -> str:
        """Return a description of what this agent does.

        Used in debug log lines.
        """
        pass
