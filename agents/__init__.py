"""Agent implementations for SOWSmith.

Agents wrap an LLM provider with a prompt and an output contract.
"""

from .base_agent import BaseAgent, AgentResult, TokenUsage
from .drafting_agent import DraftingAgent

__all__ = [
    # Base
    "BaseAgent",
    "AgentResult",
    "TokenUsage",
    # Specialized agents
    "DraftingAgent",
]
