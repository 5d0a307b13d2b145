"""Configuration settings for SOWSmith."""

# Load .env into os.environ so provider fallbacks (e.g. OPENAI_API_KEY) work
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path


class Settings(BaseSettings):
    """Global settings for SOWSmith.

    Settings can be overridden via environment variables with SOWSMITH_ prefix.
    Example: SOWSMITH_LLM_MODEL=gpt-4o
    """

    # Generation backend
    use_llm: bool = Field(
        default=True,
        description="Try the LLM backend when an API key is configured; otherwise use the template generator"
    )
    llm_provider: str = Field(
        default="openai",
        description="LLM provider used for drafting (openai, anthropic)"
    )
    llm_model: str = Field(
        default="gpt-4-turbo-preview",
        description="Model used for drafting"
    )
    llm_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for drafting calls"
    )
    max_tokens_per_call: int = Field(
        default=4000,
        description="Maximum tokens per drafting call"
    )
    api_timeout_seconds: int = Field(
        default=60,
        description="Timeout applied to the single drafting request"
    )

    # API keys (env: SOWSMITH_<KEY> or the provider's standard env var)
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (env: SOWSMITH_OPENAI_API_KEY)",
    )
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (env: SOWSMITH_ANTHROPIC_API_KEY)",
    )

    # Paths
    workspace_dir: str = Field(
        default="./.sowsmith",
        description="Directory holding the persisted workspace blob"
    )
    output_dir: str = Field(
        default="./outputs",
        description="Exported documents directory"
    )

    # Brand
    brand_name: str = Field(default="Apex Consulting")
    brand_primary_color: str = Field(default="#6366f1")
    brand_secondary_color: str = Field(default="#8b5cf6")
    brand_tone: str = Field(default="consultative")

    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    model_config = {
        "env_prefix": "SOWSMITH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_workspace_path(self) -> Path:
        """Get workspace path as Path object."""
        return Path(self.workspace_dir)

    def get_output_path(self) -> Path:
        """Get output path as Path object."""
        return Path(self.output_dir)

    def default_brand(self):
        """Build the organisation brand attached to generated drafts."""
        from contracts import OrgBrand
        return OrgBrand(
            name=self.brand_name,
            primary_color=self.brand_primary_color,
            secondary_color=self.brand_secondary_color,
            tone=self.brand_tone,
        )


# Create singleton instance
settings = Settings()
