"""Configuration loading and validation."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

PROVIDERS = ("claude", "openai", "openrouter")

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass
class Config:
    """Application configuration."""

    firecrawl_api_key: str = ""
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    openrouter_api_key: str = ""
    database_url: str = "sqlite:///data/linkvault.db"
    llm_provider: str = "openrouter"
    model: str = ""
    user_id: str = ""
    log_level: str = "INFO"
    log_file: str = ""
    verbose: bool = False

    @property
    def default_model(self) -> str:
        if self.model:
            return self.model
        if self.llm_provider == "claude":
            return "claude-sonnet-4-20250514"
        if self.llm_provider == "openai":
            return "gpt-4o"
        return "xiaomi/mimo-v2-flash:free"

    def validate(
        self,
        require_firecrawl: bool = False,
        require_llm: bool = False,
    ) -> None:
        """Validate configuration for the command about to run."""
        if not self.database_url:
            raise ConfigError("DATABASE_URL cannot be empty.")
        if require_firecrawl and not self.firecrawl_api_key:
            raise ConfigError(
                "FIRECRAWL_API_KEY is required. Set it in .env or environment."
            )
        if not require_llm:
            return
        if self.llm_provider not in PROVIDERS:
            raise ConfigError(
                f"Unknown LLM provider: {self.llm_provider}. "
                "Use 'claude', 'openai' or 'openrouter'."
            )
        if self.llm_provider == "claude" and not self.anthropic_api_key:
            raise ConfigError(
                "ANTHROPIC_API_KEY is required when using Claude provider."
            )
        if self.llm_provider == "openai" and not self.openai_api_key:
            raise ConfigError(
                "OPENAI_API_KEY is required when using OpenAI provider."
            )
        if self.llm_provider == "openrouter" and not self.openrouter_api_key:
            raise ConfigError(
                "AI_OPEN_ROUTER_KEY is required when using OpenRouter provider."
            )


def load_config(
    database_url: Optional[str] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    user_id: Optional[str] = None,
    verbose: bool = False,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    config = Config(
        firecrawl_api_key=os.getenv("FIRECRAWL_API_KEY", ""),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openrouter_api_key=os.getenv("AI_OPEN_ROUTER_KEY", ""),
        database_url=database_url or os.getenv(
            "DATABASE_URL", "sqlite:///data/linkvault.db"
        ),
        llm_provider=provider or os.getenv("LLM_PROVIDER", "openrouter"),
        model=model or os.getenv("LLM_MODEL", ""),
        user_id=user_id or os.getenv("LINKVAULT_USER", ""),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", ""),
        verbose=verbose,
    )

    config.validate()
    return config
