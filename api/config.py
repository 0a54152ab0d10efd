"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Page acquisition
    render_timeout_ms: int = 30_000
    render_max_attempts: int = 3
    render_retry_delay_seconds: float = 1.0  # Backoff = attempt * delay
    render_viewport_width: int = 1920
    render_viewport_height: int = 1080
    render_user_agent: str = DEFAULT_BROWSER_USER_AGENT

    # robots.txt fetch (fails open)
    robots_timeout_seconds: float = 5.0
    robots_user_agent: str = "PageLensBot/1.0 (+https://pagelens.dev/bot)"

    # Result storage
    results_path: str = "data/results"
    results_index_limit: int = 100

    # AI enhancement
    llm_provider: Literal["anthropic", "openai"] = "anthropic"
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    anthropic_model: str = "claude-3-5-haiku-20241022"
    openai_model: str = "gpt-4o-mini"
    llm_max_tokens: int = 1024
    llm_timeout_seconds: float = 60.0
    llm_cache_ttl_seconds: float = 24 * 60 * 60
    llm_cache_max_entries: int = 100
    llm_min_interval_seconds: float = 0.1

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"

    @property
    def llm_api_key(self) -> str | None:
        """API key for the configured enhancement provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        return self.anthropic_api_key

    @property
    def llm_model(self) -> str:
        """Model name for the configured enhancement provider."""
        if self.llm_provider == "openai":
            return self.openai_model
        return self.anthropic_model

    @property
    def llm_enabled(self) -> bool:
        """Check if AI enhancement is available."""
        return bool(self.llm_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
