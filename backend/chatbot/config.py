"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Missing credentials are fatal at startup (require_credentials in lifespan)

Design Decisions:
    - Empty-string defaults for secrets: the app module imports cleanly for tests
      and tooling, and the lifespan refuses to serve without them
    - Timeouts default to None: outbound calls are not time-bounded
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chatbot.core.domain_types import Locale
from chatbot.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_timeout_seconds: float | None = None
    chat_model: str = "claude-sonnet-4-20250514"

    # Deliberation backend
    admin_api_key: str = ""
    backend_api_url: str = "http://localhost:3001/api"
    backend_timeout_seconds: float | None = None

    @field_validator("backend_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Conversation
    reply_locale: Locale = Locale.JA

    # API
    port: int = 3030
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def require_credentials(self) -> None:
        missing = [
            name for name in ("anthropic_api_key", "admin_api_key")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError([m.upper() for m in missing])


@lru_cache
def get_settings() -> Settings:
    return Settings()
