"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_API_KEY = "your_openai_api_key_here"


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    # Recommendation provider (OpenAI chat completions)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    recommendation_timeout: float = 60.0
    use_mock_recommendations: bool = False

    # League client (empty lockfile path = probe default install locations)
    lockfile_path: str = ""
    league_client_timeout: float = 5.0

    # Polling
    champ_select_poll_interval: float = 2.0
    ready_check_poll_interval: float = 1.0

    # Ready check
    auto_accept_enabled: bool = True
    ready_check_accept_delay: float = 5.0

    # Saved recommendations
    sessions_dir: str = "sessions"
    save_sessions: bool = True

    @computed_field
    @property
    def has_api_key(self) -> bool:
        """Whether a real API key has been configured."""
        key = self.openai_api_key.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
