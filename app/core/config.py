from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Local cache database
    db_path: str = "logs.db"

    # Remote log server
    api_base_url: str = "http://localhost:2621"
    push_url: str = "ws://localhost:2621"
    request_timeout_seconds: float = 3.0

    # Optional settings
    push_reconnect_seconds: float = 5.0
    refresh_interval_minutes: int = 5
    debug: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
