from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
    )

    # Analytics document (filesystem path or http(s) URL)
    analytics_source: str = "data/analytics.json"
    analytics_timeout: float = 10.0

    # Watchlist persistence
    watchlist_backend: str = "file"  # file | database | memory
    watchlist_path: str = "data/watchlist.json"
    watchlist_key: str = "chat_analytics_watchlist"
    database_url: str = "sqlite:///./chat_analytics.db"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["http://localhost:5173"]  # Vite dev server
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
