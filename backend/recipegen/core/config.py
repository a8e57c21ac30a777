from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    google_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    generation_timeout: float = 30.0
    generation_max_retries: int = 3
    generation_backoff_base: float = 1.0
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "env_prefix": "",
        "extra": "ignore",
    }

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
