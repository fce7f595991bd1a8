"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="CV Match Leaderboard")

    # OpenAI / LLM
    openai_api_key: SecretStr = Field(default=SecretStr(""))
    openai_model: str = Field(default="gpt-4o")
    openai_timeout_seconds: float = Field(
        default=120.0, description="Upper bound for a single completion call"
    )
    structured_output: bool = Field(
        default=True,
        description="Ask the model for a JSON object instead of free text",
    )

    # Analyzer settings
    upload_dir: Path = Field(default=Path("./uploads"))
    max_cv_chars: int = Field(
        default=50000, description="Extracted CV text is truncated beyond this length"
    )

    # API server
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)

    # Leaderboard client
    api_url: str = Field(default="http://127.0.0.1:8000")
    api_timeout_seconds: float = Field(default=180.0)
    state_path: Path = Field(default=Path("./leaderboard_state.json"))

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
