"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    lookup_language: str = "pt-BR"
    storage_backend: str = "file"
    data_dir: Path = Path(".caloritons")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    logs_slot: str = "caloritons_logs"
    goals_slot: str = "caloritons_goals"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
