"""Application configuration."""

import os
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str = Field(
        validation_alias=AliasChoices("gemini_api_key", "api_key")
    )
    gemini_model: str = "gemini-2.5-flash-image"
    image_aspect_ratio: str | None = None
    storage_backend: Literal["file", "supabase"] = "file"
    storage_path: str = ".barber_studio/profile_store.json"
    storage_namespace: str = "barber"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "profile_store"
    recover_accounts_by_email: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_supabase_credentials(self) -> "Settings":
        if self.storage_backend == "supabase" and not (
            self.supabase_url and self.supabase_service_key
        ):
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase storage backend"
            )
        return self
