"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from barber_studio.adapters.credential_prompt import LoggingCredentialPrompt
from barber_studio.adapters.gemini_styling_client import GeminiStylingClient
from barber_studio.adapters.json_file_store import JsonFileKeyValueStore
from barber_studio.adapters.supabase_key_value_store import SupabaseKeyValueStore
from barber_studio.config import Settings
from barber_studio.services.profiles import KeyValueStore, ProfileStore
from barber_studio.services.styling import StylingService
from barber_studio.services.studio import StudioService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    styling_service: StylingService
    profile_store: ProfileStore
    studio_service: StudioService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    profile_store = ProfileStore(
        store=_build_key_value_store(resolved_settings),
        namespace=resolved_settings.storage_namespace,
    )
    styling_service = StylingService(
        client=GeminiStylingClient.create(resolved_settings.gemini_api_key),
        model=resolved_settings.gemini_model,
        aspect_ratio=resolved_settings.image_aspect_ratio,
        credential_prompt=LoggingCredentialPrompt(),
    )
    studio_service = StudioService(
        styling_service=styling_service,
        profile_store=profile_store,
        recover_accounts_by_email=resolved_settings.recover_accounts_by_email,
    )

    return AppContainer(
        settings=resolved_settings,
        styling_service=styling_service,
        profile_store=profile_store,
        studio_service=studio_service,
    )


def _build_key_value_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "supabase":
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return JsonFileKeyValueStore(Path(settings.storage_path))
