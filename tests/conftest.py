"""Shared test fixtures."""

import asyncio
import base64
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count

import pytest

from barber_studio.config import Settings
from barber_studio.containers import AppContainer
from barber_studio.domain.images import EncodedImage
from barber_studio.services.profiles import KeyValueStore, ProfileStore
from barber_studio.services.styling import (
    CredentialPrompt,
    ResponsePart,
    StylingClient,
    StylingService,
)
from barber_studio.services.studio import StudioService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"portrait"
STYLED_BYTES = b"\x89PNG\r\n\x1a\n" + b"styled"


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    entries: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.entries.get(key)

    def set(self, key: str, value: str) -> None:
        self.entries[key] = value

    def remove(self, key: str) -> None:
        self.entries.pop(key, None)


@dataclass
class FakeStylingClient(StylingClient):
    """Fake styling client returning queued parts or raising an error."""

    parts: list[ResponsePart] = field(
        default_factory=lambda: [
            ResponsePart(text="Here is the new look."),
            ResponsePart(mime_type="image/png", data=STYLED_BYTES),
        ]
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        aspect_ratio: str | None,
    ) -> list[ResponsePart]:
        self.calls.append(
            {
                "model": model,
                "image_bytes": image_bytes,
                "mime_type": mime_type,
                "prompt": prompt,
                "aspect_ratio": aspect_ratio,
            }
        )
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.parts


@dataclass
class RecordingCredentialPrompt(CredentialPrompt):
    """Credential prompt that counts reselect requests."""

    requests: int = 0

    async def request_reselect(self) -> None:
        self.requests += 1


def sequential_ids() -> Callable[[], str]:
    counter = count(1)
    return lambda: f"id-{next(counter)}"


def fixed_clock() -> datetime:
    return datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


def styled_image() -> EncodedImage:
    return EncodedImage(
        mime_type="image/png", data=base64.b64encode(STYLED_BYTES).decode("utf-8")
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="gemini-key", storage_backend="file")


@pytest.fixture
def key_value_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def profile_store(key_value_store: InMemoryKeyValueStore) -> ProfileStore:
    return ProfileStore(key_value_store)


@pytest.fixture
def styling_client() -> FakeStylingClient:
    return FakeStylingClient()


@pytest.fixture
def credential_prompt() -> RecordingCredentialPrompt:
    return RecordingCredentialPrompt()


@pytest.fixture
def styling_service(
    styling_client: FakeStylingClient, credential_prompt: RecordingCredentialPrompt
) -> StylingService:
    return StylingService(
        client=styling_client,
        model="gemini-2.5-flash-image",
        credential_prompt=credential_prompt,
    )


@pytest.fixture
def studio_service(
    styling_service: StylingService, profile_store: ProfileStore
) -> StudioService:
    return StudioService(
        styling_service=styling_service,
        profile_store=profile_store,
        id_factory=sequential_ids(),
        clock=fixed_clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    styling_service: StylingService,
    profile_store: ProfileStore,
    studio_service: StudioService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        styling_service=styling_service,
        profile_store=profile_store,
        studio_service=studio_service,
    )
