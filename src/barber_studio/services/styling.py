"""AI styling service that turns a portrait and options into an edited photo."""

import logging
from dataclasses import dataclass
from typing import Protocol

from barber_studio.domain.errors import EmptyResponseError, ServiceError
from barber_studio.domain.images import EncodedImage
from barber_studio.domain.styling import StylingOptions

_logger = logging.getLogger(__name__)

CREDENTIALS_MARKER = "requested entity was not found"
CREDENTIALS_RESET_MESSAGE = (
    "API key configuration was reset. Please select your key again and retry."
)
EMPTY_RESPONSE_MESSAGE = (
    "Style generation failed. The AI did not return a valid image."
)
GENERIC_FAILURE_MESSAGE = (
    "An error occurred while communicating with the AI Barber service."
)


@dataclass(frozen=True)
class ResponsePart:
    """One part of a model response: inline image bytes and/or text."""

    mime_type: str | None = None
    data: bytes | None = None
    text: str | None = None

    @property
    def is_image(self) -> bool:
        return bool(self.data) and self.mime_type is not None


class StylingClient(Protocol):
    """Interface for the generative image model."""

    async def generate(
        self,
        *,
        model: str,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        aspect_ratio: str | None,
    ) -> list[ResponsePart]:
        """Send the photo and instruction and return the response parts."""


class CredentialPrompt(Protocol):
    """Collaborator asked to re-select credentials after an auth failure."""

    async def request_reselect(self) -> None:
        """Prompt for a new API credential before the next attempt."""


@dataclass
class StylingService:
    """Builds the barbershop instruction and extracts the edited image."""

    client: StylingClient
    model: str
    aspect_ratio: str | None = None
    credential_prompt: CredentialPrompt | None = None

    async def apply_style(
        self, source: EncodedImage | str, options: StylingOptions
    ) -> EncodedImage:
        """Return the source photo restyled with the given options."""
        image = (
            EncodedImage.from_data_url(source) if isinstance(source, str) else source
        )
        image_bytes = image.raw_bytes()
        prompt = build_prompt(options)
        try:
            parts = await self.client.generate(
                model=self.model,
                image_bytes=image_bytes,
                mime_type=image.mime_type,
                prompt=prompt,
                aspect_ratio=self.aspect_ratio,
            )
        except Exception as exc:
            _logger.exception("AI styling request failed: model=%s", self.model)
            raise await self._service_error(exc) from exc

        for part in parts:
            if part.is_image:
                _logger.info(
                    "AI styling succeeded: model=%s hairstyle=%s beard=%s",
                    self.model,
                    options.hairstyle,
                    options.beard_style,
                )
                return EncodedImage.from_bytes(part.data, part.mime_type)

        _logger.warning("AI styling returned no image part: parts=%s", len(parts))
        raise EmptyResponseError(EMPTY_RESPONSE_MESSAGE)

    async def _service_error(self, exc: Exception) -> ServiceError:
        message = str(exc).strip()
        if CREDENTIALS_MARKER in message.lower():
            if self.credential_prompt is not None:
                await self.credential_prompt.request_reselect()
            return ServiceError(CREDENTIALS_RESET_MESSAGE, credentials_reset=True)
        return ServiceError(message or GENERIC_FAILURE_MESSAGE)


def build_prompt(options: StylingOptions) -> str:
    """Compose the natural-language edit instruction for the model."""
    return (
        "TASK: High-end Virtual Barbershop Styling.\n"
        "Perform a photorealistic hair and beard transformation on the person "
        "in the image.\n"
        "\n"
        "NEW STYLE SPECIFICATIONS:\n"
        f"- Hairstyle: {options.hairstyle}\n"
        f"- Beard/Facial Hair: {options.beard_style}\n"
        f"- Primary Color: {options.color}\n"
        "\n"
        "TECHNICAL REQUIREMENTS:\n"
        "1. Maintain 100% fidelity to the user's original facial structure, "
        "skin tone, eye color, and background.\n"
        "2. The hair/beard should look naturally growing from the scalp/skin, "
        "with realistic lighting, shadows, and texture.\n"
        '3. If the user chooses "Bald" or "Clean Shaven", ensure the skin '
        "looks smooth and natural.\n"
        '4. Blend the colors naturally; avoid a "flat" or "painted-on" look.\n'
        "5. Output must be a single modified image part.\n"
    )
