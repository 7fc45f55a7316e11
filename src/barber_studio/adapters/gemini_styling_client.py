"""Gemini image-editing client built on the google-genai SDK."""

import base64
from dataclasses import dataclass

from google import genai
from google.genai import types

from barber_studio.services.styling import ResponsePart, StylingClient


@dataclass
class GeminiStylingClient(StylingClient):
    """Styling client backed by Gemini image models."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiStylingClient":
        """Create a Gemini styling client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        aspect_ratio: str | None,
    ) -> list[ResponsePart]:
        """Call generate_content with the photo and instruction."""
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=(
                types.ImageConfig(aspect_ratio=aspect_ratio) if aspect_ratio else None
            ),
        )

        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                types.Part.from_text(text=prompt),
            ],
            config=config,
        )
        if not response.candidates:
            return []
        content = response.candidates[0].content
        if content is None or not content.parts:
            return []
        return [_to_response_part(part) for part in content.parts]


def _to_response_part(part: types.Part) -> ResponsePart:
    inline = part.inline_data
    if inline is None or not inline.data:
        return ResponsePart(text=part.text)
    data = inline.data
    if isinstance(data, str):
        data = base64.b64decode(data)
    return ResponsePart(mime_type=inline.mime_type, data=data, text=part.text)
