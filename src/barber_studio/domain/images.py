"""Encoded image value object."""

import base64
import binascii
from dataclasses import dataclass

from barber_studio.domain.errors import MalformedInputError

_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class EncodedImage:
    """Image payload as base64 text plus its mime type."""

    mime_type: str
    data: str

    @classmethod
    def from_bytes(
        cls, image_bytes: bytes, mime_type: str | None = None
    ) -> "EncodedImage":
        """Encode raw image bytes, sniffing the mime type when not given."""
        if not image_bytes:
            raise MalformedInputError("Image file is empty")
        resolved = mime_type or _detect_mime_type(image_bytes)
        if not resolved.startswith("image/"):
            raise MalformedInputError(f"Unsupported file type: {resolved}")
        encoded = base64.b64encode(image_bytes).decode("utf-8")
        return cls(mime_type=resolved, data=encoded)

    @classmethod
    def from_data_url(cls, data_url: str) -> "EncodedImage":
        """Parse a `data:<mime>;base64,<payload>` string."""
        if not data_url.startswith(_DATA_URL_PREFIX) or _BASE64_MARKER not in data_url:
            raise MalformedInputError("Image is not a base64 data URL")
        header, payload = data_url[len(_DATA_URL_PREFIX) :].split(_BASE64_MARKER, 1)
        if not header or not payload:
            raise MalformedInputError("Image data URL is missing its mime type or data")
        return cls(mime_type=header, data=payload)

    def to_data_url(self) -> str:
        """Render the image as a data URL."""
        return f"{_DATA_URL_PREFIX}{self.mime_type}{_BASE64_MARKER}{self.data}"

    def raw_bytes(self) -> bytes:
        """Decode the base64 payload."""
        try:
            return base64.b64decode(self.data, validate=True)
        except binascii.Error as exc:
            raise MalformedInputError("Image payload is not valid base64") from exc


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
