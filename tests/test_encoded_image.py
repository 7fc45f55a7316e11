"""Tests for the encoded image value object."""

import pytest

from barber_studio.domain.errors import MalformedInputError
from barber_studio.domain.images import EncodedImage
from tests.conftest import PNG_BYTES


def test_from_bytes_sniffs_png_header() -> None:
    image = EncodedImage.from_bytes(PNG_BYTES)

    assert image.mime_type == "image/png"
    assert image.to_data_url().startswith("data:image/png;base64,")
    assert image.raw_bytes() == PNG_BYTES


def test_from_bytes_defaults_to_jpeg() -> None:
    image = EncodedImage.from_bytes(b"unknown")

    assert image.mime_type == "image/jpeg"


def test_from_bytes_keeps_explicit_mime_type() -> None:
    image = EncodedImage.from_bytes(b"GIF89a-data", "image/gif")

    assert image.mime_type == "image/gif"


def test_from_bytes_rejects_empty_and_non_image_payloads() -> None:
    with pytest.raises(MalformedInputError):
        EncodedImage.from_bytes(b"")
    with pytest.raises(MalformedInputError):
        EncodedImage.from_bytes(b"%PDF-1.7", "application/pdf")


def test_from_data_url_splits_mime_type_and_payload() -> None:
    image = EncodedImage.from_data_url("data:image/webp;base64,UklGRg==")

    assert image.mime_type == "image/webp"
    assert image.data == "UklGRg=="


@pytest.mark.parametrize(
    "value",
    [
        "not-a-data-url",
        "data:image/png,plain",
        "data:;base64,AAAA",
        "data:image/png;base64,",
    ],
)
def test_from_data_url_rejects_malformed_input(value: str) -> None:
    with pytest.raises(MalformedInputError):
        EncodedImage.from_data_url(value)


def test_raw_bytes_rejects_invalid_base64() -> None:
    image = EncodedImage(mime_type="image/png", data="***")

    with pytest.raises(MalformedInputError):
        image.raw_bytes()
