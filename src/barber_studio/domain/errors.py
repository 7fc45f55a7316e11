"""Errors raised by the styling studio."""


class StudioError(Exception):
    """Base class for studio failures surfaced to the user."""


class MalformedInputError(StudioError):
    """Raised when an image cannot be split into payload and mime type."""


class EmptyResponseError(StudioError):
    """Raised when the AI service returns no image part."""


class ServiceError(StudioError):
    """Raised when the call to the AI service fails."""

    def __init__(self, message: str, *, credentials_reset: bool = False) -> None:
        super().__init__(message)
        self.credentials_reset = credentials_reset


class CorruptRecordError(StudioError):
    """Raised when a stored record exists but cannot be decoded."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Stored record {key!r} could not be decoded")
        self.key = key
