"""Domain models for studio users and saved looks."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from barber_studio.domain.styling import StylingOptions

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class User:
    """A signed-in studio user."""

    id: str
    email: str
    name: str

    @classmethod
    def create(cls, user_id: str, email: str, name: str | None = None) -> "User":
        """Create a user, defaulting the display name to the email local-part."""
        cleaned_email = email.strip()
        if not cleaned_email:
            raise ValueError("Email is required")
        display_name = (name or "").strip() or cleaned_email.split("@")[0]
        return cls(id=user_id, email=cleaned_email, name=display_name)

    def to_record(self) -> dict[str, str]:
        return {"id": self.id, "email": self.email, "name": self.name}

    @classmethod
    def from_record(cls, record: dict[str, object]) -> "User":
        return cls(
            id=str(record["id"]),
            email=str(record["email"]),
            name=str(record["name"]),
        )


@dataclass(frozen=True)
class SavedLook:
    """A generated image saved together with the options that produced it."""

    id: str
    image_url: str
    options: StylingOptions
    created_at: datetime

    def to_record(self) -> dict[str, object]:
        return {
            "id": self.id,
            "imageUrl": self.image_url,
            "options": self.options.to_record(),
            "createdAt": _to_epoch_ms(self.created_at),
        }

    @classmethod
    def from_record(cls, record: dict[str, object]) -> "SavedLook":
        options = record["options"]
        if not isinstance(options, dict):
            raise TypeError("Saved look options must be an object")
        return cls(
            id=str(record["id"]),
            image_url=str(record["imageUrl"]),
            options=StylingOptions.from_record(options),
            created_at=_from_epoch_ms(record["createdAt"]),
        )


def _to_epoch_ms(value: datetime) -> int:
    return (value - _EPOCH) // _ONE_MS


def _from_epoch_ms(value: object) -> datetime:
    if not isinstance(value, int | float):
        raise TypeError("createdAt must be a millisecond timestamp")
    return _EPOCH + timedelta(milliseconds=value)
