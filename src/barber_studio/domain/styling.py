"""Styling options offered by the studio."""

from dataclasses import dataclass
from enum import StrEnum


class Hairstyle(StrEnum):
    """Hairstyles the AI barber can apply."""

    BUZZ_CUT = "Buzz Cut"
    LONG_WAVY = "Long Wavy"
    POMPADOUR = "Pompadour"
    BALD = "Bald"
    DREADLOCKS = "Dreadlocks"
    MOHAWK = "Mohawk"
    AFRO = "Afro"
    UNDERCUT = "Undercut"
    QUIFF = "Quiff"
    SIDE_PART = "Side Part"
    MAN_BUN = "Man Bun"
    CREW_CUT = "Crew Cut"


class BeardStyle(StrEnum):
    """Beard and facial hair styles."""

    CLEAN_SHAVEN = "Clean Shaven"
    FULL_BEARD = "Full Beard"
    GOATEE = "Goatee"
    STUBBLE = "Stubble"
    GANDALF = "Gandalf Beard"
    MOUSTACHE = "Moustache"
    VAN_DYKE = "Van Dyke"
    ANCHOR = "Anchor Beard"
    CIRCLE_BEARD = "Circle Beard"


DEFAULT_COLOR = "#3d2b1f"


@dataclass(frozen=True)
class StylingOptions:
    """Hairstyle, beard style and color chosen for a generation."""

    hairstyle: Hairstyle = Hairstyle.QUIFF
    beard_style: BeardStyle = BeardStyle.STUBBLE
    color: str = DEFAULT_COLOR

    def to_record(self) -> dict[str, str]:
        """Return the JSON-ready representation."""
        return {
            "hairstyle": self.hairstyle.value,
            "beardStyle": self.beard_style.value,
            "color": self.color,
        }

    @classmethod
    def from_record(cls, record: dict[str, object]) -> "StylingOptions":
        """Build options from a stored record."""
        return cls(
            hairstyle=Hairstyle(record["hairstyle"]),
            beard_style=BeardStyle(record["beardStyle"]),
            color=str(record["color"]),
        )
