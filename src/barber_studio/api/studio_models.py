"""Pydantic models for studio request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from barber_studio.domain.styling import BeardStyle, Hairstyle, StylingOptions


class OptionsPayload(BaseModel):
    """Styling options selected in the sidebar."""

    model_config = ConfigDict(populate_by_name=True)

    hairstyle: Hairstyle
    beard_style: BeardStyle = Field(alias="beardStyle")
    color: str

    def to_options(self) -> StylingOptions:
        return StylingOptions(
            hairstyle=self.hairstyle,
            beard_style=self.beard_style,
            color=self.color,
        )


class SignInPayload(BaseModel):
    """Sign-in form payload."""

    email: str = Field(min_length=1, pattern=r"\S")
    name: str | None = None
