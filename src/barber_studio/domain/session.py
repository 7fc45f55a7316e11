"""Session state snapshots and the pure transitions between them.

Every transition takes a snapshot and returns the next one. A transition
that does not apply returns the snapshot it was given, so callers can
detect a no-op with an identity check.
"""

from dataclasses import dataclass, field, replace
from enum import StrEnum

from barber_studio.domain.images import EncodedImage
from barber_studio.domain.profiles import SavedLook, User
from barber_studio.domain.styling import StylingOptions


class SessionPhase(StrEnum):
    """Coarse phase derived from a session snapshot."""

    IDLE = "idle"
    READY = "ready"
    GENERATING = "generating"
    GENERATED = "generated"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of the studio session."""

    original_image: EncodedImage | None = None
    generated_image: EncodedImage | None = None
    is_loading: bool = False
    error: str | None = None
    options: StylingOptions = field(default_factory=StylingOptions)
    generated_options: StylingOptions | None = None
    current_user: User | None = None
    favorites: tuple[SavedLook, ...] = ()

    @property
    def phase(self) -> SessionPhase:
        if self.is_loading:
            return SessionPhase.GENERATING
        if self.original_image is None:
            return SessionPhase.IDLE
        if self.error is not None:
            return SessionPhase.FAILED
        if self.generated_image is not None:
            return SessionPhase.GENERATED
        return SessionPhase.READY

    @property
    def can_generate(self) -> bool:
        return self.phase in {SessionPhase.READY, SessionPhase.FAILED}

    @property
    def can_save_favorite(self) -> bool:
        return self.generated_image is not None and self.current_user is not None


def upload_image(state: SessionState, image: EncodedImage) -> SessionState:
    """Replace the source photo and clear any previous result or error."""
    return replace(
        state,
        original_image=image,
        generated_image=None,
        generated_options=None,
        error=None,
    )


def record_error(state: SessionState, message: str) -> SessionState:
    return replace(state, error=message)


def set_options(state: SessionState, options: StylingOptions) -> SessionState:
    return replace(state, options=options)


def begin_generation(state: SessionState) -> SessionState:
    """Enter the generating phase; rejected unless Ready or Failed."""
    if not state.can_generate:
        return state
    return replace(state, is_loading=True, error=None)


def complete_generation(
    state: SessionState,
    source: EncodedImage,
    result: EncodedImage,
    options: StylingOptions,
) -> SessionState:
    """Apply a finished generation for the photo it was requested with."""
    if not state.is_loading:
        return state
    if state.original_image != source:
        return replace(state, is_loading=False)
    return replace(
        state,
        generated_image=result,
        generated_options=options,
        is_loading=False,
    )


def fail_generation(
    state: SessionState, source: EncodedImage, message: str
) -> SessionState:
    """Leave the generating phase with an error; the image pair is kept."""
    if not state.is_loading:
        return state
    if state.original_image != source:
        return replace(state, is_loading=False)
    return replace(state, error=message, is_loading=False)


def add_favorite(state: SessionState, look: SavedLook) -> SessionState:
    """Prepend a saved look for the signed-in user."""
    if not state.can_save_favorite:
        return state
    return replace(state, favorites=(look, *state.favorites))


def sign_in(
    state: SessionState, user: User, favorites: list[SavedLook]
) -> SessionState:
    return replace(state, current_user=user, favorites=tuple(favorites))


def sign_out(state: SessionState) -> SessionState:
    return replace(state, current_user=None, favorites=())
