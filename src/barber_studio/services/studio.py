"""Studio session service that drives the state transitions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from barber_studio.domain import session as transitions
from barber_studio.domain.errors import CorruptRecordError, StudioError
from barber_studio.domain.images import EncodedImage
from barber_studio.domain.profiles import SavedLook, User
from barber_studio.domain.session import SessionState
from barber_studio.domain.styling import StylingOptions
from barber_studio.services.profiles import ProfileStore
from barber_studio.services.styling import GENERIC_FAILURE_MESSAGE, StylingService

_logger = logging.getLogger(__name__)

CORRUPT_PROFILE_MESSAGE = "Your saved profile could not be read and was ignored."


def _new_id() -> str:
    return uuid4().hex


def _now() -> datetime:
    """Current time truncated to the millisecond precision stored on disk."""
    now = datetime.now(tz=UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass
class StudioService:
    """Owns the session snapshot and performs side effects around transitions."""

    styling_service: StylingService
    profile_store: ProfileStore
    recover_accounts_by_email: bool = False
    id_factory: Callable[[], str] = _new_id
    clock: Callable[[], datetime] = _now
    state: SessionState = field(default_factory=SessionState)

    def restore(self) -> SessionState:
        """Restore a previously signed-in user and their favorites."""
        try:
            user = self.profile_store.load_current_user()
        except CorruptRecordError as exc:
            self._ignore_corrupt(exc)
            return self.state
        if user is None:
            return self.state
        favorites = self._load_favorites(user)
        self.state = transitions.sign_in(self.state, user, favorites)
        _logger.info("Restored user session: user_id=%s", user.id)
        return self.state

    def upload_image(
        self, image_bytes: bytes, mime_type: str | None = None
    ) -> SessionState:
        """Set a new source photo from uploaded file bytes."""
        try:
            image = EncodedImage.from_bytes(image_bytes, mime_type)
        except StudioError as exc:
            self.state = transitions.record_error(self.state, str(exc))
            return self.state
        self.state = transitions.upload_image(self.state, image)
        return self.state

    def set_options(self, options: StylingOptions) -> SessionState:
        self.state = transitions.set_options(self.state, options)
        return self.state

    async def generate(self) -> SessionState:
        """Request a restyled photo for the current image and options."""
        started = transitions.begin_generation(self.state)
        if started is self.state:
            _logger.info("Generation ignored: phase=%s", self.state.phase)
            return self.state
        self.state = started
        source = started.original_image
        options = started.options
        try:
            result = await self.styling_service.apply_style(source, options)
        except StudioError as exc:
            self.state = transitions.fail_generation(
                self.state, source, str(exc) or GENERIC_FAILURE_MESSAGE
            )
        except BaseException:
            _logger.warning("Generation aborted before completion")
            self.state = transitions.fail_generation(
                self.state, source, GENERIC_FAILURE_MESSAGE
            )
            raise
        else:
            self.state = transitions.complete_generation(
                self.state, source, result, options
            )
        return self.state

    def save_favorite(self) -> SessionState:
        """Save the generated image for the signed-in user."""
        state = self.state
        if not state.can_save_favorite:
            return state
        look = SavedLook(
            id=self.id_factory(),
            image_url=state.generated_image.to_data_url(),
            options=state.generated_options or state.options,
            created_at=self.clock(),
        )
        next_state = transitions.add_favorite(state, look)
        self.profile_store.save_favorites(
            state.current_user.id, list(next_state.favorites)
        )
        self.state = next_state
        return self.state

    def sign_in(self, email: str, name: str | None = None) -> SessionState:
        """Sign in, persist the user as current and load their favorites."""
        user_id = None
        if self.recover_accounts_by_email:
            try:
                user_id = self.profile_store.find_account_id(email)
            except CorruptRecordError as exc:
                self._ignore_corrupt(exc)
        user = User.create(user_id or self.id_factory(), email, name)
        self.profile_store.save_current_user(user)
        if self.recover_accounts_by_email:
            self.profile_store.remember_account(user)
        favorites = self._load_favorites(user)
        self.state = transitions.sign_in(self.state, user, favorites)
        _logger.info("User signed in: user_id=%s", user.id)
        return self.state

    def sign_out(self) -> SessionState:
        """Sign out; the user's saved looks remain in the store."""
        try:
            self.profile_store.clear_current_user()
        except CorruptRecordError as exc:
            self._ignore_corrupt(exc)
        finally:
            self.state = transitions.sign_out(self.state)
        return self.state

    def export_generated(self) -> EncodedImage | None:
        """Return the current generated image for download."""
        return self.state.generated_image

    def _load_favorites(self, user: User) -> list[SavedLook]:
        try:
            return self.profile_store.load_favorites(user.id)
        except CorruptRecordError as exc:
            self._ignore_corrupt(exc)
            return []

    def _ignore_corrupt(self, exc: CorruptRecordError) -> None:
        _logger.warning("Ignoring corrupt profile record: key=%s", exc.key)
        self.state = transitions.record_error(self.state, CORRUPT_PROFILE_MESSAGE)
