"""Profile store for the signed-in user and their saved looks."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from barber_studio.domain.errors import CorruptRecordError
from barber_studio.domain.profiles import SavedLook, User

T = TypeVar("T")


class KeyValueStore(Protocol):
    """Persistence interface for text values addressed by string keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def remove(self, key: str) -> None:
        """Delete a value; missing keys are ignored."""


@dataclass
class ProfileStore:
    """Maps users and their favorites onto namespaced store keys."""

    store: KeyValueStore
    namespace: str = "barber"

    @property
    def current_user_key(self) -> str:
        return f"{self.namespace}_user"

    def favorites_key(self, user_id: str) -> str:
        return f"{self.namespace}_favs_{user_id}"

    def account_key(self, email: str) -> str:
        return f"{self.namespace}_account_{email.strip().lower()}"

    def load_current_user(self) -> User | None:
        """Return the persisted current user, if any."""
        record = self._read(self.current_user_key)
        if record is None:
            return None
        return _decode(self.current_user_key, User.from_record, record)

    def save_current_user(self, user: User) -> None:
        self._write(self.current_user_key, user.to_record())

    def clear_current_user(self) -> None:
        """Forget the current user; their saved looks stay in the store."""
        self.store.remove(self.current_user_key)

    def load_favorites(self, user_id: str) -> list[SavedLook]:
        """Return the user's saved looks, newest first."""
        key = self.favorites_key(user_id)
        record = self._read(key)
        if record is None:
            return []
        if not isinstance(record, list):
            raise CorruptRecordError(key)
        return [_decode(key, SavedLook.from_record, item) for item in record]

    def save_favorites(self, user_id: str, favorites: list[SavedLook]) -> None:
        self._write(
            self.favorites_key(user_id), [look.to_record() for look in favorites]
        )

    def find_account_id(self, email: str) -> str | None:
        """Return the user id previously recorded for an email."""
        key = self.account_key(email)
        record = self._read(key)
        if record is None:
            return None
        if not isinstance(record, str):
            raise CorruptRecordError(key)
        return record

    def remember_account(self, user: User) -> None:
        self._write(self.account_key(user.email), user.id)

    def _read(self, key: str) -> object | None:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(key) from exc

    def _write(self, key: str, value: object) -> None:
        self.store.set(key, json.dumps(value))


def _decode(
    key: str, factory: Callable[[dict[str, object]], T], record: object
) -> T:
    """Build a domain value from a decoded record or report it as corrupt."""
    if not isinstance(record, dict):
        raise CorruptRecordError(key)
    try:
        return factory(record)
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptRecordError(key) from exc
