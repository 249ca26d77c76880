"""Credentials and preference management."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from macro_hunt.domain.credentials import Credentials

_logger = logging.getLogger(__name__)

SECRET_FIELDS = ("craft_token", "gemini_key")


class CredentialsRepository(Protocol):
    """Persistence interface for stored credentials."""

    def load(self) -> dict[str, object] | None:
        """Return stored values, or None when nothing was saved yet."""

    def save(self, credentials: Credentials) -> None:
        """Persist the full credentials bundle."""


@dataclass
class CredentialsService:
    """Loads credentials once, then persists every later change.

    ``load`` only reads. Writes happen through ``update`` and ``clear_secrets``,
    which always start from loaded values so defaults are never written back
    over stored ones.
    """

    repository: CredentialsRepository
    defaults: Credentials = field(default_factory=Credentials)
    _current: Credentials | None = field(default=None, init=False, repr=False)

    def load(self) -> Credentials:
        """Read stored credentials, falling back to defaults per field."""
        stored = self.repository.load() or {}
        values = self.defaults.model_dump()
        values.update({key: value for key, value in stored.items() if key in values})
        self._current = Credentials.model_validate(values)
        return self._current

    @property
    def current(self) -> Credentials:
        """Return the loaded credentials, loading them on first access."""
        if self._current is None:
            return self.load()
        return self._current

    def update(self, **changes: object) -> Credentials:
        """Apply changes and persist them."""
        updated = Credentials.model_validate(
            {**self.current.model_dump(), **changes}
        )
        self.repository.save(updated)
        self._current = updated
        _logger.info("Saved credentials: fields=%s", sorted(changes))
        return updated

    def clear_secrets(self) -> Credentials:
        """Blank the stored API token and AI key."""
        return self.update(**dict.fromkeys(SECRET_FIELDS, ""))
