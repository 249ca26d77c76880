"""Dual-write of meals to the document service and the local store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol
from uuid import UUID

from macro_hunt.domain.credentials import Credentials
from macro_hunt.domain.meals import MealRecord
from macro_hunt.errors import APIError

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for locally stored meals."""

    def insert(self, meal: MealRecord) -> None:
        """Insert or replace a meal."""

    def delete(self, meal: MealRecord) -> None:
        """Delete a meal."""

    def get(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""

    def list_in_range(self, start: datetime, end: datetime) -> list[MealRecord]:
        """Return meals with start <= date < end, oldest first."""

    def list_all(self) -> list[MealRecord]:
        """Return every meal, newest first."""


class DocumentSyncClient(Protocol):
    """Interface for the remote document collection."""

    async def create_record(self, collection_id: str, meal: MealRecord) -> str:
        """Create a remote record and return its document id."""

    async def delete_record(self, collection_id: str, document_id: str) -> None:
        """Delete a remote record."""

    async def attach_content(
        self, document_id: str, photos: list[bytes], description: str
    ) -> None:
        """Attach photos and a description to a remote record."""


class SyncState(Enum):
    """Progress of a single save."""

    NOT_STARTED = "not_started"
    REMOTE_CREATED = "remote_created"
    LOCAL_COMMITTED = "local_committed"
    FAILED = "failed"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a successful save.

    ``attach_error`` holds the failure of the best-effort content attachment,
    if any; the meal is committed either way.
    """

    meal: MealRecord
    state: SyncState
    attach_error: APIError | None = None

    @property
    def synced(self) -> bool:
        """Return True when the meal exists on the document service."""
        return self.meal.remote_document_id is not None


@dataclass
class MealSyncService:
    """Orders remote writes before local commits.

    Creating the remote record is mandatory when credentials are configured:
    if it fails nothing is stored locally. Attaching photos and notes is
    best-effort. Deletes go remote first as well, so a failed remote delete
    leaves the local meal in place.
    """

    repository: MealRepository
    credentials_provider: Callable[[], Credentials]
    client_factory: Callable[[Credentials], DocumentSyncClient]

    async def save_with_sync(self, meal: MealRecord) -> SaveResult:
        """Create the remote record, attach content, then commit locally."""
        credentials = self.credentials_provider()
        state = SyncState.NOT_STARTED
        attach_error: APIError | None = None

        if not credentials.is_valid:
            _logger.info("Credentials incomplete, saving meal %s locally", meal.id)
        else:
            client = self.client_factory(credentials)
            try:
                document_id = await client.create_record(
                    credentials.collection_id, meal
                )
            except APIError as exc:
                _log_transition(meal, state, SyncState.FAILED, exc.description)
                raise
            meal.remote_document_id = document_id
            state = _log_transition(meal, state, SyncState.REMOTE_CREATED)

            if meal.has_content:
                try:
                    await client.attach_content(document_id, meal.photos, meal.notes)
                except APIError as exc:
                    attach_error = exc
                    _logger.warning(
                        "Attaching content to document %s failed: %s",
                        document_id,
                        exc.description,
                    )

        self._commit(meal, state)
        state = _log_transition(meal, state, SyncState.LOCAL_COMMITTED)
        return SaveResult(meal=meal, state=state, attach_error=attach_error)

    def save_local_only(self, meal: MealRecord) -> SaveResult:
        """Commit a meal locally without contacting the document service."""
        self._commit(meal, SyncState.NOT_STARTED)
        return SaveResult(meal=meal, state=SyncState.LOCAL_COMMITTED)

    async def delete_with_sync(self, meal: MealRecord) -> None:
        """Delete the remote record when there is one, then the local meal."""
        credentials = self.credentials_provider()
        if credentials.is_valid and meal.remote_document_id:
            client = self.client_factory(credentials)
            await client.delete_record(
                credentials.collection_id, meal.remote_document_id
            )
            _logger.info("Deleted remote document %s", meal.remote_document_id)
        self.repository.delete(meal)
        _logger.info("Deleted meal %s", meal.id)

    def _commit(self, meal: MealRecord, state: SyncState) -> None:
        try:
            self.repository.insert(meal)
        except Exception as exc:
            _log_transition(meal, state, SyncState.FAILED, str(exc))
            raise


def _log_transition(
    meal: MealRecord,
    current: SyncState,
    target: SyncState,
    reason: str | None = None,
) -> SyncState:
    if reason:
        _logger.warning(
            "Meal %s: %s -> %s (%s)", meal.id, current.value, target.value, reason
        )
    else:
        _logger.info("Meal %s: %s -> %s", meal.id, current.value, target.value)
    return target
