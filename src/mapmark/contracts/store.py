"""Record store contract shared by every persistence backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, ClassVar

from mapmark.contracts.marker import MarkerCandidate, MarkerRecord


class RecordStore(ABC):
    """Durable key-value persistence of marker records.

    Callers depend only on this interface. Backend differences that matter to
    the repository are exposed as capabilities rather than backend identity:

    * ``resync_after_save``: the caller's view must be reloaded after a save
      because the backend may transform what it stores.
    * :meth:`fallback`: a last-known collection to present when :meth:`list`
      fails.
    """

    name: ClassVar[str] = "store"
    resync_after_save: ClassVar[bool] = False

    async def __aenter__(self) -> RecordStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @abstractmethod
    async def list(self) -> list[MarkerRecord]:
        """Return copies of all records in insertion order."""

    @abstractmethod
    async def get(self, marker_id: str) -> MarkerRecord:
        """Return the record with *marker_id*.

        Raises:
            NotFoundError: If no record has that id.
        """

    @abstractmethod
    async def upsert(self, candidate: MarkerCandidate, info: dict[str, Any]) -> str:
        """Create or replace a record and return its effective id.

        An empty ``candidate.id`` creates a record with a generated id. A known
        id replaces ``type``, ``lng``, ``lat`` and ``info`` while keeping
        ``created_at``. An unknown non-empty id creates a record under that id.

        Raises:
            StorageIOError: If the collection could not be persisted.
        """

    @abstractmethod
    async def delete(self, marker_id: str) -> None:
        """Remove the record with *marker_id*.

        Raises:
            NotFoundError: If no record has that id.
            StorageIOError: If the collection could not be persisted.
        """

    async def fallback(self) -> list[MarkerRecord] | None:
        """Most recent local snapshot, or ``None`` when the backend has none."""
        return None
