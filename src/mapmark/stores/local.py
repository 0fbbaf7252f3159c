"""Record store kept in client-local key-value storage."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from mapmark.contracts.config import DEFAULT_STORAGE_KEY
from mapmark.contracts.exceptions import NotFoundError, ParseError, StorageIOError
from mapmark.contracts.marker import MarkerCandidate, MarkerDocument, MarkerRecord
from mapmark.contracts.store import RecordStore
from mapmark.ids import generate_marker_id, now_ms
from mapmark.local_storage import LocalStorage

logger = logging.getLogger(__name__)


class LocalStore(RecordStore):
    """Stores ``{"markers": [...]}`` under one well-known key.

    The collection is only replaced in memory after the blob has been
    written, so a failed write leaves both copies at the previous state.
    """

    name = "local"
    resync_after_save = False

    def __init__(self, storage: LocalStorage, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._records: list[MarkerRecord] | None = None

    @property
    def key(self) -> str:
        return self._key

    async def list(self) -> list[MarkerRecord]:
        self._records = self._read()
        return _copies(self._records)

    async def get(self, marker_id: str) -> MarkerRecord:
        for record in self._current():
            if record.id == marker_id:
                return record.model_copy(deep=True)
        raise NotFoundError(marker_id)

    async def upsert(self, candidate: MarkerCandidate, info: dict[str, Any]) -> str:
        records = list(self._current())
        now = now_ms()
        index = _index_of(records, candidate.id) if candidate.id else -1
        if index >= 0:
            current = records[index]
            records[index] = current.replaced(candidate, info, now=max(now, current.updated_at))
            marker_id = current.id
        else:
            marker_id = candidate.id or generate_marker_id()
            records.append(
                MarkerRecord(
                    id=marker_id,
                    type=candidate.type,
                    lng=candidate.lng,
                    lat=candidate.lat,
                    created_at=now,
                    updated_at=now,
                    info=dict(info),
                )
            )
        self._write(records)
        return marker_id

    async def delete(self, marker_id: str) -> None:
        records = list(self._current())
        index = _index_of(records, marker_id)
        if index < 0:
            raise NotFoundError(marker_id)
        del records[index]
        self._write(records)

    async def fallback(self) -> list[MarkerRecord] | None:
        if self._records is None:
            return None
        return _copies(self._records)

    def _current(self) -> list[MarkerRecord]:
        """Collection that mutations build on.

        An unreadable blob is replaced by the next successful write, starting
        from the last good collection or an empty one.
        """
        if self._records is None:
            try:
                self._records = self._read()
            except ParseError:
                logger.warning("Discarding unreadable local marker data under key %r", self._key)
                self._records = []
        return self._records

    def _read(self) -> list[MarkerRecord]:
        try:
            raw = self._storage.get_item(self._key)
        except ParseError as exc:
            logger.error("Failed to load markers from local storage key %r: %s", self._key, exc)
            raise
        if raw is None:
            return []
        try:
            payload: Any = json.loads(raw)
            return list(MarkerDocument.model_validate(payload).markers)
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.error("Failed to load markers from local storage key %r: %s", self._key, exc)
            raise ParseError(f"corrupt local marker data: {exc}") from exc

    def _write(self, records: list[MarkerRecord]) -> None:
        try:
            text = MarkerDocument(markers=records).model_dump_json()
        except PydanticSerializationError as exc:
            raise StorageIOError(f"marker data could not be serialized: {exc}") from exc
        try:
            self._storage.set_item(self._key, text)
        except StorageIOError as exc:
            logger.error("Failed to save markers to local storage: %s", exc)
            raise
        self._records = records


def _index_of(records: list[MarkerRecord], marker_id: str) -> int:
    for index, record in enumerate(records):
        if record.id == marker_id:
            return index
    return -1


def _copies(records: list[MarkerRecord]) -> list[MarkerRecord]:
    return [record.model_copy(deep=True) for record in records]
