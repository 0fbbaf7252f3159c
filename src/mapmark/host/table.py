"""In-memory marker table mirrored to a single JSON document on disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mapmark.contracts.exceptions import NotFoundError, StorageIOError
from mapmark.contracts.marker import MarkerCandidate, MarkerDocument, MarkerRecord
from mapmark.ids import generate_marker_id, now_ms

logger = logging.getLogger(__name__)


class MarkerTable:
    """The host process's authoritative marker table.

    Only one logical call runs at a time (single event loop), so the table is
    not locked. Every mutation rewrites the whole document; if that write
    fails the in-memory state is kept and stays authoritative.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._records: list[MarkerRecord] = []

    @property
    def path(self) -> Path:
        return self._path

    def init(self) -> None:
        """Load the document, creating or self-healing it when needed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create data directory %s: %s", self._path.parent, exc)

        if not self._path.exists():
            self._records = []
            self._flush_logged()
            return

        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
            document = MarkerDocument.model_validate(payload)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Failed to load marker database %s, resetting to empty: %s", self._path, exc)
            self._records = []
            self._flush_logged()
            return
        self._records = list(document.markers)
        logger.debug("Loaded %d marker(s) from %s", len(self._records), self._path)

    def flush(self) -> None:
        """Write the full table to disk.

        Raises:
            StorageIOError: If the document could not be written.
        """
        text = MarkerDocument(markers=self._records).model_dump_json(indent=2)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            tmp_path.write_text(text, encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            logger.error("Failed to save marker database %s: %s", self._path, exc)
            raise StorageIOError(f"failed to save marker database: {exc}") from exc

    def all(self) -> list[MarkerRecord]:
        return [record.model_copy(deep=True) for record in self._records]

    def find(self, marker_id: str) -> MarkerRecord | None:
        for record in self._records:
            if record.id == marker_id:
                return record.model_copy(deep=True)
        return None

    def save(self, candidate: MarkerCandidate, info: dict[str, Any]) -> str:
        now = now_ms()
        index = self._index_of(candidate.id) if candidate.id else -1
        if index >= 0:
            current = self._records[index]
            self._records[index] = current.replaced(candidate, info, now=max(now, current.updated_at))
            marker_id = current.id
        else:
            marker_id = candidate.id or generate_marker_id()
            self._records.append(
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
        self.flush()
        return marker_id

    def remove(self, marker_id: str) -> None:
        index = self._index_of(marker_id)
        if index < 0:
            raise NotFoundError(marker_id)
        del self._records[index]
        self.flush()

    def _index_of(self, marker_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == marker_id:
                return index
        return -1

    def _flush_logged(self) -> None:
        try:
            self.flush()
        except StorageIOError:
            logger.warning("Continuing with in-memory marker table only: %s", self._path)
