"""Marker repository: the single façade over the active record store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from mapmark.contracts.exceptions import MapMarkError, StorageIOError
from mapmark.contracts.marker import MarkerCandidate, MarkerRecord
from mapmark.contracts.results import ExportResult, ImportResult, OperationResult, SaveResult
from mapmark.contracts.store import RecordStore
from mapmark.notify import LoggingNotifier, Notifier
from mapmark.snapshot.codec import dump_snapshot, encode_snapshot, parse_snapshot, snapshot_filename
from mapmark.snapshot.merge import describe_import, plan_import

logger = logging.getLogger(__name__)


class MarkerRepository:
    """Uniform CRUD and import/export over whichever store is active.

    Keeps an in-memory view of the collection for presentation. The view is a
    snapshot and may lag the store; every operation reports its outcome as a
    result model and through the notifier instead of raising.
    """

    def __init__(self, store: RecordStore, *, notifier: Notifier | None = None) -> None:
        self._store = store
        self._notifier = notifier or LoggingNotifier()
        self._markers: list[MarkerRecord] = []
        self._loading = False

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def markers(self) -> list[MarkerRecord]:
        return list(self._markers)

    @property
    def loading(self) -> bool:
        return self._loading

    def get_by_id(self, marker_id: str) -> MarkerRecord | None:
        for record in self._markers:
            if record.id == marker_id:
                return record
        return None

    async def load_all(self) -> None:
        """Refresh the view from the store, falling back to a local snapshot on failure."""
        self._loading = True
        try:
            self._markers = await self._store.list()
        except MapMarkError as exc:
            logger.error("Failed to load markers from %s store: %s", self._store.name, exc)
            self._notifier.error(f"Failed to load markers: {exc}")
            fallback = await self._store.fallback()
            if fallback is not None:
                logger.warning("Showing last local snapshot of %d marker(s)", len(fallback))
                self._markers = fallback
        finally:
            self._loading = False

    async def save(self, candidate: MarkerCandidate, info: dict[str, Any] | None = None) -> SaveResult:
        try:
            marker_id = await self._store.upsert(candidate, dict(info or {}))
        except MapMarkError as exc:
            self._notifier.error(f"Save failed: {exc}")
            return SaveResult(success=False, error=str(exc))

        if self._store.resync_after_save:
            await self.load_all()
        else:
            await self._refresh_in_view(marker_id)
        self._notifier.success("Saved")
        return SaveResult(success=True, id=marker_id)

    async def delete(self, marker_id: str) -> OperationResult:
        try:
            await self._store.delete(marker_id)
        except MapMarkError as exc:
            self._notifier.error(f"Delete failed: {exc}")
            return OperationResult(success=False, error=str(exc))

        self._markers = [record for record in self._markers if record.id != marker_id]
        self._notifier.success("Deleted")
        return OperationResult(success=True)

    async def export_snapshot(self, destination: Path, *, now: datetime | None = None) -> ExportResult:
        """Write the full collection as a snapshot file.

        A directory *destination* receives ``map-record-<date>.json``.
        """
        moment = now or datetime.now(timezone.utc)
        try:
            records = await self._store.list()
            snapshot = encode_snapshot(records, now=moment)
            path = destination / snapshot_filename(moment.date()) if destination.is_dir() else destination
            _write_text(path, dump_snapshot(snapshot))
        except MapMarkError as exc:
            self._notifier.error(f"Export failed: {exc}")
            return ExportResult(success=False, error=str(exc))

        self._notifier.success(f"Exported {len(records)} marker(s) to {path}")
        return ExportResult(success=True, path=path, count=len(records))

    async def import_snapshot(self, source: Path, *, avoid_overwrite: bool = False) -> ImportResult:
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self._notifier.error(f"Import failed: could not read {source}")
            return ImportResult(success=False, error=f"failed reading snapshot file: {exc}")
        return await self.import_snapshot_text(text, avoid_overwrite=avoid_overwrite)

    async def import_snapshot_text(self, text: str, *, avoid_overwrite: bool = False) -> ImportResult:
        """Merge a snapshot document into the store.

        Nothing is applied when the document fails to parse or validate. A
        store failure part-way through leaves already applied markers in place
        and reports what was applied.
        """
        try:
            incoming = parse_snapshot(text)
            existing = await self._store.list()
        except MapMarkError as exc:
            self._notifier.error(f"Import failed: {exc}")
            return ImportResult(success=False, error=str(exc))

        plan = plan_import(incoming, (record.id for record in existing), avoid_overwrite=avoid_overwrite)

        applied = ImportResult(success=True, count=plan.count)
        for resolved in plan.resolved:
            marker = resolved.marker
            candidate = MarkerCandidate(id=resolved.final_id, type=marker.type, lng=marker.lng, lat=marker.lat)
            try:
                await self._store.upsert(candidate, marker.info)
            except MapMarkError as exc:
                logger.error("Import stopped after %d marker(s): %s", _applied_total(applied), exc)
                await self.load_all()
                self._notifier.error(f"Import failed: {exc}")
                return applied.model_copy(update={"success": False, "error": str(exc)})
            if resolved.overwrites:
                applied.overwritten_count += 1
            else:
                applied.new_count += 1
                if resolved.renamed:
                    applied.renamed_count += 1

        await self.load_all()
        self._notifier.success(describe_import(applied))
        return applied

    async def _refresh_in_view(self, marker_id: str) -> None:
        try:
            record = await self._store.get(marker_id)
        except MapMarkError as exc:
            logger.warning("Could not refresh marker %s in view, reloading: %s", marker_id, exc)
            await self.load_all()
            return
        markers = list(self._markers)
        for index, current in enumerate(markers):
            if current.id == marker_id:
                markers[index] = record
                break
        else:
            markers.append(record)
        self._markers = markers


def _applied_total(result: ImportResult) -> int:
    return result.new_count + result.overwritten_count


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise StorageIOError(f"failed writing snapshot file: {path}") from exc
