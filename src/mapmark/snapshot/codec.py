"""Snapshot encoding and parsing."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any

from pydantic import ValidationError

from mapmark.contracts.exceptions import ParseError, SnapshotValidationError
from mapmark.contracts.marker import MarkerRecord
from mapmark.contracts.snapshot import SNAPSHOT_VERSION, IncomingMarker, Snapshot


def iso_timestamp(moment: datetime) -> str:
    """Format *moment* as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def snapshot_filename(day: date) -> str:
    return f"map-record-{day.isoformat()}.json"


def encode_snapshot(records: Iterable[MarkerRecord], *, now: datetime | None = None) -> Snapshot:
    """Build a snapshot of *records*; records are trusted, not re-validated."""
    moment = now or datetime.now(timezone.utc)
    return Snapshot(
        markers=list(records),
        export_time=iso_timestamp(moment),
        version=SNAPSHOT_VERSION,
    )


def dump_snapshot(snapshot: Snapshot) -> str:
    return snapshot.model_dump_json(indent=2, by_alias=True)


def parse_snapshot(text: str) -> list[IncomingMarker]:
    """Parse an import document into candidate markers.

    Raises:
        ParseError: If *text* is not valid JSON.
        SnapshotValidationError: If ``markers`` is missing, not an array, or
            holds entries that are not usable marker objects.
    """
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON in snapshot: {exc.msg} (line {exc.lineno})") from exc

    if not isinstance(payload, dict):
        raise SnapshotValidationError("snapshot root must be an object")
    if "markers" not in payload:
        raise SnapshotValidationError("snapshot must contain a 'markers' array")
    raw_markers = payload["markers"]
    if not isinstance(raw_markers, list):
        raise SnapshotValidationError("snapshot 'markers' must be an array")

    incoming: list[IncomingMarker] = []
    for index, raw in enumerate(raw_markers):
        if not isinstance(raw, dict):
            raise SnapshotValidationError(f"marker #{index} must be an object")
        entry = dict(raw)
        if entry.get("id") is None:
            entry["id"] = ""
        if entry.get("info") is None:
            entry["info"] = {}
        try:
            incoming.append(IncomingMarker.model_validate(entry))
        except ValidationError as exc:
            raise SnapshotValidationError(f"marker #{index} is invalid: {exc}") from exc
    return incoming
