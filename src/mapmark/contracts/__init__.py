"""Public contracts for mapmark."""

from mapmark.contracts.config import MapMarkConfig
from mapmark.contracts.exceptions import (
    ConfigError,
    HostChannelError,
    MapMarkError,
    NotFoundError,
    ParseError,
    QuotaExceededError,
    SnapshotValidationError,
    StorageIOError,
)
from mapmark.contracts.marker import MarkerCandidate, MarkerDocument, MarkerRecord
from mapmark.contracts.results import ExportResult, ImportResult, OperationResult, SaveResult
from mapmark.contracts.snapshot import SNAPSHOT_VERSION, ImportPlan, IncomingMarker, ResolvedMarker, Snapshot
from mapmark.contracts.store import RecordStore

__all__ = [
    "SNAPSHOT_VERSION",
    "ConfigError",
    "ExportResult",
    "HostChannelError",
    "ImportPlan",
    "ImportResult",
    "IncomingMarker",
    "MapMarkConfig",
    "MapMarkError",
    "MarkerCandidate",
    "MarkerDocument",
    "MarkerRecord",
    "NotFoundError",
    "OperationResult",
    "ParseError",
    "QuotaExceededError",
    "RecordStore",
    "ResolvedMarker",
    "SaveResult",
    "Snapshot",
    "SnapshotValidationError",
    "StorageIOError",
]
