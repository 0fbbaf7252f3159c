"""Public API surface for mapmark."""

from mapmark.config import default_config, load_config
from mapmark.contracts.config import MapMarkConfig
from mapmark.contracts.exceptions import (
    ConfigError,
    MapMarkError,
    NotFoundError,
    ParseError,
    QuotaExceededError,
    SnapshotValidationError,
    StorageIOError,
)
from mapmark.contracts.marker import MarkerCandidate, MarkerRecord
from mapmark.contracts.results import ExportResult, ImportResult, OperationResult, SaveResult
from mapmark.contracts.snapshot import Snapshot
from mapmark.contracts.store import RecordStore
from mapmark.host import HostBridge, HostProcess
from mapmark.notify import LoggingNotifier, Notifier, NullNotifier, RichNotifier
from mapmark.repository import MarkerRepository
from mapmark.sdk import MapMark
from mapmark.stores import HostStore, LocalStore, create_store

__all__ = [
    "ConfigError",
    "ExportResult",
    "HostBridge",
    "HostProcess",
    "HostStore",
    "ImportResult",
    "LocalStore",
    "LoggingNotifier",
    "MapMark",
    "MapMarkConfig",
    "MapMarkError",
    "MarkerCandidate",
    "MarkerRecord",
    "MarkerRepository",
    "NotFoundError",
    "Notifier",
    "NullNotifier",
    "OperationResult",
    "ParseError",
    "QuotaExceededError",
    "RecordStore",
    "RichNotifier",
    "SaveResult",
    "Snapshot",
    "SnapshotValidationError",
    "StorageIOError",
    "create_store",
    "default_config",
    "load_config",
]
