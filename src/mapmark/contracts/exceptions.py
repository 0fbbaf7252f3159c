"""Exception hierarchy for mapmark.

All mapmark exceptions inherit from :class:`MapMarkError`, so the repository
boundary can convert any store failure into a result object with a single
``except`` clause while stores still raise specific failure modes.
"""

from __future__ import annotations


class MapMarkError(Exception):
    """Base exception for all mapmark errors."""


class ConfigError(MapMarkError):
    """Configuration loading or validation failure."""


class NotFoundError(MapMarkError):
    """Operation targets a marker id that does not exist."""

    def __init__(self, marker_id: str, message: str = "Marker not found") -> None:
        super().__init__(message)
        self.marker_id = marker_id


class StorageIOError(MapMarkError):
    """Disk or client storage failure while reading or writing markers."""


class QuotaExceededError(StorageIOError):
    """Local storage quota would be exceeded by a write."""

    def __init__(self, message: str, *, quota_bytes: int, required_bytes: int) -> None:
        super().__init__(message)
        self.quota_bytes = quota_bytes
        self.required_bytes = required_bytes


class ParseError(MapMarkError):
    """Persisted document or import file is not valid JSON."""


class SnapshotValidationError(MapMarkError):
    """Import document has a missing or malformed ``markers`` field."""


class HostChannelError(MapMarkError):
    """Request sent to a host channel that has no registered handler."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"No handler registered for channel: {channel}")
        self.channel = channel
