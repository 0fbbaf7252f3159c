"""Snapshot (export/import file) contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mapmark.contracts.marker import MarkerRecord

SNAPSHOT_VERSION = "1.0"


class Snapshot(BaseModel):
    """Portable document representing an exported marker collection."""

    model_config = ConfigDict(populate_by_name=True)

    markers: list[MarkerRecord] = Field(default_factory=list)
    export_time: str = Field(alias="exportTime")
    version: str = SNAPSHOT_VERSION


class IncomingMarker(BaseModel):
    """A candidate record parsed from an import file.

    Timestamps are accepted but not trusted; the store assigns its own.
    """

    id: str = ""
    type: str = ""
    lng: float
    lat: float
    info: dict[str, Any] = Field(default_factory=dict)
    created_at: int | None = None
    updated_at: int | None = None


class ResolvedMarker(BaseModel):
    """An incoming marker after id conflict resolution."""

    model_config = ConfigDict(frozen=True)

    marker: IncomingMarker
    final_id: str
    overwrites: bool = False
    renamed: bool = False


class ImportPlan(BaseModel):
    resolved: list[ResolvedMarker] = Field(default_factory=list)
    count: int = 0
    new_count: int = 0
    overwritten_count: int = 0
    renamed_count: int = 0
