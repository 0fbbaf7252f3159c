"""Marker record contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MarkerCandidate(BaseModel):
    """Marker fields supplied by a caller to ``save``/``upsert``.

    An empty ``id`` means the marker has not been stored yet.
    """

    id: str = ""
    type: str
    lng: float
    lat: float


class MarkerRecord(BaseModel):
    """A stored marker. Records are immutable; updates build a new value."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    lng: float
    lat: float
    created_at: int
    updated_at: int
    info: dict[str, Any] = Field(default_factory=dict)

    def replaced(self, candidate: MarkerCandidate, info: dict[str, Any], *, now: int) -> MarkerRecord:
        """Return a copy with the mutable fields replaced and ``updated_at`` advanced."""
        return self.model_copy(
            update={
                "type": candidate.type,
                "lng": candidate.lng,
                "lat": candidate.lat,
                "info": dict(info),
                "updated_at": now,
            }
        )


class MarkerDocument(BaseModel):
    """Persisted ``{"markers": [...]}`` document shared by both backends."""

    markers: list[MarkerRecord] = Field(default_factory=list)
