"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

BACKENDS = ("auto", "host", "local")
DEFAULT_STORAGE_KEY = "map-record-markers"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class MapMarkConfig(BaseModel):
    backend: str = "auto"
    data_dir: Path = Path("data")
    data_file: str = "markers.json"
    local_storage_dir: Path = Path(".local-storage")
    local_storage_key: str = DEFAULT_STORAGE_KEY
    quota_bytes: int = Field(default=DEFAULT_QUOTA_BYTES, ge=1)

    model_config = {"frozen": True}

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in BACKENDS:
            raise ValueError(f"backend must be one of: {', '.join(BACKENDS)}")
        return normalized

    @field_validator("data_file", "local_storage_key")
    @classmethod
    def validate_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value

    @property
    def data_path(self) -> Path:
        return self.data_dir / self.data_file
