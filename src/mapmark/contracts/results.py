"""Result contracts returned by the marker repository."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class OperationResult(BaseModel):
    success: bool
    error: str | None = None


class SaveResult(OperationResult):
    id: str | None = None


class ExportResult(OperationResult):
    path: Path | None = None
    count: int = 0


class ImportResult(OperationResult):
    count: int = 0
    new_count: int = 0
    overwritten_count: int = 0
    renamed_count: int = 0
