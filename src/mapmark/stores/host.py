"""Record store backed by the process-resident host database."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from mapmark.contracts.exceptions import NotFoundError, StorageIOError
from mapmark.contracts.marker import MarkerCandidate, MarkerRecord
from mapmark.contracts.store import RecordStore
from mapmark.host.bridge import HostBridge
from mapmark.host.process import NOT_FOUND_MESSAGE

logger = logging.getLogger(__name__)


class HostStore(RecordStore):
    """Talks to the host process over its request/response bridge.

    The host may normalize what it stores, so callers reload after saving.
    """

    name = "host"
    resync_after_save = True

    def __init__(self, bridge: HostBridge) -> None:
        self._bridge = bridge

    async def list(self) -> list[MarkerRecord]:
        response = await self._request("get_all_markers")
        return [self._to_record(item) for item in response.get("data") or []]

    async def get(self, marker_id: str) -> MarkerRecord:
        response = await self._request("get_marker", marker_id, marker_id=marker_id)
        return self._to_record(response.get("data"))

    async def upsert(self, candidate: MarkerCandidate, info: dict[str, Any]) -> str:
        response = await self._request("save_marker", candidate.model_dump(mode="json"), info)
        data = response.get("data") or {}
        return str(data["id"])

    async def delete(self, marker_id: str) -> None:
        await self._request("delete_marker", marker_id, marker_id=marker_id)

    async def _request(self, method: str, *args: Any, marker_id: str | None = None) -> dict[str, Any]:
        try:
            response = await getattr(self._bridge, method)(*args)
        except (TypeError, ValueError) as exc:
            raise StorageIOError(f"request could not be serialized: {exc}") from exc
        if response.get("success"):
            return response
        error = str(response.get("error") or "unknown host error")
        if marker_id is not None and error == NOT_FOUND_MESSAGE:
            raise NotFoundError(marker_id, error)
        logger.error("Host request %s failed: %s", method, error)
        raise StorageIOError(error)

    @staticmethod
    def _to_record(payload: Any) -> MarkerRecord:
        try:
            return MarkerRecord.model_validate(payload)
        except ValidationError as exc:
            raise StorageIOError(f"host returned a malformed marker: {exc}") from exc
