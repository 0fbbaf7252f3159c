"""Long-lived host process owning the marker table.

Requests arrive on named channels and are answered with plain response
dicts (``{"success": ..., "data": ..., "error": ...}``). Handlers never
raise; every failure becomes a failed response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mapmark.contracts.exceptions import MapMarkError, NotFoundError
from mapmark.contracts.marker import MarkerCandidate
from mapmark.host.table import MarkerTable

logger = logging.getLogger(__name__)

Handler = Callable[[Any], dict[str, Any]]

GET_ALL_MARKERS = "db:getAllMarkers"
GET_MARKER = "db:getMarker"
SAVE_MARKER = "db:saveMarker"
DELETE_MARKER = "db:deleteMarker"

NOT_FOUND_MESSAGE = "Marker not found"


class HostProcess:
    """Host side of the marker database: table ownership plus request handlers."""

    def __init__(self, data_path: Path) -> None:
        self._table = MarkerTable(data_path)
        self._handlers: dict[str, Handler] = {}
        self._started = False
        self.handle(GET_ALL_MARKERS, self._get_all_markers)
        self.handle(GET_MARKER, self._get_marker)
        self.handle(SAVE_MARKER, self._save_marker)
        self.handle(DELETE_MARKER, self._delete_marker)

    @property
    def table(self) -> MarkerTable:
        return self._table

    @property
    def started(self) -> bool:
        return self._started

    def handle(self, channel: str, handler: Handler) -> None:
        self._handlers[channel] = handler

    def handler_for(self, channel: str) -> Handler | None:
        return self._handlers.get(channel)

    def start(self) -> None:
        self._table.init()
        self._started = True

    def shutdown(self) -> None:
        """Flush the table to disk before the process exits."""
        if not self._started:
            return
        try:
            self._table.flush()
        except MapMarkError:
            logger.error("Marker table could not be flushed on shutdown: %s", self._table.path)
        self._started = False

    def _get_all_markers(self, _payload: Any) -> dict[str, Any]:
        records = self._table.all()
        return {"success": True, "data": [record.model_dump(mode="json") for record in records]}

    def _get_marker(self, payload: Any) -> dict[str, Any]:
        record = self._table.find(str(payload or ""))
        if record is None:
            return {"success": False, "error": NOT_FOUND_MESSAGE}
        return {"success": True, "data": record.model_dump(mode="json")}

    def _save_marker(self, payload: Any) -> dict[str, Any]:
        try:
            candidate = MarkerCandidate.model_validate(payload["marker"])
            info = dict(payload.get("info") or {})
            marker_id = self._table.save(candidate, info)
        except (KeyError, TypeError, ValidationError) as exc:
            return {"success": False, "error": f"invalid save request: {exc}"}
        except MapMarkError as exc:
            return {"success": False, "error": str(exc)}
        return {"success": True, "data": {"id": marker_id}}

    def _delete_marker(self, payload: Any) -> dict[str, Any]:
        try:
            self._table.remove(str(payload or ""))
        except NotFoundError:
            return {"success": False, "error": NOT_FOUND_MESSAGE}
        except MapMarkError as exc:
            return {"success": False, "error": str(exc)}
        return {"success": True}
