"""Caller-side request/response channel to the host process."""

from __future__ import annotations

import json
import logging
from typing import Any

from mapmark.contracts.exceptions import HostChannelError
from mapmark.host.process import DELETE_MARKER, GET_ALL_MARKERS, GET_MARKER, SAVE_MARKER, HostProcess

logger = logging.getLogger(__name__)


def _cross_boundary(value: Any) -> Any:
    # Requests and responses are copied by value, never shared.
    return json.loads(json.dumps(value))


class HostBridge:
    """Invoke host channels the way a renderer talks to its main process."""

    def __init__(self, host: HostProcess) -> None:
        self._host = host

    @property
    def host(self) -> HostProcess:
        return self._host

    async def invoke(self, channel: str, payload: Any = None) -> dict[str, Any]:
        handler = self._host.handler_for(channel)
        if handler is None:
            raise HostChannelError(channel)
        logger.debug("invoke %s", channel)
        response = handler(_cross_boundary(payload))
        return _cross_boundary(response)

    async def get_all_markers(self) -> dict[str, Any]:
        return await self.invoke(GET_ALL_MARKERS)

    async def get_marker(self, marker_id: str) -> dict[str, Any]:
        return await self.invoke(GET_MARKER, marker_id)

    async def save_marker(self, marker: dict[str, Any], info: dict[str, Any]) -> dict[str, Any]:
        return await self.invoke(SAVE_MARKER, {"marker": marker, "info": info})

    async def delete_marker(self, marker_id: str) -> dict[str, Any]:
        return await self.invoke(DELETE_MARKER, marker_id)
