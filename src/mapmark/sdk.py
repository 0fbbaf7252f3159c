"""SDK composition root for mapmark."""

from __future__ import annotations

import logging
from types import TracebackType

from mapmark.contracts.config import MapMarkConfig
from mapmark.host.bridge import HostBridge
from mapmark.host.process import HostProcess
from mapmark.notify import Notifier
from mapmark.repository import MarkerRepository
from mapmark.stores.factory import create_store, detect_backend

logger = logging.getLogger(__name__)


class MapMark:
    """Wires config, host process, record store and repository together.

    Use as an async context manager; entering loads the marker view and
    leaving flushes and stops a host process started by this instance::

        async with MapMark.from_config(config) as app:
            await app.repository.save(candidate, info)
    """

    def __init__(
        self,
        *,
        repository: MarkerRepository,
        host: HostProcess | None = None,
        owns_host: bool = False,
    ) -> None:
        self._repository = repository
        self._host = host
        self._owns_host = owns_host

    @classmethod
    def from_config(
        cls,
        config: MapMarkConfig,
        *,
        notifier: Notifier | None = None,
        host: HostProcess | None = None,
    ) -> MapMark:
        """Build the application for *config*.

        An explicitly configured ``host`` backend starts its own host process
        on ``config.data_path`` unless one is supplied. With ``auto`` the host
        backend is used only when a host process is supplied.
        """
        owns_host = False
        if host is None and config.backend == "host":
            host = HostProcess(config.data_path)
            owns_host = True
        bridge = HostBridge(host) if host is not None else None
        if bridge is not None and detect_backend(config, bridge) == "host":
            if not bridge.host.started:
                bridge.host.start()
        else:
            bridge = None
        store = create_store(config, bridge=bridge)
        repository = MarkerRepository(store, notifier=notifier)
        return cls(repository=repository, host=host, owns_host=owns_host)

    @property
    def repository(self) -> MarkerRepository:
        return self._repository

    @property
    def host(self) -> HostProcess | None:
        return self._host

    async def __aenter__(self) -> MapMark:
        await self._repository.store.__aenter__()
        await self._repository.load_all()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await self._repository.store.__aexit__(exc_type, exc_val, exc_tb)
        finally:
            if self._owns_host and self._host is not None:
                logger.debug("Shutting down host process")
                self._host.shutdown()
