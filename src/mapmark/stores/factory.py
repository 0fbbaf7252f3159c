"""Factory for creating record store instances.

Decouples backend selection from backend implementation. The backend is
chosen once at startup; everything downstream depends only on
:class:`~mapmark.contracts.store.RecordStore`.
"""

from __future__ import annotations

import logging

from mapmark.contracts.config import MapMarkConfig
from mapmark.contracts.exceptions import ConfigError
from mapmark.contracts.store import RecordStore
from mapmark.host.bridge import HostBridge
from mapmark.local_storage import LocalStorage
from mapmark.stores.host import HostStore
from mapmark.stores.local import LocalStore

logger = logging.getLogger(__name__)

STORES: dict[str, type[RecordStore]] = {
    "host": HostStore,
    "local": LocalStore,
}


def detect_backend(config: MapMarkConfig, bridge: HostBridge | None = None) -> str:
    """Resolve the configured backend to a concrete store name.

    ``auto`` picks the host store when a host bridge is attached and the
    local store otherwise.
    """
    if config.backend != "auto":
        return config.backend
    return "host" if bridge is not None else "local"


def create_store(config: MapMarkConfig, *, bridge: HostBridge | None = None) -> RecordStore:
    """Create the record store selected for *config*.

    Raises:
        ConfigError: If the backend is unknown or the host store is
            requested without a host bridge.
    """
    name = detect_backend(config, bridge)
    if name not in STORES:
        available = ", ".join(sorted(STORES))
        raise ConfigError(f"Unknown backend: {name!r}. Available: {available}")

    logger.debug("Using %s record store", name)
    if name == "host":
        if bridge is None:
            raise ConfigError("host backend requires a running host process")
        return HostStore(bridge)
    storage = LocalStorage(config.local_storage_dir, quota_bytes=config.quota_bytes)
    return LocalStore(storage, key=config.local_storage_key)
