"""Record store implementations and factory."""

from mapmark.stores.factory import STORES, create_store, detect_backend
from mapmark.stores.host import HostStore
from mapmark.stores.local import LocalStore

__all__ = ["STORES", "HostStore", "LocalStore", "create_store", "detect_backend"]
