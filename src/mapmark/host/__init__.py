"""Process-resident marker database."""

from mapmark.host.bridge import HostBridge
from mapmark.host.process import HostProcess
from mapmark.host.table import MarkerTable

__all__ = ["HostBridge", "HostProcess", "MarkerTable"]
