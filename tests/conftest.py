"""Shared test fixtures for mapmark tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mapmark.contracts.marker import MarkerCandidate
from mapmark.contracts.store import RecordStore
from mapmark.host.bridge import HostBridge
from mapmark.host.process import HostProcess
from mapmark.local_storage import LocalStorage
from mapmark.notify import Notifier
from mapmark.stores.host import HostStore
from mapmark.stores.local import LocalStore


class RecordingNotifier(Notifier):
    """Collects notifications for assertions."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "markers.json"


@pytest.fixture
def host_process(data_path: Path) -> HostProcess:
    host = HostProcess(data_path)
    host.start()
    return host


@pytest.fixture
def host_store(host_process: HostProcess) -> HostStore:
    return HostStore(HostBridge(host_process))


@pytest.fixture
def local_storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "local-storage")


@pytest.fixture
def local_store(local_storage: LocalStorage) -> LocalStore:
    return LocalStore(local_storage)


@pytest.fixture(params=["host", "local"])
def store(request: pytest.FixtureRequest) -> RecordStore:
    """Each backend in turn, for contract tests that must hold for both."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def view_candidate() -> MarkerCandidate:
    return MarkerCandidate(type="view", lng=121.6, lat=38.9)
