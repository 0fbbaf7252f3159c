from __future__ import annotations

from pathlib import Path

import pytest

from mapmark.contracts.exceptions import QuotaExceededError
from mapmark.local_storage import LocalStorage


def test_missing_key_reads_as_none(tmp_path: Path) -> None:
    assert LocalStorage(tmp_path / "ls").get_item("absent") is None


def test_set_get_remove_roundtrip(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "ls")

    storage.set_item("map-record-markers", '{"markers": []}')
    assert storage.get_item("map-record-markers") == '{"markers": []}'
    assert storage.keys() == ["map-record-markers"]

    storage.remove_item("map-record-markers")
    assert storage.get_item("map-record-markers") is None
    storage.remove_item("map-record-markers")


def test_keys_with_path_characters_are_kept_inside_directory(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "ls")

    storage.set_item("../escape/key", "value")

    assert storage.get_item("../escape/key") == "value"
    assert [path.parent for path in (tmp_path / "ls").iterdir()] == [tmp_path / "ls"]


def test_quota_counts_other_keys_but_not_the_replaced_value(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "ls", quota_bytes=10)
    storage.set_item("a", "12345")
    storage.set_item("a", "1234567890")

    with pytest.raises(QuotaExceededError) as exc_info:
        storage.set_item("b", "1")

    assert exc_info.value.required_bytes == 11
    assert storage.get_item("b") is None
