"""Client-local key-value blob storage.

Each key is kept in its own file inside one directory; the total size of all
stored values is limited by a byte quota, as browser local storage is.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote, unquote

from mapmark.contracts.config import DEFAULT_QUOTA_BYTES
from mapmark.contracts.exceptions import ParseError, QuotaExceededError, StorageIOError

logger = logging.getLogger(__name__)

_SUFFIX = ".blob"


class LocalStorage:
    def __init__(self, directory: Path, *, quota_bytes: int = DEFAULT_QUOTA_BYTES) -> None:
        self._directory = directory
        self._quota_bytes = quota_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def quota_bytes(self) -> int:
        return self._quota_bytes

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageIOError(f"failed reading local storage key {key!r}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ParseError(f"local storage key {key!r} is not valid UTF-8 text: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*.

        Raises:
            QuotaExceededError: If the write would exceed the storage quota.
            StorageIOError: If the value could not be written.
        """
        required = self._used_bytes(excluding=key) + len(value.encode("utf-8"))
        if required > self._quota_bytes:
            raise QuotaExceededError(
                f"local storage quota exceeded ({required} > {self._quota_bytes} bytes)",
                quota_bytes=self._quota_bytes,
                required_bytes=required,
            )
        path = self._path_for(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            raise StorageIOError(f"failed writing local storage key {key!r}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageIOError(f"failed removing local storage key {key!r}: {exc}") from exc

    def keys(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(unquote(path.name[: -len(_SUFFIX)]) for path in self._directory.glob(f"*{_SUFFIX}"))

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{quote(key, safe='')}{_SUFFIX}"

    def _used_bytes(self, *, excluding: str) -> int:
        if not self._directory.is_dir():
            return 0
        excluded = self._path_for(excluding)
        total = 0
        for path in self._directory.glob(f"*{_SUFFIX}"):
            if path == excluded:
                continue
            try:
                total += path.stat().st_size
            except OSError:
                logger.debug("Skipping unreadable local storage entry %s", path)
        return total
