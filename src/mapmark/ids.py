"""Marker id and clock helpers."""

from __future__ import annotations

import secrets
import string
import time
from collections.abc import Container

_ID_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def generate_marker_id() -> str:
    """Return ``marker_<epoch-ms>_<random base36 suffix>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"marker_{now_ms()}_{suffix}"


def generate_unique_id(taken: Container[str]) -> str:
    """Generate a marker id that is not in *taken*."""
    while True:
        candidate = generate_marker_id()
        if candidate not in taken:
            return candidate
