"""Configuration loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mapmark.contracts.config import MapMarkConfig
from mapmark.contracts.exceptions import ConfigError


def _resolve_path(value: Path, *, base_dir: Path) -> Path:
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path) -> MapMarkConfig:
    """Load and validate config from JSON, resolving relative paths against the config directory."""
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = MapMarkConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return parsed.model_copy(
        update={
            "data_dir": _resolve_path(parsed.data_dir, base_dir=config_dir),
            "local_storage_dir": _resolve_path(parsed.local_storage_dir, base_dir=config_dir),
        }
    )


def default_config(*, backend: str | None = None, base_dir: Path | None = None) -> MapMarkConfig:
    """Defaults with paths resolved against *base_dir* (the working directory by default)."""
    root = (base_dir or Path.cwd()).resolve()
    defaults = MapMarkConfig()
    try:
        return MapMarkConfig(
            backend=backend or defaults.backend,
            data_dir=_resolve_path(defaults.data_dir, base_dir=root),
            local_storage_dir=_resolve_path(defaults.local_storage_dir, base_dir=root),
        )
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
