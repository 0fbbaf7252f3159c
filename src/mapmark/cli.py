"""Command-line interface for mapmark."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from mapmark.config import default_config, load_config
from mapmark.contracts.config import BACKENDS, MapMarkConfig
from mapmark.contracts.exceptions import ConfigError
from mapmark.contracts.marker import MarkerCandidate, MarkerRecord
from mapmark.contracts.results import OperationResult
from mapmark.notify import Notifier, RichNotifier
from mapmark.repository import MarkerRepository
from mapmark.sdk import MapMark


def _package_version() -> str:
    try:
        return version("mapmark")
    except PackageNotFoundError:
        return "0.0.0"


def _info_json(value: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("info must be a JSON object")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mapmark")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("--config", help="Path to mapmark.json")
    parser.add_argument("--backend", choices=BACKENDS, help="Override the configured backend")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List all markers")

    show_parser = subparsers.add_parser("show", help="Show one marker")
    show_parser.add_argument("id")

    for name in ("add", "update"):
        marker_parser = subparsers.add_parser(name, help=f"{name.capitalize()} a marker")
        if name == "update":
            marker_parser.add_argument("id")
        marker_parser.add_argument("--type", required=True, help="Marker category")
        marker_parser.add_argument("--lng", required=True, type=float)
        marker_parser.add_argument("--lat", required=True, type=float)
        marker_parser.add_argument("--info", type=_info_json, default={}, help="Attached info as a JSON object")

    delete_parser = subparsers.add_parser("delete", help="Delete a marker")
    delete_parser.add_argument("id")

    export_parser = subparsers.add_parser("export", help="Export all markers to a snapshot file")
    export_parser.add_argument("dest", nargs="?", default=".", help="Target file or directory")

    import_parser = subparsers.add_parser("import", help="Import markers from a snapshot file")
    import_parser.add_argument("file")
    import_parser.add_argument(
        "--avoid-overwrite",
        action="store_true",
        help="Give conflicting markers new ids instead of overwriting",
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> MapMarkConfig:
    if args.config:
        config = load_config(args.config)
        if args.backend:
            config = config.model_copy(update={"backend": args.backend})
        return config
    return default_config(backend=args.backend)


def _format_markers(records: list[MarkerRecord]) -> Table:
    table = Table(title=f"{len(records)} marker(s)")
    table.add_column("ID", no_wrap=True)
    table.add_column("Type")
    table.add_column("Lng", justify="right")
    table.add_column("Lat", justify="right")
    table.add_column("Updated")
    table.add_column("Info")
    for record in records:
        table.add_row(
            record.id,
            record.type,
            f"{record.lng:.6f}",
            f"{record.lat:.6f}",
            datetime.fromtimestamp(record.updated_at / 1000).strftime("%Y-%m-%d %H:%M:%S"),
            json.dumps(record.info, ensure_ascii=False),
        )
    return table


def _failed(notifier: Notifier, message: str) -> OperationResult:
    notifier.error(message)
    return OperationResult(success=False, error=message)


async def _dispatch(
    args: argparse.Namespace,
    repository: MarkerRepository,
    console: Console,
    notifier: Notifier,
) -> OperationResult:
    if args.command == "list":
        console.print(_format_markers(repository.markers))
        return OperationResult(success=True)
    if args.command == "show":
        record = repository.get_by_id(args.id)
        if record is None:
            return _failed(notifier, f"Marker not found: {args.id}")
        console.print_json(record.model_dump_json())
        return OperationResult(success=True)
    if args.command in {"add", "update"}:
        candidate = MarkerCandidate(
            id=getattr(args, "id", "") or "",
            type=args.type,
            lng=args.lng,
            lat=args.lat,
        )
        if args.command == "update" and repository.get_by_id(candidate.id) is None:
            return _failed(notifier, f"Marker not found: {candidate.id}")
        result = await repository.save(candidate, args.info)
        if result.success:
            console.print(result.id)
        return result
    if args.command == "delete":
        return await repository.delete(args.id)
    if args.command == "export":
        return await repository.export_snapshot(Path(args.dest))
    if args.command == "import":
        return await repository.import_snapshot(Path(args.file), avoid_overwrite=args.avoid_overwrite)
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace, *, notifier: Notifier | None = None, console: Console | None = None) -> int:
    config = _resolve_config(args)
    notifier = notifier or RichNotifier()
    async with MapMark.from_config(config, notifier=notifier) as app:
        result = await _dispatch(args, app.repository, console or Console(), notifier)
    return 0 if result.success else 4


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        return asyncio.run(_run(args))
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
