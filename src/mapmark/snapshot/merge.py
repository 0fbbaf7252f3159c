"""Conflict-aware import of snapshot markers into an existing collection."""

from __future__ import annotations

from collections.abc import Callable, Container, Iterable

from mapmark.contracts.results import ImportResult
from mapmark.contracts.snapshot import ImportPlan, IncomingMarker, ResolvedMarker
from mapmark.ids import generate_unique_id

IdFactory = Callable[[Container[str]], str]


def plan_import(
    incoming: Iterable[IncomingMarker],
    existing_ids: Iterable[str],
    *,
    avoid_overwrite: bool = False,
    id_factory: IdFactory = generate_unique_id,
) -> ImportPlan:
    """Resolve id conflicts between *incoming* and the existing collection.

    Incoming markers are processed in order against a running id set, so a
    duplicate introduced earlier in the same batch is detected too. On a
    conflict the marker either overwrites the existing record or, with
    *avoid_overwrite*, is renamed to a fresh id. Markers without an id are
    counted as new and get their id from the store.
    """
    seen = set(existing_ids)
    resolved: list[ResolvedMarker] = []
    count = 0
    new_count = 0
    overwritten_count = 0
    renamed_count = 0

    for marker in incoming:
        count += 1
        if not marker.id:
            resolved.append(ResolvedMarker(marker=marker, final_id=""))
            new_count += 1
            continue

        if marker.id not in seen:
            resolved.append(ResolvedMarker(marker=marker, final_id=marker.id))
            new_count += 1
        elif avoid_overwrite:
            fresh_id = id_factory(seen)
            resolved.append(ResolvedMarker(marker=marker, final_id=fresh_id, renamed=True))
            new_count += 1
            renamed_count += 1
        else:
            resolved.append(ResolvedMarker(marker=marker, final_id=marker.id, overwrites=True))
            overwritten_count += 1
        seen.add(resolved[-1].final_id)

    return ImportPlan(
        resolved=resolved,
        count=count,
        new_count=new_count,
        overwritten_count=overwritten_count,
        renamed_count=renamed_count,
    )


def describe_import(result: ImportResult) -> str:
    """Human-readable summary of an import for notifications."""
    message = f"Imported {result.count} marker(s)"
    if result.overwritten_count > 0:
        message += f" ({result.new_count} new, {result.overwritten_count} overwritten)"
    elif result.renamed_count > 0:
        message += f" ({result.new_count} new, {result.renamed_count} duplicate id(s) renamed)"
    else:
        message += f" ({result.new_count} new)"
    return message
