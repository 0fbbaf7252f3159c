"""Record store behaviour that must hold for every backend."""

from __future__ import annotations

import pytest

from mapmark.contracts.exceptions import NotFoundError
from mapmark.contracts.marker import MarkerCandidate
from mapmark.contracts.store import RecordStore


@pytest.mark.asyncio
async def test_list_is_empty_for_fresh_store(store: RecordStore) -> None:
    assert await store.list() == []


@pytest.mark.asyncio
async def test_upsert_without_id_creates_record_with_generated_id(
    store: RecordStore, view_candidate: MarkerCandidate
) -> None:
    marker_id = await store.upsert(view_candidate, {"note": "A"})

    assert marker_id.startswith("marker_")
    record = await store.get(marker_id)
    assert record.type == "view"
    assert record.lng == 121.6
    assert record.lat == 38.9
    assert record.info == {"note": "A"}
    assert record.created_at == record.updated_at


@pytest.mark.asyncio
async def test_ids_from_repeated_creates_are_pairwise_distinct(
    store: RecordStore, view_candidate: MarkerCandidate
) -> None:
    ids = [await store.upsert(view_candidate, {}) for _ in range(50)]

    assert len(set(ids)) == 50
    assert [record.id for record in await store.list()] == ids


@pytest.mark.asyncio
async def test_update_preserves_created_at_and_advances_updated_at(
    store: RecordStore, view_candidate: MarkerCandidate
) -> None:
    marker_id = await store.upsert(view_candidate, {"note": "A"})
    original = await store.get(marker_id)

    same_id = await store.upsert(
        MarkerCandidate(id=marker_id, type="food", lng=1.5, lat=2.5),
        {"rating": 5},
    )
    updated = await store.get(marker_id)

    assert same_id == marker_id
    assert updated.created_at == original.created_at
    assert updated.updated_at >= original.updated_at
    assert updated.type == "food"
    assert (updated.lng, updated.lat) == (1.5, 2.5)
    assert updated.info == {"rating": 5}
    assert len(await store.list()) == 1


@pytest.mark.asyncio
async def test_upsert_with_unknown_id_creates_record_under_that_id(store: RecordStore) -> None:
    marker_id = await store.upsert(MarkerCandidate(id="seeded", type="view", lng=0, lat=0), {})

    assert marker_id == "seeded"
    assert (await store.get("seeded")).id == "seeded"


@pytest.mark.asyncio
async def test_get_unknown_id_raises_not_found(store: RecordStore) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await store.get("missing")

    assert exc_info.value.marker_id == "missing"


@pytest.mark.asyncio
async def test_second_delete_of_same_id_reports_not_found(
    store: RecordStore, view_candidate: MarkerCandidate
) -> None:
    marker_id = await store.upsert(view_candidate, {})

    await store.delete(marker_id)
    with pytest.raises(NotFoundError):
        await store.delete(marker_id)
    assert await store.list() == []


@pytest.mark.asyncio
async def test_list_returns_copies_not_internal_state(store: RecordStore, view_candidate: MarkerCandidate) -> None:
    marker_id = await store.upsert(view_candidate, {"tags": ["a"]})

    listed = await store.list()
    listed[0].info["tags"].append("mutated")
    listed.clear()

    record = await store.get(marker_id)
    assert record.info == {"tags": ["a"]}


@pytest.mark.asyncio
async def test_info_is_replaced_not_merged(store: RecordStore, view_candidate: MarkerCandidate) -> None:
    marker_id = await store.upsert(view_candidate, {"note": "A", "extra": 1})

    await store.upsert(view_candidate.model_copy(update={"id": marker_id}), {"note": "B"})

    assert (await store.get(marker_id)).info == {"note": "B"}


@pytest.mark.asyncio
async def test_caller_info_dict_is_not_aliased(store: RecordStore, view_candidate: MarkerCandidate) -> None:
    info = {"note": "A"}
    marker_id = await store.upsert(view_candidate, info)

    info["note"] = "changed"

    assert (await store.get(marker_id)).info == {"note": "A"}
