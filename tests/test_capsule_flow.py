import httpx
import pytest
from sqlalchemy import func, select

from capsule_closet.models.models import Capsule as CapsuleModel
from tests.fixtures import everyday_trio, item_payload, starter_closet


async def _fill(client: httpx.AsyncClient, payloads):
    ids = []
    for payload in payloads:
        resp = await client.post("/v1/closet/items", json=payload)
        assert resp.status_code == 200
        ids.append(resp.json()["id"])
    return ids


@pytest.mark.asyncio
async def test_small_closet_goes_back_to_uploads(client: httpx.AsyncClient, db, events):
    await _fill(client, everyday_trio())
    resp = await client.post("/v1/capsules/generate")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "needs_items"
    assert body["redirect_to"] == "/closet"
    assert body["items"] == [] and body["gaps"] == []

    async with db() as session:
        count = (await session.execute(select(func.count()).select_from(CapsuleModel))).scalar_one()
    assert count == 0
    assert await events("generate_capsule") == []
    assert (await client.get("/v1/capsules/current")).status_code == 404


@pytest.mark.asyncio
async def test_generate_and_read_back(client: httpx.AsyncClient, events):
    ids = await _fill(client, starter_closet())
    resp = await client.post("/v1/capsules/generate")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "generated"
    assert body["saved"] is True
    assert [it["id"] for it in body["items"]] == ids
    # no dress, no outerwear, no bag; outerwear and bag come up twice
    assert [g["category"] for g in body["gaps"]] == ["dress", "outerwear", "bag", "outerwear", "bag"]
    assert all(g["reason"] for g in body["gaps"])

    current = (await client.get("/v1/capsules/current")).json()
    assert current["owned_item_ids"] == ids
    assert current["gaps"] == body["gaps"]
    assert current["updated_at"]

    generated = await events("generate_capsule")
    assert len(generated) == 1
    assert generated[0].meta == {"total_items": 8, "selected_items": 8, "gaps_count": 5}


@pytest.mark.asyncio
async def test_regenerating_replaces_the_capsule(client: httpx.AsyncClient, db):
    await _fill(client, starter_closet())
    first = (await client.post("/v1/capsules/generate")).json()
    await _fill(client, [item_payload("dress", "black", "midi"), item_payload("bag", "black", "tote")])
    second = (await client.post("/v1/capsules/generate")).json()
    assert len(second["items"]) == 10
    assert [g["category"] for g in second["gaps"]] == ["dress", "outerwear", "bag", "outerwear"]
    assert first["gaps"] != second["gaps"]

    async with db() as session:
        count = (await session.execute(select(func.count()).select_from(CapsuleModel))).scalar_one()
    assert count == 1
    current = (await client.get("/v1/capsules/current")).json()
    assert len(current["owned_item_ids"]) == 10
