import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from capsule_closet.models.models import Capsule as CapsuleModel, Outfit as OutfitModel
from capsule_closet.services import persistence
from capsule_closet.services.events import record_event
from capsule_closet.services.persistence import save_capsule, save_outfits
from capsule_closet.services.styling import Outfit, generate_capsule
from tests.fixtures import TEST_USER, doubled_closet, item


class _Savepoint:
    def __init__(self, session, fail: bool):
        self.session = session
        self.fail = fail

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None and self.fail:
            raise SQLAlchemyError("insert rejected")
        if exc_type is None:
            self.session.written.append(self.session.pending)
        return False


class FlakySession:
    """Stands in for AsyncSession; the savepoints listed in fail_on raise."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = 0
        self.pending = None
        self.written = []

    def begin_nested(self):
        self.calls += 1
        return _Savepoint(self, self.calls in self.fail_on)

    def add(self, obj):
        self.pending = obj


def _looks(n: int):
    return [
        Outfit(id=f"outfit-{i}", items=[item(f"t{i}", "top", "black"), item("s", "shoes", "black")], occasion="casual", score=5)
        for i in range(n)
    ]


@pytest.mark.asyncio
async def test_failed_outfit_write_is_skipped():
    session = FlakySession(fail_on={2})
    looks = _looks(3)
    stored = await save_outfits(session, TEST_USER, looks)
    assert len(stored) == 2
    assert [row.item_ids for row in session.written] == [["t0", "s"], ["t2", "s"]]
    assert looks[0].id == stored[0]
    assert looks[1].id == "outfit-1"
    assert looks[2].id == stored[1]


@pytest.mark.asyncio
async def test_event_failure_is_reported_not_raised():
    ok = await record_event(FlakySession(fail_on={1}), TEST_USER, "wear", {"outfit_id": "x"})
    assert ok is False
    session = FlakySession()
    assert await record_event(session, TEST_USER, "wear") is True
    assert session.written[0].type == "wear"
    assert session.written[0].meta == {}


@pytest.mark.asyncio
async def test_capsule_is_upserted(db):
    selected, gaps = generate_capsule(doubled_closet())
    async with db() as session:
        first = await save_capsule(session, TEST_USER, selected, gaps)
        await session.commit()
    async with db() as session:
        second = await save_capsule(session, TEST_USER, selected[:2], gaps[:1])
        await session.commit()
    assert first is not None and second is not None
    assert first.id == second.id

    async with db() as session:
        count = (await session.execute(select(func.count()).select_from(CapsuleModel))).scalar_one()
        row = (await session.execute(select(CapsuleModel))).scalar_one()
    assert count == 1
    assert row.owned_item_ids == ["t1", "t2"]
    assert row.gap_specs == [{"category": "dress", "color": "neutral", "silhouette": "straight"}]
    assert row.reasons == {"gap_0": "A dress would unlock 5+ outfit combinations"}


@pytest.mark.asyncio
async def test_outfits_land_in_the_database(db):
    looks = _looks(2)
    async with db() as session:
        stored = await save_outfits(session, TEST_USER, looks)
        await session.commit()
    async with db() as session:
        rows = (await session.execute(select(OutfitModel))).scalars().all()
    assert sorted(r.id for r in rows) == sorted(stored)
    assert all(r.saved is False and r.worn is False for r in rows)
    assert rows[0].meta == {}


@pytest.mark.asyncio
async def test_rejected_insert_keeps_the_others(db, monkeypatch):
    async with db() as session:
        session.add(OutfitModel(id="taken", user_id=TEST_USER, item_ids=[], occasion="casual", score=0))
        await session.commit()

    ids = iter(["first", "taken", "third"])
    monkeypatch.setattr(persistence, "uuid4", lambda: next(ids))
    looks = _looks(3)
    async with db() as session:
        stored = await save_outfits(session, TEST_USER, looks)
        await session.commit()
    assert stored == ["first", "third"]
    assert looks[1].id == "outfit-1"

    async with db() as session:
        rows = (await session.execute(select(OutfitModel).where(OutfitModel.id != "taken"))).scalars().all()
        kept = (await session.get(OutfitModel, "taken")).item_ids
    assert sorted(r.id for r in rows) == ["first", "third"]
    assert kept == []
