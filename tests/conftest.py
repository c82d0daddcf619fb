import pytest
import httpx
from asgi_lifespan import LifespanManager
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from capsule_closet.main import app
from capsule_closet.core.db import Base, get_session
from capsule_closet.models.models import Event
from tests.fixtures import TEST_USER, auth_headers

API_BASE = "http://test"


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # let SQLAlchemy own BEGIN so SAVEPOINTs behave on sqlite
    @event.listens_for(eng.sync_engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def db(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def override_session(db):
    async def _get_session():
        async with db() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
async def client(override_session):
    async with LifespanManager(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url=API_BASE, headers=auth_headers()) as ac:
            yield ac


@pytest.fixture
async def anon_client(override_session):
    async with LifespanManager(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url=API_BASE) as ac:
            yield ac


@pytest.fixture
def events(db):
    async def _events(event_type: str, user_id: str = TEST_USER) -> list[Event]:
        async with db() as session:
            res = await session.execute(
                select(Event).where(Event.type == event_type, Event.user_id == user_id).order_by(Event.created_at)
            )
            return list(res.scalars().all())

    return _events
