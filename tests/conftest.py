"""
Pytest fixtures - per-test SQLite database, HTTP client, users and auth headers.
"""

import json
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from partmatch.cache import redis_client
from partmatch.core.security import create_access_token, hash_password
from partmatch.db.base import Base
from partmatch.db.models import Listing, User
from partmatch.db.session import get_db
from partmatch.main import app


class FakePubSub:
    def __init__(self, messages: list[dict]):
        self.messages = messages
        self.channels: list[str] = []
        self.closed = False

    async def subscribe(self, channel):
        self.channels.append(channel)

    async def unsubscribe(self):
        self.channels.clear()

    async def listen(self):
        for message in self.messages:
            yield message

    async def aclose(self):
        self.closed = True


class FakeRedis:
    """In-memory double for the redis.asyncio calls the app makes."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.published: list[tuple[str, dict]] = []
        # Raw pub/sub messages handed to the next subscriber
        self.incoming: list[dict] = []
        self.pubsubs: list[FakePubSub] = []

    def pubsub(self):
        pubsub = FakePubSub(list(self.incoming))
        self.pubsubs.append(pubsub)
        return pubsub

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        return True

    async def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0

    async def publish(self, channel, message):
        self.published.append((channel, json.loads(message)))
        return 0

    async def aclose(self):
        pass


def enforce_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores REFERENCES clauses unless each connection turns them on."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch) -> FakeRedis:
    fake = FakeRedis()
    monkeypatch.setattr(redis_client, "_redis", fake)
    return fake


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    enforce_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def make_user(session: AsyncSession, user_id: str, email: str) -> User:
    user = User(
        id=user_id,
        email=email,
        username=email.split("@")[0],
        hashed_password=hash_password("password123"),
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


async def make_listing(session: AsyncSession, seller: User, **overrides) -> Listing:
    values = {
        "name": "Turbo",
        "code": "T-100",
        "brand": "Garrett",
        "model": "GT1749",
        "condition": "available",
        "price": 500,
        "city": "Izmir",
        "region": "Aegean",
        "seller_id": seller.id,
        "details": "",
    }
    values.update(overrides)
    listing = Listing(**values)
    session.add(listing)
    await session.flush()
    await session.refresh(listing)
    return listing


@pytest_asyncio.fixture
async def seller(session: AsyncSession) -> User:
    return await make_user(session, "seller-0001", "seller@example.com")


@pytest_asyncio.fixture
async def buyer(session: AsyncSession) -> User:
    return await make_user(session, "buyer-0001", "buyer@example.com")


@pytest.fixture
def seller_headers(seller: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(seller.id)}"}


@pytest.fixture
def buyer_headers(buyer: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(buyer.id)}"}
