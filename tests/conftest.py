"""
Pytest fixtures - test DB, fake Redis, client and product builders.
Isolated tests: a fresh SQLite file per test, no real Redis.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalog.cache.redis_client import get_redis
from catalog.db.base import Base
from catalog.db.models import Product, ProductCategory
from catalog.db.session import get_db
from catalog.main import app

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis (only what the app calls)."""

    def __init__(self, fail_with: Exception | None = None):
        self.store: dict[str, str] = {}
        self.deleted: list[str] = []
        self.fail_with = fail_with

    async def delete(self, *names: str) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        self.deleted.extend(names)
        return sum(1 for n in names if self.store.pop(n, None) is not None)

    async def ping(self) -> bool:
        return True


def make_product(**overrides) -> Product:
    """Unsaved Product with sensible Electronics defaults."""
    values = {
        "id": uuid.uuid4(),
        "name": "Wireless Headphones",
        "brand": "Tech Innovations",
        "sku": "ELEC-WH-001",
        "category": int(ProductCategory.ELECTRONICS),
        "price": Decimal("199.99"),
        "release_date": NOW - timedelta(days=15),
        "image_url": "https://example.com/headphones.jpg",
        "is_available": True,
        "stock_quantity": 50,
        "created_at": NOW,
    }
    values.update(overrides)
    return Product(**values)


def product_payload(**overrides) -> dict:
    """Valid camelCase create payload (Electronics, released 15 days ago)."""
    payload = {
        "name": "Wireless Headphones",
        "brand": "Tech Innovations",
        "sku": "ELEC-WH-001",
        "category": "Electronics",
        "price": "199.99",
        "releaseDate": (datetime.now(timezone.utc) - timedelta(days=15)).isoformat(),
        "imageUrl": "https://example.com/headphones.jpg",
        "stockQuantity": 50,
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest_asyncio.fixture
async def client(session: AsyncSession, fake_redis: FakeRedis):
    async def override_get_db():
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    async def override_get_redis():
        return fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def stored_product(session: AsyncSession) -> Product:
    product = make_product(
        name="Existing Headphones",
        brand="Existing Brand",
        sku="DUP-SKU-001",
        price=Decimal("99.99"),
        release_date=datetime.now(timezone.utc),
        created_at=datetime.now(timezone.utc),
        stock_quantity=10,
    )
    session.add(product)
    await session.commit()
    return product
