"""Shared fixtures: temporary SQLite database, seeded catalog, fake collaborators and an API client."""

import os

# Settings are read at import time; required S3 values must exist before storefront is imported
os.environ.setdefault("S3_ENDPOINT", "http://minio.test:9000")
os.environ.setdefault("S3_ACCESS_KEY_ID", "test-access-key")
os.environ.setdefault("S3_SECRET_ACCESS_KEY", "test-secret-key")
os.environ.setdefault("S3_PUBLIC_URL", "http://cdn.test/product-images")
os.environ.setdefault("SMTP_HOST", "")
os.environ.setdefault("COMPANY_OWNER_EMAIL", "")

from collections.abc import AsyncIterator  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402
from sqlmodel import SQLModel, select  # noqa: E402

from storefront.api.dependencies import get_notification_service, get_storage_service  # noqa: E402
from storefront.db import get_session, get_session_maker  # noqa: E402
from storefront.main import app  # noqa: E402
from storefront.models.catalog import Brand, Color, ProductType, Size  # noqa: E402
from storefront.scripts.seed import seed_catalog  # noqa: E402
from tests.helpers import CATALOG, CatalogIds, FakeNotifier, FakeStorage  # noqa: E402


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def broken_session_maker(tmp_path: Path) -> async_sessionmaker[AsyncSession]:
    """Sessions bound to a database that cannot be opened."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'storefront.db'}",
        poolclass=NullPool,
    )
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def catalog(session: AsyncSession) -> CatalogIds:
    await seed_catalog(session, CATALOG)

    async def ids(model: Any, attr: str) -> dict[str, str]:
        result = await session.execute(select(model))
        return {getattr(row, attr): row.id for row in result.scalars().all()}

    return CatalogIds(
        types=await ids(ProductType, "name"),
        brands=await ids(Brand, "name"),
        colors=await ids(Color, "value"),
        sizes=await ids(Size, "value"),
    )


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
async def api(
    session_maker: async_sessionmaker[AsyncSession],
    storage: FakeStorage,
    notifier: FakeNotifier,
) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client for the app wired to the temporary database and fakes."""

    async def override_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_session_maker] = lambda: session_maker
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_notification_service] = lambda: notifier

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

