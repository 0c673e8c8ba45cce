"""Pytest fixtures for testing."""
import os

# Must be set before any linksaver import triggers Settings validation.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret"

from collections.abc import AsyncGenerator
from typing import Optional

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from linksaver.api.deps import get_metadata_service, get_summary_service
from linksaver.config import get_settings
from linksaver.database import get_db
from linksaver.main import app as fastapi_app
from linksaver.models import Base, User
from linksaver.services.metadata import ExtractedMetadata, MetadataService
from linksaver.services.summary import SummaryService
from linksaver.utils.security import create_access_token, hash_password


class FakeMetadataService(MetadataService):
    """Returns canned metadata instead of fetching the page."""

    def __init__(
        self,
        metadata: Optional[ExtractedMetadata] = None,
        error: Optional[Exception] = None,
    ) -> None:
        super().__init__()
        self.metadata = metadata or ExtractedMetadata()
        self.error = error
        self.calls: list[str] = []

    async def extract(self, url: str) -> ExtractedMetadata:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.metadata


class FakeSummaryService(SummaryService):
    """Returns a canned summary, or the fallback when none is set."""

    def __init__(self, summary: Optional[str] = None) -> None:
        super().__init__("https://reader.test/")
        self.summary = summary
        self.calls: list[tuple[str, str]] = []

    async def enrich(self, url: str, fallback_description: str) -> str:
        self.calls.append((url, fallback_description))
        return self.summary if self.summary is not None else fallback_description


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database shared by every connection of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def metadata_service() -> FakeMetadataService:
    return FakeMetadataService()


@pytest.fixture
def summary_service() -> FakeSummaryService:
    return FakeSummaryService()


@pytest.fixture
async def app(
    db_session: AsyncSession,
    metadata_service: FakeMetadataService,
    summary_service: FakeSummaryService,
) -> AsyncGenerator[FastAPI, None]:
    """The FastAPI app wired to the test session and fake scraping services."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_metadata_service] = lambda: metadata_service
    fastapi_app.dependency_overrides[get_summary_service] = lambda: summary_service

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


async def make_user(db_session: AsyncSession, email: str) -> User:
    user = User(email=email, password_hash=hash_password("password123"))
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token(user.id, get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "alice@example.com")


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "bob@example.com")


@pytest.fixture
def auth_headers(user: User) -> dict[str, str]:
    return auth_headers_for(user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict[str, str]:
    return auth_headers_for(other_user)
