"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWKSKeySet, JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, PostModel, ProfileModel

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()
TEST_USERNAME = "testfounder"
TEST_NAME = "Test Founder"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite so concurrent profile lookups get their own connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def add_profile(
    session_factory: async_sessionmaker[AsyncSession],
    user_id: UUID | None = None,
    username: str | None = None,
    name: str | None = None,
    **fields: Any,
) -> UUID:
    """Insert a profile row directly."""
    user_id = user_id or uuid4()
    async with session_factory() as session:
        session.add(ProfileModel(id=user_id, username=username, name=name, **fields))
        await session.commit()
    return user_id


async def add_post(
    session_factory: async_sessionmaker[AsyncSession],
    user_id: UUID,
    content: str,
    created_at: datetime | None = None,
) -> UUID:
    """Insert a post row directly."""
    post = PostModel(user_id=user_id, content=content)
    if created_at is not None:
        post.created_at = created_at
    async with session_factory() as session:
        session.add(post)
        await session.commit()
    return post.id


async def count_posts(session_factory: async_sessionmaker[AsyncSession]) -> int:
    from sqlalchemy import func, select

    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(PostModel))
        return int(result.scalar_one())


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name=TEST_NAME,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
        key_set=JWKSKeySet(""),
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    session_factory: async_sessionmaker[AsyncSession],
    test_user: TokenUser,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client with proper database and auth overrides.

    This client:
    - Uses a per-test SQLite database
    - Injects a profile for the test user
    - Overrides auth dependency to return the test user
    - Wires every service to a UoW factory on the test database
    - Gets its own SessionService so no feed session leaks between tests
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import (
        get_directory_search,
        get_post_coordinator,
        get_profile_service,
        get_session_service,
    )
    from domain.services.directory_search import DirectorySearchEngine
    from domain.services.feed_assembler import FeedAssembler
    from domain.services.post_mutation import PostMutationCoordinator
    from domain.services.profile_resolver import ProfileResolver
    from domain.services.profile_service import ProfileService
    from domain.services.session_service import SessionService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    await add_profile(session_factory, test_user.id, username=TEST_USERNAME, name=TEST_NAME)

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    resolver = ProfileResolver(test_uow_factory)
    session_service = SessionService(resolver, FeedAssembler(test_uow_factory, resolver))
    coordinator = PostMutationCoordinator(test_uow_factory)
    search = DirectorySearchEngine(test_uow_factory)
    profile_service = ProfileService(test_uow_factory)

    async def override_get_user() -> TokenUser:
        return test_user

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_current_user] = override_get_user
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_session_service] = lambda: session_service
    app.dependency_overrides[get_post_coordinator] = lambda: coordinator
    app.dependency_overrides[get_directory_search] = lambda: search
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
