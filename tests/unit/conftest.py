"""Shared fixtures for unit tests."""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.post import Post
from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A second user ID (distinct from user_id)."""
    return uuid4()


def make_profile(user_id: UUID | None = None, **overrides: Any) -> Profile:
    """Build a well-formed profile, overriding any field."""
    fields: dict[str, Any] = {
        "id": user_id or uuid4(),
        "username": "founder",
        "name": "Founder",
        "bio": "",
    }
    fields.update(overrides)
    return Profile(**fields)


def make_posts(user_ids: list[UUID], start: datetime | None = None) -> list[Post]:
    """Build posts newest first, one minute apart, one per given author."""
    start = start or datetime(2026, 3, 1, 12, 0, 0)
    return [
        Post(
            user_id=author,
            content=f"post {index}",
            created_at=start - timedelta(minutes=index),
        )
        for index, author in enumerate(user_ids)
    ]
