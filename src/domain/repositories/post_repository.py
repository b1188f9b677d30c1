"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for the ``posts`` collection."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def list_newest_first(self) -> list[Post]:
        """List every post ordered by ``created_at`` descending."""
        ...

    async def create(self, user_id: UUID, content: str) -> Post:
        """Insert a post; the store assigns its id and ``created_at``."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return whether it existed."""
        ...
