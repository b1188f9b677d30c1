"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for the ``profiles`` collection."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        ...

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its handle."""
        ...

    async def list_all(self) -> list[Profile]:
        """List the whole directory in the store's natural order."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...
