"""Profile lookups used to decorate the feed and the session badge."""

from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import StoreUnavailableError
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileResolver:
    """Fetches a user's current profile. Nothing is cached between calls."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def resolve(self, user_id: UUID) -> Optional[Profile]:
        """Get the profile for ``user_id``, or None if there is none.

        Raises:
            StoreUnavailableError: If the store could not be reached
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)

        if profile is None:
            logger.debug("profile_not_found", user_id=str(user_id))
        return profile

    async def resolve_for_display(self, user_id: UUID) -> Optional[Profile]:
        """Like resolve(), but a store failure degrades to None.

        Profile data is auxiliary to whatever is being shown, so callers
        render fallbacks instead of failing.
        """
        try:
            return await self.resolve(user_id)
        except StoreUnavailableError as exc:
            logger.warning(
                "profile_resolution_failed",
                user_id=str(user_id),
                error=exc.message,
            )
            return None
