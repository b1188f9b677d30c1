"""Profile page and profile editing."""

from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import ErrorCode, ProfileNotFoundError, UsernameTakenError, ValidationError
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for viewing and editing profiles."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_profile(self, user_id: UUID) -> Profile:
        """Get a profile for its page."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def update_own_profile(
        self,
        user_id: UUID,
        username: Optional[str] = None,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        profile_picture_url: Optional[str] = None,
    ) -> Profile:
        """Edit the caller's own profile. Only provided fields change."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            if username is not None:
                username = username.strip()
                if not username:
                    raise ValidationError(
                        "Username cannot be empty",
                        error_code=ErrorCode.VALIDATION_ERROR,
                        details={"field": "username"},
                    )
                if username != profile.username:
                    existing = await uow.profiles.get_by_username(username)
                    if existing and existing.id != user_id:
                        raise UsernameTakenError(username)
                    profile.username = username

            if name is not None:
                profile.name = name
            if bio is not None:
                profile.bio = bio
            if profile_picture_url is not None:
                profile.profile_picture_url = profile_picture_url or None

            updated = await uow.profiles.update(profile)
            await uow.commit()

        logger.info("profile_updated", user_id=str(user_id))
        return updated
