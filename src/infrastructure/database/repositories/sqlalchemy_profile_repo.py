"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import UsernameTakenError
from domain.entities.profile import Profile
from infrastructure.database.errors import store_errors
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        with store_errors("profiles.get"):
            model = await self._session.get(ProfileModel, id)
        return self._to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its handle."""
        stmt = select(ProfileModel).where(ProfileModel.username == username)
        with store_errors("profiles.get_by_username"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Profile]:
        """List the whole directory in creation order."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at, ProfileModel.id)
        with store_errors("profiles.list_all"):
            result = await self._session.execute(stmt)
            models = list(result.scalars())
        return [self._to_entity(model) for model in models]

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile."""
        model = self._to_model(profile)
        with store_errors("profiles.create"):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        with store_errors("profiles.update"):
            model = await self._session.get(ProfileModel, profile.id)
            if not model:
                raise ValueError(f"Profile {profile.id} not found")

            model.username = profile.username or None
            model.name = profile.name
            model.bio = profile.bio
            model.profile_picture_url = profile.profile_picture_url

            try:
                await self._session.flush()
            except IntegrityError as exc:
                # Lost a race for the handle to a concurrent update.
                raise UsernameTakenError(profile.username) from exc
            await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            username=model.username or "",
            name=model.name or "",
            bio=model.bio or "",
            profile_picture_url=model.profile_picture_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            username=entity.username or None,
            name=entity.name,
            bio=entity.bio,
            profile_picture_url=entity.profile_picture_url,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
