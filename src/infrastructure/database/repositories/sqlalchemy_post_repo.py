"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Post
from infrastructure.database.errors import store_errors
from infrastructure.database.models import PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        with store_errors("posts.get"):
            model = await self._session.get(PostModel, id)
        return self._to_entity(model) if model else None

    async def list_newest_first(self) -> list[Post]:
        """List every post ordered by ``created_at`` descending."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        with store_errors("posts.list_newest_first"):
            result = await self._session.execute(stmt)
            models = list(result.scalars())
        return [self._to_entity(model) for model in models]

    async def create(self, user_id: UUID, content: str) -> Post:
        """Insert a post; id and ``created_at`` come from column defaults."""
        model = PostModel(user_id=user_id, content=content)
        with store_errors("posts.create"):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        with store_errors("posts.delete"):
            model = await self._session.get(PostModel, id)
            if not model:
                return False

            await self._session.delete(model)
            await self._session.flush()
        return True

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            content=model.content,
            created_at=model.created_at,
            likes=list(model.likes or []),
            comments=list(model.comments or []),
        )
