"""Post creation and deletion with optimistic feed patches."""

from typing import Callable
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import ErrorCode, ForbiddenError, PostNotFoundError, ValidationError
from domain.entities.feed import FeedEntry
from domain.entities.session import SessionContext
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.feed_cache import FeedCache

logger = structlog.get_logger()


class PostMutationCoordinator:
    """Writes posts to the store and patches the session feed without a reload."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        fallback_name: str = settings.profile_fallback_name,
    ) -> None:
        self._uow_factory = uow_factory
        self._fallback_name = fallback_name

    async def create_post(
        self, session: SessionContext, content: str, cache: FeedCache
    ) -> FeedEntry:
        """Create a post for the signed-in user and prepend it to the feed.

        The new entry is decorated from the session's profile snapshot rather
        than a fresh lookup. Without a snapshot its author fields stay empty
        until the next full load.

        Raises:
            ValidationError: If content is blank (no store call is made)
        """
        if not content or not content.strip():
            raise ValidationError(
                "Post content cannot be empty",
                error_code=ErrorCode.EMPTY_POST_CONTENT,
            )

        async with self._uow_factory() as uow:
            post = await uow.posts.create(session.user_id, content)
            await uow.commit()

        entry = FeedEntry.join(post, session.profile, self._fallback_name)
        cache.prepend(entry)

        logger.info(
            "post_created",
            post_id=str(post.id),
            user_id=str(session.user_id),
            feed_version=cache.version,
        )
        return entry

    async def delete_post(
        self, session: SessionContext, post_id: UUID, cache: FeedCache
    ) -> None:
        """Delete one of the signed-in user's posts and drop it from the feed.

        Ownership is checked against the stored record, not the cached entry.

        Raises:
            PostNotFoundError: If the post does not exist
            ForbiddenError: If the post belongs to someone else
        """
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if post is None:
                # Already gone upstream; stop showing it.
                cache.remove(post_id)
                raise PostNotFoundError(str(post_id))

            if post.user_id != session.user_id:
                logger.warning(
                    "post_delete_forbidden",
                    post_id=str(post_id),
                    owner_id=str(post.user_id),
                    requester_id=str(session.user_id),
                )
                raise ForbiddenError(
                    "Only the author can delete this post",
                    details={"post_id": str(post_id)},
                )

            deleted = await uow.posts.delete(post_id)
            if not deleted:
                cache.remove(post_id)
                raise PostNotFoundError(str(post_id))
            await uow.commit()

        cache.remove(post_id)
        logger.info(
            "post_deleted",
            post_id=str(post_id),
            user_id=str(session.user_id),
            feed_version=cache.version,
        )
