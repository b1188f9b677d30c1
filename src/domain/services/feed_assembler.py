"""Full feed load: posts joined with their authors' current profiles."""

import asyncio
from typing import Callable, Optional
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import FeedUnavailableError, StoreUnavailableError
from domain.entities.feed import FeedEntry
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.feed_cache import FeedCache
from domain.services.profile_resolver import ProfileResolver

logger = structlog.get_logger()


class FeedAssembler:
    """Builds the denormalized feed and publishes it into a FeedCache."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        profile_resolver: ProfileResolver,
        fallback_name: str = settings.profile_fallback_name,
    ) -> None:
        self._uow_factory = uow_factory
        self._profiles = profile_resolver
        self._fallback_name = fallback_name

    async def load_feed(self, cache: FeedCache) -> list[FeedEntry]:
        """Fetch every post newest first, join authors, and replace the cache.

        Each call is a fresh full scan. Author lookups run concurrently and
        are joined back before a single publish. A failed lookup only
        degrades the entries of that author.

        Raises:
            FeedUnavailableError: If the post query fails; the cache is untouched
        """
        ticket = cache.begin_reload()
        try:
            try:
                async with self._uow_factory() as uow:
                    posts = await uow.posts.list_newest_first()
            except StoreUnavailableError as exc:
                logger.error("feed_load_failed", error=exc.message)
                raise FeedUnavailableError() from exc

            author_ids = list(dict.fromkeys(post.user_id for post in posts))
            resolved = await asyncio.gather(
                *(self._profiles.resolve_for_display(user_id) for user_id in author_ids)
            )
            authors: dict[UUID, Optional[Profile]] = dict(zip(author_ids, resolved))

            entries = [
                FeedEntry.join(post, authors.get(post.user_id), self._fallback_name)
                for post in posts
            ]
        except Exception:
            cache.abandon(ticket)
            raise

        cache.publish(entries, ticket)

        logger.info(
            "feed_loaded",
            post_count=len(entries),
            author_count=len(author_ids),
            unresolved_authors=sum(1 for profile in resolved if profile is None),
            version=cache.version,
        )
        return list(cache.entries)
