"""Substring search over the profile directory."""

from typing import Callable

import structlog

from core.config import settings
from core.exceptions import MalformedRecordError, SearchUnavailableError, StoreUnavailableError
from domain.entities.feed import SearchOutcome, SearchResult
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def matches(profile: Profile, query_lower: str) -> bool:
    """Case-insensitive containment against username or display name."""
    username = (profile.username or "").lower()
    name = (profile.name or "").lower()
    return query_lower in username or query_lower in name


class DirectorySearchEngine:
    """Filters the full directory client-side.

    There is no server-side filtering, so this suits directories of modest
    size. Results keep the store's enumeration order; there is no ranking.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        no_results_message: str = settings.search_no_results_message,
    ) -> None:
        self._uow_factory = uow_factory
        self._no_results_message = no_results_message

    async def search(self, query: str) -> SearchOutcome:
        """Search the directory.

        A blank query means no search is active and returns nothing, without
        flagging "no results". Profiles without a username are skipped.

        Raises:
            SearchUnavailableError: If the directory could not be listed
        """
        if not query or not query.strip():
            return SearchOutcome(query=query or "")

        try:
            async with self._uow_factory() as uow:
                profiles = await uow.profiles.list_all()
        except StoreUnavailableError as exc:
            logger.error("directory_search_failed", query=query, error=exc.message)
            raise SearchUnavailableError() from exc

        query_lower = query.lower()
        results: list[SearchResult] = []
        skipped = 0
        for profile in profiles:
            try:
                profile.ensure_well_formed()
            except MalformedRecordError as exc:
                skipped += 1
                logger.warning("malformed_profile_skipped", **exc.details)
                continue
            if matches(profile, query_lower):
                results.append(SearchResult.from_profile(profile))

        if not results:
            return SearchOutcome(
                query=query,
                no_results=True,
                message=self._no_results_message,
                skipped=skipped,
            )
        return SearchOutcome(query=query, results=tuple(results), skipped=skipped)
