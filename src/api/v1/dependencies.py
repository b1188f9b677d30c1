"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends

from api.dependencies.auth import CurrentUser
from domain.services.directory_search import DirectorySearchEngine
from domain.services.feed_assembler import FeedAssembler
from domain.services.post_mutation import PostMutationCoordinator
from domain.services.profile_resolver import ProfileResolver
from domain.services.profile_service import ProfileService
from domain.services.session_service import FeedSession, SessionService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_resolver() -> ProfileResolver:
    """Get ProfileResolver instance."""
    return ProfileResolver(get_uow_factory())


@lru_cache
def get_feed_assembler() -> FeedAssembler:
    """Get FeedAssembler instance."""
    return FeedAssembler(get_uow_factory(), get_profile_resolver())


@lru_cache
def get_directory_search() -> DirectorySearchEngine:
    """Get DirectorySearchEngine instance."""
    return DirectorySearchEngine(get_uow_factory())


@lru_cache
def get_post_coordinator() -> PostMutationCoordinator:
    """Get PostMutationCoordinator instance."""
    return PostMutationCoordinator(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_session_service() -> SessionService:
    """Get the process-wide SessionService (holds every live feed session)."""
    return SessionService(get_profile_resolver(), get_feed_assembler())


async def get_active_session(
    user: CurrentUser,
    sessions: SessionService = Depends(get_session_service),
) -> FeedSession:
    """Resolve the caller's feed session, failing if it was never started."""
    return sessions.get(user.id)


ActiveSession = Annotated[FeedSession, Depends(get_active_session)]
