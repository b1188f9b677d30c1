"""Feed session lifecycle driven by auth events."""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterable
from dataclasses import dataclass, field
from typing import Optional, Union
from uuid import UUID

import structlog

from core.exceptions import FeedUnavailableError, SessionNotStartedError
from domain.entities.navigation import NavigationIntent
from domain.entities.session import AuthEvent, SessionContext, SignedIn, SignedOut
from domain.services.feed_assembler import FeedAssembler
from domain.services.feed_cache import FeedCache
from domain.services.profile_resolver import ProfileResolver

logger = structlog.get_logger()


@dataclass
class FeedSession:
    """Everything the feed needs for one signed-in user."""

    context: SessionContext
    feed: FeedCache = field(default_factory=FeedCache)
    feed_error: Optional[str] = None


class SessionService:
    """Owns the per-user SessionContext and FeedCache.

    The first SignedIn for a user resolves the profile badge and runs one
    full feed load. Repeated SignedIn events return the existing session
    untouched, so every client of one user shares a session. SignedOut tears
    it down, including a start that is still in flight.
    """

    def __init__(
        self,
        profile_resolver: ProfileResolver,
        feed_assembler: FeedAssembler,
    ) -> None:
        self._profiles = profile_resolver
        self._assembler = feed_assembler
        self._sessions: dict[UUID, FeedSession] = {}
        self._locks: defaultdict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)
        # Bumped on every sign-out; a start that sees it change was superseded.
        self._generations: defaultdict[UUID, int] = defaultdict(int)

    async def handle(self, event: AuthEvent) -> Union[FeedSession, NavigationIntent]:
        """Apply one auth event."""
        if isinstance(event, SignedIn):
            return await self.start(event.user_id)
        if isinstance(event, SignedOut):
            return self.end(event.user_id)
        raise TypeError(f"Unsupported auth event: {event!r}")

    async def consume(self, events: AsyncIterable[AuthEvent]) -> None:
        """Apply a stream of auth events in arrival order."""
        async for event in events:
            await self.handle(event)

    async def start(self, user_id: UUID) -> FeedSession:
        """Start (or return the already started) session for ``user_id``.

        Raises:
            SessionNotStartedError: If the user signed out before the start
                finished; the half-built session is discarded
        """
        generation = self._generations[user_id]
        async with self._locks[user_id]:
            existing = self._sessions.get(user_id)
            if existing is not None:
                return existing

            profile = await self._profiles.resolve_for_display(user_id)
            self._ensure_current(user_id, generation)

            session = FeedSession(context=SessionContext(user_id=user_id, profile=profile))
            self._sessions[user_id] = session
            logger.info(
                "session_started",
                user_id=str(user_id),
                profile_resolved=profile is not None,
            )

            try:
                await self._reload(session)
            except FeedUnavailableError:
                # Reported through feed_error; the session itself stays usable.
                pass
            self._ensure_current(user_id, generation)
            return session

    def _ensure_current(self, user_id: UUID, generation: int) -> None:
        if self._generations[user_id] != generation:
            logger.info("session_start_superseded", user_id=str(user_id))
            raise SessionNotStartedError(str(user_id))

    def get(self, user_id: UUID) -> FeedSession:
        """Get the active session.

        Raises:
            SessionNotStartedError: If the user has no active session
        """
        session = self._sessions.get(user_id)
        if session is None:
            raise SessionNotStartedError(str(user_id))
        return session

    async def reload(self, user_id: UUID) -> FeedSession:
        """Run an explicit full feed load for an active session."""
        session = self.get(user_id)
        await self._reload(session)
        return session

    def end(self, user_id: UUID) -> NavigationIntent:
        """Tear down the session and point the client at the login page."""
        session = self._sessions.pop(user_id, None)
        # Any start still in flight for this user must discard what it built.
        self._generations[user_id] += 1
        lock = self._locks.get(user_id)
        if lock is not None and not lock.locked():
            self._locks.pop(user_id, None)
        if session is not None:
            logger.info("session_ended", user_id=str(user_id))
        return NavigationIntent.login()

    async def _reload(self, session: FeedSession) -> None:
        try:
            await self._assembler.load_feed(session.feed)
        except FeedUnavailableError as exc:
            session.feed_error = exc.message
            raise
        session.feed_error = None
