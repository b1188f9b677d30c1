"""Pydantic schemas for the session API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from domain.services.session_service import FeedSession


class SessionResponse(BaseModel):
    """Signed-in user context for the home screen."""

    user_id: UUID
    display_initial: str
    profile_path: str
    message_log_path: str
    started_at: datetime
    feed_version: int
    feed_error: str | None = None

    @classmethod
    def from_session(cls, session: FeedSession) -> "SessionResponse":
        context = session.context
        return cls(
            user_id=context.user_id,
            display_initial=context.display_initial,
            profile_path=context.profile_intent.path,
            message_log_path=context.message_log_intent.path,
            started_at=context.started_at,
            feed_version=session.feed.version,
            feed_error=session.feed_error,
        )


class SignOutResponse(BaseModel):
    """Where the client should go after signing out."""

    redirect: str
