"""Feed API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import ActiveSession, get_session_service
from api.v1.schemas.feed import FeedEntryResponse, FeedResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.session_service import FeedSession, SessionService

router = APIRouter(prefix="/feed", tags=["feed"])


def _feed_response(session: FeedSession) -> FeedResponse:
    viewer_id = session.context.user_id
    return FeedResponse(
        version=session.feed.version,
        data=[FeedEntryResponse.from_entry(entry, viewer_id) for entry in session.feed.entries],
        error=session.feed_error,
    )


@router.get(
    "",
    response_model=FeedResponse,
    summary="Get the session feed",
    responses={409: {"description": "No active session"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_feed(request: Request, session: ActiveSession) -> FeedResponse:
    """Return the cached feed, newest first, including optimistic changes."""
    return _feed_response(session)


@router.post(
    "/reload",
    response_model=FeedResponse,
    summary="Reload the feed",
    responses={
        409: {"description": "No active session"},
        503: {"description": "Posts could not be fetched"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def reload_feed(
    request: Request,
    user: CurrentUser,
    sessions: SessionService = Depends(get_session_service),
) -> FeedResponse:
    """Run a full feed load, re-joining every post with its author's profile."""
    session = await sessions.reload(user.id)
    return _feed_response(session)
