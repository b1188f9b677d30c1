"""Session API routes (sign-in / sign-out events)."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import ActiveSession, get_session_service
from api.v1.schemas.session import SessionResponse, SignOutResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.session_service import SessionService

router = APIRouter(prefix="/session", tags=["session"])


@router.post(
    "",
    response_model=SessionResponse,
    summary="Start a feed session",
    responses={200: {"description": "Session started, or the already active one"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def start_session(
    request: Request,
    user: CurrentUser,
    sessions: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Signal sign-in. The first call resolves the profile badge and loads the feed."""
    session = await sessions.handle(user.signed_in())
    return SessionResponse.from_session(session)  # type: ignore[arg-type]


@router.get(
    "",
    response_model=SessionResponse,
    summary="Get the active session",
    responses={409: {"description": "No active session"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_session(request: Request, session: ActiveSession) -> SessionResponse:
    """Return the signed-in user's badge initial and navigation paths."""
    return SessionResponse.from_session(session)


@router.delete(
    "",
    response_model=SignOutResponse,
    summary="End the session",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def end_session(
    request: Request,
    user: CurrentUser,
    sessions: SessionService = Depends(get_session_service),
) -> SignOutResponse:
    """Signal sign-out. Drops the cached feed and points the client at login."""
    intent = await sessions.handle(user.signed_out())
    return SignOutResponse(redirect=intent.path)  # type: ignore[union-attr]
