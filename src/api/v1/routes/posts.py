"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import ActiveSession, get_post_coordinator
from api.v1.schemas.feed import FeedEntryResponse, PostCreate, PostDetailResponse
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.post_mutation import PostMutationCoordinator

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created and prepended to the feed"},
        400: {"description": "Post content is empty"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    session: ActiveSession,
    coordinator: PostMutationCoordinator = Depends(get_post_coordinator),
) -> PostDetailResponse:
    """Publish a post as the signed-in user."""
    entry = await coordinator.create_post(session.context, body.content, session.feed)
    return PostDetailResponse(
        data=FeedEntryResponse.from_entry(entry, session.context.user_id),
        feed_version=session.feed.version,
    )


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        204: {"description": "Post deleted"},
        403: {"description": "Post belongs to another user"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    session: ActiveSession,
    coordinator: PostMutationCoordinator = Depends(get_post_coordinator),
) -> None:
    """Delete one of your own posts."""
    await coordinator.delete_post(session.context, post_id, session.feed)
    return None
