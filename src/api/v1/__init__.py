"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.feed import router as feed_router
from api.v1.routes.posts import router as posts_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.session import router as session_router
from api.v1.schemas.common import ErrorResponse

router = APIRouter(
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
router.include_router(session_router)
router.include_router(feed_router)
router.include_router(posts_router)
router.include_router(profiles_router)
