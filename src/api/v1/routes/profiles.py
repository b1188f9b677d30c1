"""Profile directory API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_directory_search, get_profile_service
from api.v1.schemas.profile import (
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
    SearchResponse,
)
from core.rate_limit import READ_LIMIT, SEARCH_LIMIT, WRITE_LIMIT, limiter
from domain.services.directory_search import DirectorySearchEngine
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search the directory",
    responses={503: {"description": "Directory could not be listed"}},
)
@limiter.limit(SEARCH_LIMIT)  # type: ignore[untyped-decorator]
async def search_profiles(
    request: Request,
    user: CurrentUser,
    q: str = Query("", max_length=100, description="Substring of a username or name"),
    engine: DirectorySearchEngine = Depends(get_directory_search),
) -> SearchResponse:
    """Case-insensitive substring search over usernames and display names."""
    outcome = await engine.search(q)
    return SearchResponse.from_outcome(outcome)


@router.patch(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Edit your profile",
    responses={
        400: {"description": "Username is empty"},
        404: {"description": "Profile not found"},
        409: {"description": "Username already taken"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update the signed-in user's handle, name, bio or picture URL."""
    profile = await service.update_own_profile(
        user_id=user.id,
        username=body.username,
        name=body.name,
        bio=body.bio,
        profile_picture_url=body.profile_picture_url,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_profile(profile))


@router.get(
    "/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a member's profile page."""
    profile = await service.get_profile(user_id)
    return ProfileDetailResponse(data=ProfileResponse.from_profile(profile))
