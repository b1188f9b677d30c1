"""Pydantic schemas for the profile directory API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.feed import SearchOutcome, SearchResult
from domain.entities.profile import Profile


class ProfileResponse(BaseModel):
    """Schema for a profile page."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: str
    bio: str
    profile_picture_url: str | None = None
    initial: str
    created_at: datetime

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            username=profile.username,
            name=profile.name,
            bio=profile.bio,
            profile_picture_url=profile.profile_picture_url,
            initial=profile.initial,
            created_at=profile.created_at,
        )


class ProfileDetailResponse(BaseModel):
    """Schema for a single profile."""

    data: ProfileResponse


class ProfileUpdate(BaseModel):
    """Schema for editing the caller's own profile."""

    username: str | None = Field(None, max_length=50)
    name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=1000)
    profile_picture_url: str | None = None


class SearchResultResponse(BaseModel):
    """A directory profile that matched the query."""

    id: UUID
    username: str
    name: str
    profile_picture_url: str | None = None
    initial: str
    profile_path: str

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultResponse":
        return cls(
            id=result.id,
            username=result.username,
            name=result.name,
            profile_picture_url=result.profile_picture_url,
            initial=result.initial,
            profile_path=result.intent.path,
        )


class SearchResponse(BaseModel):
    """Schema for a directory search."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "query": "al",
                "data": [],
                "no_results": True,
                "message": "No user found with that username or name.",
            }
        },
    )

    query: str
    data: list[SearchResultResponse]
    no_results: bool = False
    message: str | None = None

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> "SearchResponse":
        return cls(
            query=outcome.query,
            data=[SearchResultResponse.from_result(result) for result in outcome.results],
            no_results=outcome.no_results,
            message=outcome.message,
        )
