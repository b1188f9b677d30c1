"""Pydantic schemas for the feed and post API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.feed import FeedEntry


class PostCreate(BaseModel):
    """Schema for creating a post. Blank content is rejected by the service."""

    content: str = Field(..., max_length=2000)


class FeedEntryResponse(BaseModel):
    """A post joined with its author's current profile."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "9b2f8c1e-4d3a-4c57-9a8e-0f6b1d2c3e4f",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "content": "Closed our pre-seed round today!",
                "created_at": "2026-03-14T09:30:00",
                "username": "alice",
                "user_profile_picture_url": None,
                "profile_name": "Alice Martin",
                "author_initial": "A",
                "author_path": "/profile/123e4567-e89b-12d3-a456-426614174000",
                "likes": [],
                "comments": [],
                "can_delete": True,
            }
        },
    )

    id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    username: str | None = None
    user_profile_picture_url: str | None = None
    profile_name: str
    author_initial: str
    author_path: str
    likes: list[Any] = Field(default_factory=list)
    comments: list[Any] = Field(default_factory=list)
    can_delete: bool = False

    @classmethod
    def from_entry(cls, entry: FeedEntry, viewer_id: UUID) -> "FeedEntryResponse":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            content=entry.content,
            created_at=entry.created_at,
            username=entry.username,
            user_profile_picture_url=entry.user_profile_picture_url,
            profile_name=entry.profile_name,
            author_initial=entry.author_initial,
            author_path=entry.author_intent.path,
            likes=list(entry.likes),
            comments=list(entry.comments),
            can_delete=entry.user_id == viewer_id,
        )


class FeedResponse(BaseModel):
    """Schema for the session feed."""

    version: int
    data: list[FeedEntryResponse]
    error: str | None = None


class PostDetailResponse(BaseModel):
    """Schema for a freshly created post."""

    data: FeedEntryResponse
    feed_version: int
