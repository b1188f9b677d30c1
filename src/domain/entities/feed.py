"""Read-side views produced by feed assembly and directory search."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from domain.entities.navigation import NavigationIntent
from domain.entities.post import Post
from domain.entities.profile import Profile, display_initial


@dataclass(frozen=True, slots=True)
class FeedEntry:
    """Read-only value object: a Post joined with its author's current profile."""

    id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    username: Optional[str]
    user_profile_picture_url: Optional[str]
    profile_name: str
    likes: tuple[Any, ...] = ()
    comments: tuple[Any, ...] = ()

    @property
    def author_initial(self) -> str:
        return display_initial(self.username)

    @property
    def author_intent(self) -> NavigationIntent:
        return NavigationIntent.profile(self.user_id)

    @classmethod
    def join(
        cls,
        post: Post,
        profile: Optional[Profile],
        fallback_name: str = "Unknown",
    ) -> "FeedEntry":
        """Merge a post with its (possibly unresolved) author profile."""
        return cls(
            id=post.id,
            user_id=post.user_id,
            content=post.content,
            created_at=post.created_at,
            username=profile.username if profile else None,
            user_profile_picture_url=profile.profile_picture_url if profile else None,
            profile_name=(profile.name if profile else None) or fallback_name,
            likes=tuple(post.likes or ()),
            comments=tuple(post.comments or ()),
        )


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Read-only value object: a directory profile that matched a query."""

    id: UUID
    username: str
    name: str
    bio: str
    profile_picture_url: Optional[str]

    @property
    def initial(self) -> str:
        return display_initial(self.username)

    @property
    def intent(self) -> NavigationIntent:
        return NavigationIntent.profile(self.id)

    @classmethod
    def from_profile(cls, profile: Profile) -> "SearchResult":
        return cls(
            id=profile.id,
            username=profile.username,
            name=profile.name,
            bio=profile.bio,
            profile_picture_url=profile.profile_picture_url,
        )


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of one directory search pass."""

    query: str
    results: tuple[SearchResult, ...] = field(default_factory=tuple)
    no_results: bool = False
    message: Optional[str] = None
    skipped: int = 0

    @property
    def active(self) -> bool:
        return bool(self.query.strip())
