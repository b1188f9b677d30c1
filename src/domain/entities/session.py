"""Session domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from domain.entities.navigation import NavigationIntent
from domain.entities.profile import Profile, display_initial

# Badge shown before the signed-in user's profile has been resolved.
DEFAULT_BADGE_INITIAL = "P"


@dataclass(frozen=True, slots=True)
class SignedIn:
    """Auth event: a user signed in."""

    user_id: UUID


@dataclass(frozen=True, slots=True)
class SignedOut:
    """Auth event: a user signed out."""

    user_id: UUID


AuthEvent = Union[SignedIn, SignedOut]


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Signed-in user state, populated once at session start and read-only after."""

    user_id: UUID
    profile: Optional[Profile] = None
    started_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def display_initial(self) -> str:
        if self.profile is None:
            return DEFAULT_BADGE_INITIAL
        return display_initial(self.profile.username, fallback=DEFAULT_BADGE_INITIAL)

    @property
    def profile_intent(self) -> NavigationIntent:
        return NavigationIntent.profile(self.user_id)

    @property
    def message_log_intent(self) -> NavigationIntent:
        return NavigationIntent.message_log(self.user_id)
