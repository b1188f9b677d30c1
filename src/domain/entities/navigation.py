"""Navigation intents handed to the client router."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional
from uuid import UUID


class NavigationTarget(StrEnum):
    """Destinations the feed can ask the client to open."""

    PROFILE = "profile"
    MESSAGE_LOG = "message_log"
    LOGIN = "login"


@dataclass(frozen=True, slots=True)
class NavigationIntent:
    """Opaque "navigate to X" signal. Routing state stays with the client."""

    target: NavigationTarget
    subject_id: Optional[UUID] = None

    @property
    def path(self) -> str:
        if self.target == NavigationTarget.PROFILE:
            return f"/profile/{self.subject_id}"
        if self.target == NavigationTarget.MESSAGE_LOG:
            return f"/message-log/{self.subject_id}"
        return "/login"

    @classmethod
    def profile(cls, user_id: UUID) -> "NavigationIntent":
        return cls(target=NavigationTarget.PROFILE, subject_id=user_id)

    @classmethod
    def message_log(cls, user_id: UUID) -> "NavigationIntent":
        return cls(target=NavigationTarget.MESSAGE_LOG, subject_id=user_id)

    @classmethod
    def login(cls) -> "NavigationIntent":
        return cls(target=NavigationTarget.LOGIN)
