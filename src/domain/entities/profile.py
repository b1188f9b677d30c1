"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from core.exceptions import MalformedRecordError

UNKNOWN_INITIAL = "U"


def display_initial(username: Optional[str], fallback: str = UNKNOWN_INITIAL) -> str:
    """Upper-cased first character of a username, or ``fallback`` when absent."""
    if not username:
        return fallback
    stripped = username.strip()
    if not stripped:
        return fallback
    return stripped[0].upper()


@dataclass
class Profile:
    """Domain entity for a member of the founders directory.

    The id is shared with the identity provider's user id. Profiles are
    created during account setup and only ever edited by their owner.
    """

    id: UUID
    username: str = ""
    name: str = ""
    bio: str = ""
    profile_picture_url: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_well_formed(self) -> bool:
        return bool(self.username and self.username.strip())

    @property
    def initial(self) -> str:
        return display_initial(self.username)

    def ensure_well_formed(self) -> None:
        """Raise MalformedRecordError if the profile has no usable username."""
        if not self.is_well_formed:
            raise MalformedRecordError(str(self.id), "username")
