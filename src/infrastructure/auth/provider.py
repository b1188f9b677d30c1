"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID

from domain.entities.session import SignedIn, SignedOut


@dataclass
class TokenUser:
    """Identity extracted from a bearer token. ``id`` doubles as the profile id."""

    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[str] = None

    def signed_in(self) -> SignedIn:
        return SignedIn(user_id=self.id)

    def signed_out(self) -> SignedOut:
        return SignedOut(user_id=self.id)


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """Create an authentication token for a user."""
        ...
