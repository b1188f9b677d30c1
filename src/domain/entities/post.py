"""Post domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4


@dataclass
class Post:
    """Domain entity for a short text post on the founders feed.

    ``created_at`` is assigned by the store on insert and is the only sort
    key for the feed. ``user_id`` references a Profile but is not enforced
    by a constraint, so it may dangle.
    """

    user_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    likes: list[Any] = field(default_factory=list)
    comments: list[Any] = field(default_factory=list)
