"""
Domain models for blog content.

Posts and comments are plain dataclasses owned by the ContentStore. The
SQLAlchemy records in ``models.database`` mirror them for persistence.
"""

import uuid
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Comment:
    """
    An author-attributed reply appended to a post.

    Attributes:
        author: Display name of the commenter
        text: Comment body
        id: Unique comment identifier (UUID)
        created_at: Creation timestamp (UTC)
    """
    author: str
    text: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)

    def render(self) -> str:
        """Render the comment as ``"author: text"``."""
        return f"{self.author}: {self.text}"


@dataclass
class Post:
    """
    A titled content item with its ordered comments.

    Attributes:
        title: Post title
        content: Post body
        author: Session user that created the post, None for seeded posts
        id: Unique post identifier (UUID)
        created_at: Creation timestamp (UTC)
        comments: Comments in insertion order
    """
    title: str
    content: str
    author: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    comments: List[Comment] = field(default_factory=list)

    def snapshot(self) -> "Post":
        """Return a copy whose comment list can't alias the stored one."""
        return Post(
            title=self.title,
            content=self.content,
            author=self.author,
            id=self.id,
            created_at=self.created_at,
            comments=list(self.comments),
        )
