"""
SQLAlchemy database models for the blog core.

This module defines the persisted shape of posts and comments. The
ContentStore works with the dataclasses in ``models.content``; DBManager
converts between the two.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostRecord(Base):
    """
    Represents a stored blog post.

    ``position`` grows with every insert so the newest-first order survives
    timestamps that collide at the database's resolution.
    """
    __tablename__ = 'posts'

    id = Column(String, primary_key=True)  # UUID
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    position = Column(Integer, nullable=False)

    # Relationships
    comments = relationship(
        "CommentRecord",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="CommentRecord.position",
    )

    def __repr__(self):
        return f"<PostRecord(id={self.id}, title={self.title})>"


class CommentRecord(Base):
    """Represents a stored comment on a post."""
    __tablename__ = 'comments'

    id = Column(String, primary_key=True)  # UUID
    post_id = Column(String, ForeignKey('posts.id'), nullable=False)
    author = Column(String, nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    position = Column(Integer, nullable=False)  # insertion order within the post

    # Relationships
    post = relationship("PostRecord", back_populates="comments")

    def __repr__(self):
        return f"<CommentRecord(id={self.id}, author={self.author})>"
