"""
Database manager for the blog core.

This module provides the DBManager class, the storage collaborator behind
ContentStore. It handles initialization, saving posts and comments, loading
them back in display order, and transaction management.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List
from contextlib import contextmanager
from sqlalchemy import create_engine, event, func
from sqlalchemy.orm import sessionmaker, Session

from models.content import Post, Comment
from models.database import Base, PostRecord, CommentRecord


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class DBManager:
    """
    Manages database operations for the blog core.

    Provides methods for initializing the database, saving and retrieving
    posts and comments, and managing transactions with automatic rollback on
    errors.
    """

    def __init__(self, db_path: Path):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self.engine = None
        self.SessionLocal = None

    def initialize_database(self):
        """
        Initialize the database by creating the schema if it doesn't exist.

        Creates all tables defined in the models and sets up the session factory.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        db_url = f"sqlite:///{self.db_path}"
        self.engine = create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False}
        )

        # Enable foreign key constraints for SQLite
        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        Base.metadata.create_all(self.engine)

        # expire_on_commit=False avoids detached instance errors
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    @contextmanager
    def get_session(self) -> Session:
        """
        Context manager for database sessions with automatic rollback on error.

        Yields:
            Session: SQLAlchemy session object

        Example:
            with db_manager.get_session() as session:
                session.add(record)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # Post operations

    def save_post(self, post: Post) -> None:
        """
        Save a new post and any comments it already carries.

        Args:
            post: Post to save

        Raises:
            IntegrityError: If a post with the same ID already exists
            OperationalError: If database operation fails
        """
        self.save_posts([post])

    def save_posts(self, posts: List[Post]) -> None:
        """
        Save several new posts in one transaction.

        Later posts in the list are placed above earlier ones. If any post
        fails, none of them are stored.

        Args:
            posts: Posts to save, oldest first

        Raises:
            IntegrityError: If a post ID is repeated or already exists
            OperationalError: If database operation fails
        """
        with self.get_session() as session:
            position = session.query(func.max(PostRecord.position)).scalar() or 0
            for post in posts:
                position += 1
                record = PostRecord(
                    id=post.id,
                    title=post.title,
                    content=post.content,
                    author=post.author,
                    created_at=post.created_at,
                    position=position,
                )
                for index, comment in enumerate(post.comments, start=1):
                    record.comments.append(self._comment_record(comment, index))
                session.add(record)

    def load_posts(self) -> List[Post]:
        """
        Load all posts with their comments.

        Returns:
            Posts ordered newest first, comments in insertion order
        """
        with self.get_session() as session:
            records = session.query(PostRecord).order_by(PostRecord.position.desc()).all()
            return [self._to_post(record) for record in records]

    def count_posts(self) -> int:
        with self.get_session() as session:
            return session.query(PostRecord).count()

    # Comment operations

    def save_comment(self, post_id: str, comment: Comment) -> None:
        """
        Append a comment to a stored post.

        Args:
            post_id: Parent post identifier
            comment: Comment to save

        Raises:
            IntegrityError: If the post doesn't exist or the comment ID is taken
            OperationalError: If database operation fails
        """
        with self.get_session() as session:
            position = (
                session.query(func.max(CommentRecord.position))
                .filter(CommentRecord.post_id == post_id)
                .scalar() or 0
            ) + 1
            record = self._comment_record(comment, position)
            record.post_id = post_id
            session.add(record)

    # Conversion helpers

    def _comment_record(self, comment: Comment, position: int) -> CommentRecord:
        return CommentRecord(
            id=comment.id,
            author=comment.author,
            text=comment.text,
            created_at=comment.created_at,
            position=position,
        )

    def _to_post(self, record: PostRecord) -> Post:
        return Post(
            title=record.title,
            content=record.content,
            author=record.author,
            id=record.id,
            created_at=_as_utc(record.created_at),
            comments=[
                Comment(
                    author=c.author,
                    text=c.text,
                    id=c.id,
                    created_at=_as_utc(c.created_at),
                )
                for c in record.comments
            ],
        )
