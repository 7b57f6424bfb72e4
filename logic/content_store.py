"""
Content Store for the Blog Core

Manages posts and their comments: creation, retrieval, ordering, and the
session gate on post creation.
"""

import logging
import threading
from typing import Iterable, List, Mapping, Optional

from core.db_manager import DBManager
from core.error_handler import EmptyField, NotFound, StorageError, Unauthorized
from logic.session_manager import Session
from models.content import Comment, Post


logger = logging.getLogger(__name__)


DEFAULT_COMMENT_AUTHOR = "Guest"


class ContentStore:
    """
    Holds the ordered post list.

    Responsibilities:
    - Keep posts newest first and comments in insertion order
    - Reject empty titles, contents and comment texts
    - Require a logged-in session to create posts (not to comment)
    - Write through to the optional storage collaborator

    A failed call leaves the store exactly as it was.
    """

    def __init__(
        self,
        storage: Optional[DBManager] = None,
        default_comment_author: str = DEFAULT_COMMENT_AUTHOR
    ):
        """
        Initialize ContentStore.

        Args:
            storage: Optional DBManager to load from and write through to
            default_comment_author: Author used when a comment has none
        """
        self.storage = storage
        self.default_comment_author = default_comment_author
        self._posts: List[Post] = []
        self._lock = threading.RLock()

        if self.storage is not None:
            self._posts = self.storage.load_posts()
            logger.info(f"Loaded {len(self._posts)} posts from storage")

    def list_posts(self) -> List[Post]:
        """
        Return all posts, newest first.

        The returned posts are copies; mutating them doesn't touch the store.
        """
        with self._lock:
            return [post.snapshot() for post in self._posts]

    def get_post(self, post_id: str) -> Post:
        """
        Retrieve a post by ID.

        Raises:
            NotFound: If no post has ``post_id``
        """
        with self._lock:
            return self._find(post_id).snapshot()

    def create_post(self, session: Session, title: str, content: str) -> Post:
        """
        Create a post and make it the head of the list.

        Args:
            session: Session of the caller
            title: Post title
            content: Post body

        Returns:
            Post: Created post

        Raises:
            Unauthorized: If the session is not logged in
            EmptyField: If the title or content is empty
            StorageError: If writing through to storage fails
        """
        if not session.is_authenticated:
            logger.warning("Rejected post creation from a logged-out session")
            raise Unauthorized()

        post = self._build_post(title, content, author=session.user)

        with self._lock:
            self._persist_post(post)
            self._posts.insert(0, post)

        logger.info(f"Created post '{post.title}' with ID {post.id[:8]}")
        return post.snapshot()

    def add_comment(self, post_id: str, author: Optional[str], text: str) -> Comment:
        """
        Append a comment to a post.

        Args:
            post_id: Parent post identifier
            author: Commenter name, blank for the default author
            text: Comment body

        Returns:
            Comment: Created comment

        Raises:
            NotFound: If no post has ``post_id``
            EmptyField: If the text is empty
            StorageError: If writing through to storage fails
        """
        with self._lock:
            post = self._find(post_id)

            if not text or not text.strip():
                raise EmptyField("text")

            author = (author or "").strip() or self.default_comment_author
            comment = Comment(author=author, text=text.strip())

            if self.storage is not None:
                try:
                    self.storage.save_comment(post.id, comment)
                except Exception as e:
                    logger.error(f"Failed to store comment on post {post.id[:8]}: {e}")
                    raise StorageError()

            post.comments.append(comment)

        logger.info(f"Added comment {comment.id[:8]} to post {post_id[:8]}")
        return comment

    def seed(self, entries: Iterable[Mapping[str, str]]) -> List[Post]:
        """
        Load initial posts without a session.

        The first entry ends up at the head of the list. All entries are
        stored in one batch before any of them is listed.

        Args:
            entries: Mappings with ``title`` and ``content`` keys

        Returns:
            The seeded posts in display order

        Raises:
            EmptyField: If any entry has an empty title or content; nothing
                is seeded in that case
            StorageError: If storage rejects the batch; nothing is seeded
        """
        posts = [self._build_post(e.get('title'), e.get('content')) for e in entries]

        with self._lock:
            self._persist_posts(list(reversed(posts)))
            self._posts[:0] = posts

        logger.info(f"Seeded {len(posts)} posts")
        return [post.snapshot() for post in posts]

    def __len__(self) -> int:
        with self._lock:
            return len(self._posts)

    def _find(self, post_id: str) -> Post:
        for post in self._posts:
            if post.id == post_id:
                return post
        raise NotFound("post", post_id)

    def _build_post(self, title: Optional[str], content: Optional[str], author: Optional[str] = None) -> Post:
        title = (title or "").strip()
        content = (content or "").strip()

        if not title:
            raise EmptyField("title")
        if not content:
            raise EmptyField("content")

        return Post(title=title, content=content, author=author)

    def _persist_post(self, post: Post) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save_post(post)
        except Exception as e:
            logger.error(f"Failed to store post {post.id[:8]}: {e}")
            raise StorageError()

    def _persist_posts(self, posts: List[Post]) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save_posts(posts)
        except Exception as e:
            logger.error(f"Failed to store {len(posts)} posts: {e}")
            raise StorageError()
