"""
Blog context: one client's session, view and error surface plus the content
store it writes to.

Every operation goes through an explicit BlogContext instead of module-level
state, so independent contexts (and tests) never share a session.
"""

import logging
from typing import Callable, List, Optional, TypeVar

from config.config_manager import ConfigManager
from core.credentials import CredentialStore
from core.db_manager import DBManager
from core.error_handler import BlogError, ErrorHandler
from core.validator import login_rules
from logic.authorization_view import Capabilities, UIAuthorizationView
from logic.content_store import ContentStore
from logic.session_manager import Session, SessionManager
from models.content import Comment, Post


logger = logging.getLogger(__name__)

T = TypeVar("T")

SITE_TITLE = "Blog Site"
CREATE_POST_HEADER = "Create a New Post"
COMMENTS_HEADER = "Comments"


class BlogContext:
    """
    Coordinates SessionManager, ContentStore, UIAuthorizationView and
    ErrorHandler for a single client.

    Operations return None on failure instead of raising; the failure's
    exact message is then available as ``error_message`` until the next
    successful operation.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        content_store: ContentStore,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize BlogContext.

        Args:
            session_manager: This client's session
            content_store: Post store, possibly shared with other contexts
            error_handler: Error surface, a fresh one if omitted
        """
        self.sessions = session_manager
        self.content = content_store
        self.errors = error_handler or ErrorHandler()
        self.view = UIAuthorizationView(session_manager)

    @classmethod
    def from_config(
        cls,
        config: ConfigManager,
        storage: Optional[DBManager] = None,
        content_store: Optional[ContentStore] = None,
        error_handler: Optional[ErrorHandler] = None
    ) -> "BlogContext":
        """
        Build a context from configuration.

        Args:
            config: Loaded configuration
            storage: Optional storage collaborator for a new ContentStore
            content_store: Existing store to share; ``storage`` is ignored
                when given
            error_handler: Error surface, a fresh one if omitted
        """
        auth = config.get_auth_config()
        content = config.get_content_config()

        credential_store = CredentialStore(auth.accounts)
        rules = login_rules(auth.username_min_length, auth.password_min_length)
        session_manager = SessionManager(credential_store, rules)

        if content_store is None:
            content_store = ContentStore(
                storage=storage,
                default_comment_author=content.default_comment_author
            )

        return cls(session_manager, content_store, error_handler)

    # Session

    @property
    def session(self) -> Session:
        return self.sessions.session

    @property
    def capabilities(self) -> Capabilities:
        return self.view.current

    @property
    def error_message(self) -> Optional[str]:
        """Message of the last failed operation, None after a success."""
        return self.errors.current_message

    def login(self, username: str, password: str) -> Optional[Session]:
        return self._run(
            "login",
            lambda: self.sessions.attempt_login(username, password)
        )

    def logout(self) -> Session:
        session = self.sessions.logout()
        self.errors.clear()
        return session

    # Content

    def list_posts(self) -> List[Post]:
        return self.content.list_posts()

    def get_post(self, post_id: str) -> Optional[Post]:
        return self._run("view post", lambda: self.content.get_post(post_id), post_id=post_id)

    def create_post(self, title: str, content: str) -> Optional[Post]:
        return self._run(
            "create post",
            lambda: self.content.create_post(self.session, title, content)
        )

    def add_comment(self, post_id: str, text: str, author: Optional[str] = None) -> Optional[Comment]:
        return self._run(
            "add comment",
            lambda: self.content.add_comment(post_id, author, text),
            post_id=post_id
        )

    def _run(self, operation: str, action: Callable[[], T], post_id: Optional[str] = None) -> Optional[T]:
        try:
            result = action()
        except BlogError as e:
            self.errors.handle_error(e, operation, user=self.session.user, post_id=post_id)
            return None
        self.errors.clear()
        return result
