"""
Session Manager for the Blog Core

Holds the authentication state of a single client and runs the login
pipeline: field validation, then the credential check, then the transition.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from core.credentials import CredentialStore
from core.error_handler import InvalidCredentials
from core.validator import DEFAULT_LOGIN_RULES, FieldRule, validate_login


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """
    Authentication state of the client.

    ``user`` is set iff ``is_authenticated``; use the constructors below
    rather than building one by hand.
    """
    is_authenticated: bool = False
    user: Optional[str] = None

    def __post_init__(self):
        if self.is_authenticated != (self.user is not None):
            raise ValueError(
                f"Inconsistent session: is_authenticated={self.is_authenticated}, user={self.user!r}"
            )

    @classmethod
    def logged_out(cls) -> "Session":
        return cls(is_authenticated=False, user=None)

    @classmethod
    def logged_in(cls, user: str) -> "Session":
        return cls(is_authenticated=True, user=user)


class SessionManager:
    """
    Two-state session machine: LoggedOut (initial) and LoggedIn(user).

    Responsibilities:
    - Validate login fields before touching the credential store
    - Transition on login success, failure and logout
    - Notify listeners after every transition
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        rules: Sequence[FieldRule] = DEFAULT_LOGIN_RULES
    ):
        """
        Initialize SessionManager.

        Args:
            credential_store: Credential check used once fields are well-formed
            rules: Ordered login field rules
        """
        self.credentials = credential_store
        self.rules = tuple(rules)
        self._session = Session.logged_out()
        self._listeners: List[Callable[[Session], None]] = []

    @property
    def session(self) -> Session:
        """Current session snapshot."""
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def add_listener(self, callback: Callable[[Session], None]) -> None:
        """
        Register a callback invoked with the new Session after each transition.

        Args:
            callback: Function(session: Session)
        """
        self._listeners.append(callback)

    def attempt_login(self, username: str, password: str) -> Session:
        """
        Run the login pipeline.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            The LoggedIn session

        Raises:
            FieldRequired: If a field is empty (first failing rule only)
            FieldTooShort: If a field is below its minimum length
            InvalidCredentials: If the fields are well-formed but don't match
                a known account
        """
        result = validate_login(username, password, self.rules)
        if not result.ok:
            self._transition(Session.logged_out())
            logger.info(f"Login rejected by validation: {result.message}")
            raise result.error

        credentials = result.credentials
        if not self.credentials.verify(credentials.username, credentials.password):
            self._transition(Session.logged_out())
            logger.info(f"Login failed for '{credentials.username}'")
            raise InvalidCredentials()

        self._transition(Session.logged_in(credentials.username))
        logger.info(f"User '{credentials.username}' logged in")
        return self._session

    def logout(self) -> Session:
        """
        Log out unconditionally. Calling it while logged out is a no-op
        transition.

        Returns:
            The LoggedOut session
        """
        previous = self._session.user
        self._transition(Session.logged_out())
        if previous:
            logger.info(f"User '{previous}' logged out")
        return self._session

    def _transition(self, new_session: Session) -> None:
        self._session = new_session

        for callback in list(self._listeners):
            try:
                callback(new_session)
            except Exception as e:
                logger.error(f"Session listener failed: {e}")
