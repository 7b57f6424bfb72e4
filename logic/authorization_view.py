"""
Capability flags derived from the session.

The rendering layer reads these to decide which navigation actions to show.
"""

from dataclasses import dataclass
from typing import List

from logic.session_manager import Session, SessionManager


HOME_LABEL = "Home"
LOGIN_LABEL = "Login"
LOGOUT_LABEL = "Logout"
CREATE_POST_LABEL = "Create Post"


@dataclass(frozen=True)
class Capabilities:
    """Which actions the UI exposes for a session."""
    show_create_post: bool
    show_login: bool
    show_logout: bool


def capabilities_for(session: Session) -> Capabilities:
    """Project a session onto capability flags."""
    authenticated = session.is_authenticated
    return Capabilities(
        show_create_post=authenticated,
        show_login=not authenticated,
        show_logout=authenticated,
    )


class UIAuthorizationView:
    """
    Keeps the capability flags in step with a SessionManager.

    Holds no state of its own beyond the last projection, which is
    recomputed on every session transition.
    """

    def __init__(self, session_manager: SessionManager):
        self._current = capabilities_for(session_manager.session)
        session_manager.add_listener(self._on_session_changed)

    def _on_session_changed(self, session: Session) -> None:
        self._current = capabilities_for(session)

    @property
    def current(self) -> Capabilities:
        return self._current

    def visible_actions(self) -> List[str]:
        """Navigation labels in display order."""
        caps = self._current
        actions = [HOME_LABEL]
        if caps.show_create_post:
            actions.append(CREATE_POST_LABEL)
        if caps.show_login:
            actions.append(LOGIN_LABEL)
        if caps.show_logout:
            actions.append(LOGOUT_LABEL)
        return actions
