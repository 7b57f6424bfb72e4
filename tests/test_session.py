"""
Tests for the SessionManager state machine.

Covers validation failures, credential failures, successful login, logout
from every state, and listener notification.
"""

import pytest

from core.error_handler import FieldRequired, FieldTooShort, InvalidCredentials
from logic.session_manager import Session, SessionManager


class TestSession:
    """Tests for the Session value."""

    def test_logged_out(self):
        """Test that a logged-out session has no user."""
        session = Session.logged_out()
        assert not session.is_authenticated
        assert session.user is None

    def test_logged_in(self):
        """Test that a logged-in session carries its user."""
        session = Session.logged_in("admin")
        assert session.is_authenticated
        assert session.user == "admin"

    def test_default_is_logged_out(self):
        """Test that a bare Session is the logged-out state."""
        assert Session() == Session.logged_out()

    @pytest.mark.parametrize("is_authenticated,user", [
        (True, None),
        (False, "admin"),
    ])
    def test_inconsistent_session_rejected(self, is_authenticated, user):
        """Test that a user is required exactly when authenticated."""
        with pytest.raises(ValueError):
            Session(is_authenticated=is_authenticated, user=user)


class TestAttemptLogin:
    """Tests for the login pipeline."""

    def test_initial_state(self, session_manager):
        """Test that a new manager starts logged out."""
        assert session_manager.session == Session.logged_out()
        assert not session_manager.is_authenticated

    def test_valid_login(self, session_manager):
        """Test that admin/admin123 logs in."""
        session = session_manager.attempt_login("admin", "admin123")

        assert session == Session.logged_in("admin")
        assert session_manager.session.user == "admin"

    def test_invalid_credentials(self, session_manager):
        """Test that well-formed wrong credentials are rejected."""
        with pytest.raises(InvalidCredentials) as exc_info:
            session_manager.attempt_login("wronguser", "wrongpass123")

        assert exc_info.value.message == "Invalid Credentials"
        assert session_manager.session == Session.logged_out()

    @pytest.mark.parametrize("username,password,error_type,message", [
        ("", "wrongpass123", FieldRequired, "Username field is required!"),
        ("wr", "wrongpass123", FieldTooShort, "Username field must be at least 3 characters"),
        ("wronguser", "", FieldRequired, "Password field is required!"),
        ("wronguser", "wrong", FieldTooShort, "Password must be at least 8 characters long!"),
    ])
    def test_validation_failures(self, session_manager, username, password, error_type, message):
        """Test that validation errors surface verbatim and leave the session logged out."""
        with pytest.raises(error_type) as exc_info:
            session_manager.attempt_login(username, password)

        assert str(exc_info.value) == message
        assert not session_manager.is_authenticated

    def test_validation_skips_credential_check(self, session_manager, monkeypatch):
        """Test that malformed fields never reach the credential store."""
        calls = []
        monkeypatch.setattr(
            session_manager.credentials, "verify",
            lambda username, password: calls.append(username) or True
        )

        with pytest.raises(FieldTooShort):
            session_manager.attempt_login("ad", "admin123")

        assert calls == []

    def test_failed_login_logs_out(self, logged_in_manager):
        """Test that a failed attempt while logged in transitions to logged out."""
        with pytest.raises(InvalidCredentials):
            logged_in_manager.attempt_login("admin", "wrongpass123")

        assert logged_in_manager.session == Session.logged_out()

    def test_custom_rules(self, credential_store):
        """Test that the manager applies the rules it was given."""
        from core.validator import login_rules

        manager = SessionManager(credential_store, login_rules(password_min_length=10))

        with pytest.raises(FieldTooShort) as exc_info:
            manager.attempt_login("admin", "admin123")
        assert exc_info.value.minimum == 10


class TestLogout:
    """Tests for logout."""

    def test_logout_from_logged_in(self, logged_in_manager):
        """Test logging out after a login."""
        session = logged_in_manager.logout()

        assert session == Session.logged_out()
        assert not logged_in_manager.is_authenticated

    def test_logout_is_idempotent(self, session_manager):
        """Test that logging out while logged out stays logged out."""
        session_manager.logout()
        session_manager.logout()

        assert session_manager.session == Session.logged_out()


class TestListeners:
    """Tests for transition notification."""

    def test_listener_sees_every_transition(self, session_manager):
        """Test that listeners get the new session after each transition."""
        seen = []
        session_manager.add_listener(seen.append)

        session_manager.attempt_login("admin", "admin123")
        with pytest.raises(InvalidCredentials):
            session_manager.attempt_login("wronguser", "wrongpass123")
        session_manager.logout()

        assert seen == [
            Session.logged_in("admin"),
            Session.logged_out(),
            Session.logged_out(),
        ]

    def test_failing_listener_does_not_block_transition(self, session_manager):
        """Test that a broken listener doesn't stop the state change."""
        def broken(session):
            raise RuntimeError("boom")

        session_manager.add_listener(broken)
        session_manager.attempt_login("admin", "admin123")

        assert session_manager.is_authenticated
