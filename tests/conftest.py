"""Shared fixtures for the blog core tests."""

import pytest

from core.credentials import CredentialStore
from core.db_manager import DBManager
from logic.blog_context import BlogContext
from logic.content_store import ContentStore
from logic.session_manager import SessionManager


@pytest.fixture(scope="session")
def credential_store():
    """Store holding the reference account (hashing is slow, so share it)."""
    return CredentialStore([{"username": "admin", "password": "admin123"}])


@pytest.fixture
def session_manager(credential_store):
    """Create a logged-out SessionManager."""
    return SessionManager(credential_store)


@pytest.fixture
def logged_in_manager(session_manager):
    """Create a SessionManager logged in as admin."""
    session_manager.attempt_login("admin", "admin123")
    return session_manager


@pytest.fixture
def content_store():
    """Create an empty in-memory ContentStore."""
    return ContentStore()


@pytest.fixture
def db_manager(tmp_path):
    """Create and initialize a DBManager on a temporary database."""
    manager = DBManager(tmp_path / "test.db")
    manager.initialize_database()
    return manager


@pytest.fixture
def context(session_manager, content_store):
    """Create a BlogContext over fresh components."""
    return BlogContext(session_manager, content_store)
