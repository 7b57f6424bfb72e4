"""
Application Logic Layer for the blog core

This module provides the session state machine, the content store, the
capability view derived from the session, and the context object that ties
them together for one client.
"""

from logic.session_manager import Session, SessionManager
from logic.content_store import ContentStore
from logic.authorization_view import Capabilities, UIAuthorizationView, capabilities_for
from logic.blog_context import BlogContext

__all__ = [
    'Session',
    'SessionManager',
    'ContentStore',
    'Capabilities',
    'UIAuthorizationView',
    'capabilities_for',
    'BlogContext',
]
