"""Tests for the error hierarchy and ErrorHandler."""

import pytest

from core.error_handler import (
    BlogError,
    EmptyField,
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    FieldRequired,
    FieldTooShort,
    InvalidCredentials,
    NotFound,
    StorageError,
    Unauthorized,
)


class TestMessages:
    """Each error kind maps to one fixed message."""

    @pytest.mark.parametrize("error,message", [
        (FieldRequired("username"), "Username field is required!"),
        (FieldRequired("password"), "Password field is required!"),
        (FieldTooShort("username", 3), "Username field must be at least 3 characters"),
        (FieldTooShort("password", 8), "Password must be at least 8 characters long!"),
        (InvalidCredentials(), "Invalid Credentials"),
        (Unauthorized(), "You must be logged in to create a post"),
        (EmptyField("title"), "Title field is required!"),
        (EmptyField("text"), "Text field is required!"),
        (NotFound("post", "abc"), "Post not found"),
        (StorageError(), "Failed to save data. Please try again."),
    ])
    def test_message(self, error, message):
        """Test the exact user-facing text."""
        assert error.message == message
        assert str(error) == message

    @pytest.mark.parametrize("error,category", [
        (FieldRequired("username"), ErrorCategory.VALIDATION),
        (InvalidCredentials(), ErrorCategory.AUTH),
        (Unauthorized(), ErrorCategory.AUTH),
        (EmptyField("content"), ErrorCategory.CONTENT),
        (NotFound("post", "abc"), ErrorCategory.CONTENT),
        (StorageError(), ErrorCategory.STORAGE),
    ])
    def test_category(self, error, category):
        """Test that each error carries its category."""
        assert isinstance(error, BlogError)
        assert error.category == category


class TestErrorHandler:
    """Tests for ErrorHandler."""

    def test_blog_error_message_is_verbatim(self):
        """Test that the current message is the error's own text."""
        handler = ErrorHandler()
        context = handler.handle_error(InvalidCredentials(), "login", user="admin")

        assert context.user_message == "Invalid Credentials"
        assert context.category == ErrorCategory.AUTH
        assert context.severity == ErrorSeverity.INFO
        assert context.user == "admin"
        assert handler.current_message == "Invalid Credentials"

    def test_unknown_error_gets_generic_message(self):
        """Test the message for errors outside the hierarchy."""
        handler = ErrorHandler()
        context = handler.handle_error(RuntimeError("boom"), "create post")

        assert context.user_message == "An error occurred during create post. Please try again."
        assert context.category == ErrorCategory.UNKNOWN
        assert context.severity == ErrorSeverity.ERROR

    def test_storage_keywords(self):
        """Test that database-looking errors are filed under storage."""
        handler = ErrorHandler()
        context = handler.handle_error(RuntimeError("sqlite database is locked"), "save")
        assert context.category == ErrorCategory.STORAGE

    def test_clear(self):
        """Test that a success clears the current message."""
        handler = ErrorHandler()
        handler.handle_error(Unauthorized(), "create post")
        handler.clear()
        assert handler.current_message is None

    def test_notification_callback(self):
        """Test that the callback receives title, message and severity."""
        received = []
        handler = ErrorHandler()
        handler.set_notification_callback(lambda *args: received.append(args))

        handler.handle_error(NotFound("post", "abc"), "view post", post_id="abc")
        handler.handle_error(NotFound("post", "abc"), "view post", show_notification=False)

        assert received == [("Content Error", "Post not found", ErrorSeverity.WARNING)]

    def test_broken_callback_is_contained(self):
        """Test that a failing callback doesn't escape handle_error."""
        def broken(*args):
            raise RuntimeError("display gone")

        handler = ErrorHandler()
        handler.set_notification_callback(broken)
        handler.handle_error(Unauthorized(), "create post")

        assert handler.current_message == "You must be logged in to create a post"
