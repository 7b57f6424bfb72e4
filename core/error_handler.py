"""
Error Handler for the Blog Core

Provides the user-facing error hierarchy and centralized error handling with
categorization, logging, and the single current error message that the
rendering layer displays.
"""

import logging
import traceback
from enum import Enum
from typing import Optional, Callable
from dataclasses import dataclass


logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    AUTH = "auth"
    CONTENT = "content"
    STORAGE = "storage"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""
    category: ErrorCategory
    severity: ErrorSeverity
    operation: str
    user_message: str
    technical_details: str
    user: Optional[str] = None
    post_id: Optional[str] = None


# Custom Exception Classes

class BlogError(Exception):
    """
    Base exception for blog core errors.

    ``message`` is the exact text shown to the user.
    """

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN):
        super().__init__(message)
        self.message = message
        self.category = category


class ValidationError(BlogError):
    """Login form field validation errors."""

    def __init__(self, message: str, field: str):
        super().__init__(message, ErrorCategory.VALIDATION)
        self.field = field


class FieldRequired(ValidationError):
    """A required login field was left empty."""

    MESSAGES = {
        "username": "Username field is required!",
        "password": "Password field is required!",
    }

    def __init__(self, field: str):
        message = self.MESSAGES.get(field, f"{field.capitalize()} field is required!")
        super().__init__(message, field)


class FieldTooShort(ValidationError):
    """A login field is shorter than its minimum length."""

    MESSAGES = {
        "username": "Username field must be at least {minimum} characters",
        "password": "Password must be at least {minimum} characters long!",
    }

    def __init__(self, field: str, minimum: int):
        template = self.MESSAGES.get(
            field, f"{field.capitalize()} must be at least {{minimum}} characters"
        )
        super().__init__(template.format(minimum=minimum), field)
        self.minimum = minimum


class AuthError(BlogError):
    """Authentication and authorization errors."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.AUTH)


class InvalidCredentials(AuthError):
    """Well-formed credentials that don't match a known account."""

    def __init__(self):
        super().__init__("Invalid Credentials")


class Unauthorized(AuthError):
    """A write that requires a logged-in session was attempted without one."""

    def __init__(self):
        super().__init__("You must be logged in to create a post")


class ContentError(BlogError):
    """Post and comment store errors."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.CONTENT)


class EmptyField(ContentError):
    """A post title/content or comment text was empty."""

    def __init__(self, field: str):
        super().__init__(f"{field.capitalize()} field is required!")
        self.field = field


class NotFound(ContentError):
    """The requested post does not exist."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind.capitalize()} not found")
        self.kind = kind
        self.identifier = identifier


class StorageError(BlogError):
    """Storage operation errors."""

    def __init__(self, message: str = "Failed to save data. Please try again."):
        super().__init__(message, ErrorCategory.STORAGE)


class ErrorHandler:
    """
    Error handler for the blog core.

    Provides centralized error handling with:
    - Error categorization (validation, auth, content, storage)
    - Severity classification
    - The single current user-facing message
    - Detailed logging for debugging
    - Notification callbacks for the rendering layer

    Usage:
        error_handler = ErrorHandler()
        error_handler.set_notification_callback(view.show_error)

        try:
            session_manager.attempt_login(username, password)
        except BlogError as e:
            error_handler.handle_error(e, "login")
    """

    def __init__(self):
        """Initialize error handler."""
        self._notification_callback: Optional[Callable] = None
        self._current_message: Optional[str] = None

    def set_notification_callback(self, callback: Callable):
        """
        Set callback for displaying errors to the user.

        Args:
            callback: Function(title: str, content: str, severity: ErrorSeverity)
        """
        self._notification_callback = callback

    @property
    def current_message(self) -> Optional[str]:
        """Message of the last failed operation, None after a success."""
        return self._current_message

    def clear(self) -> None:
        """Clear the current message after a successful operation."""
        self._current_message = None

    def handle_error(
        self,
        error: Exception,
        context: str,
        user: Optional[str] = None,
        post_id: Optional[str] = None,
        show_notification: bool = True
    ) -> ErrorContext:
        """
        Handle an error with appropriate categorization and response.

        Args:
            error: The exception that occurred
            context: Description of the operation that failed
            user: Optional session user the error relates to
            post_id: Optional post ID the error relates to
            show_notification: Whether to notify the rendering layer (default: True)

        Returns:
            ErrorContext with categorized error information
        """
        if isinstance(error, BlogError):
            category = error.category
        else:
            category = self._categorize_error(error)

        severity = self._determine_severity(error, category)
        user_message = self._generate_user_message(error, context)
        technical_details = self._get_technical_details(error)

        error_context = ErrorContext(
            category=category,
            severity=severity,
            operation=context,
            user_message=user_message,
            technical_details=technical_details,
            user=user,
            post_id=post_id
        )

        self._current_message = user_message
        self._log_error(error_context)

        if show_notification and self._notification_callback:
            self._show_notification(error_context)

        return error_context

    def _categorize_error(self, error: Exception) -> ErrorCategory:
        """
        Categorize a non-blog error based on its type and message.

        Args:
            error: The exception to categorize

        Returns:
            ErrorCategory
        """
        error_type = type(error).__name__.lower()
        error_msg = str(error).lower()

        if any(keyword in error_type or keyword in error_msg for keyword in [
            'database', 'storage', 'disk', 'file', 'sqlite', 'integrity'
        ]):
            return ErrorCategory.STORAGE

        return ErrorCategory.UNKNOWN

    def _determine_severity(
        self,
        error: Exception,
        category: ErrorCategory
    ) -> ErrorSeverity:
        """
        Determine the severity of an error.

        Validation and auth outcomes are expected user mistakes; storage and
        unknown failures are not.
        """
        if category in (ErrorCategory.VALIDATION, ErrorCategory.AUTH):
            return ErrorSeverity.INFO

        if category == ErrorCategory.CONTENT:
            return ErrorSeverity.WARNING

        return ErrorSeverity.ERROR

    def _generate_user_message(self, error: Exception, context: str) -> str:
        """Blog errors keep their exact message; anything else gets a generic one."""
        if isinstance(error, BlogError):
            return error.message
        return f"An error occurred during {context}. Please try again."

    def _get_technical_details(self, error: Exception) -> str:
        """
        Get technical details for logging.

        Args:
            error: The exception

        Returns:
            Technical details string
        """
        details = [
            f"Exception Type: {type(error).__name__}",
            f"Message: {str(error)}",
            "Traceback:",
            traceback.format_exc()
        ]
        return "\n".join(details)

    def _log_error(self, error_context: ErrorContext):
        """
        Log error with appropriate level.

        Args:
            error_context: Error context information
        """
        log_message = (
            f"[{error_context.category.value.upper()}] "
            f"{error_context.operation}: {error_context.user_message}"
        )

        extra_info = []
        if error_context.user:
            extra_info.append(f"user={error_context.user}")
        if error_context.post_id:
            extra_info.append(f"post_id={error_context.post_id}")

        if extra_info:
            log_message += f" ({', '.join(extra_info)})"

        if error_context.severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
            logger.critical(f"Technical details:\n{error_context.technical_details}")
        elif error_context.severity == ErrorSeverity.ERROR:
            logger.error(log_message)
            logger.debug(f"Technical details:\n{error_context.technical_details}")
        elif error_context.severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

    def _show_notification(self, error_context: ErrorContext):
        """
        Pass the error on to the notification callback.

        Args:
            error_context: Error context information
        """
        try:
            title_map = {
                ErrorCategory.VALIDATION: "Invalid Input",
                ErrorCategory.AUTH: "Login Error",
                ErrorCategory.CONTENT: "Content Error",
                ErrorCategory.STORAGE: "Storage Error",
                ErrorCategory.UNKNOWN: "Error"
            }

            title = title_map.get(error_context.category, "Error")

            self._notification_callback(
                title,
                error_context.user_message,
                error_context.severity
            )

        except Exception as e:
            logger.error(f"Failed to show notification: {e}")
