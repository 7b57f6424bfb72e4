"""
Core module for the blog core.

This module contains the leaf components:
- Login field validation
- Credential verification
- Error hierarchy and handling
- Post/comment storage
"""

__version__ = "0.1.0"

from core.validator import Credentials, FieldRule, RuleKind, ValidationResult, validate_login
from core.credentials import CredentialStore
from core.error_handler import (
    BlogError,
    ValidationError,
    FieldRequired,
    FieldTooShort,
    InvalidCredentials,
    Unauthorized,
    EmptyField,
    NotFound,
    StorageError,
    ErrorHandler,
)

__all__ = [
    'Credentials',
    'FieldRule',
    'RuleKind',
    'ValidationResult',
    'validate_login',
    'CredentialStore',
    'BlogError',
    'ValidationError',
    'FieldRequired',
    'FieldTooShort',
    'InvalidCredentials',
    'Unauthorized',
    'EmptyField',
    'NotFound',
    'StorageError',
    'ErrorHandler',
]
