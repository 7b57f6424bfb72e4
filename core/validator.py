"""
Login form validation.

Checks that submitted fields are well-formed, independent of whether the
credentials are correct. Rules run in list order and the first failing rule
is the single reported error.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from core.error_handler import FieldRequired, FieldTooShort, ValidationError


class RuleKind(Enum):
    """Kinds of field rule."""
    REQUIRED = "required"
    MIN_LENGTH = "min_length"


@dataclass(frozen=True)
class Credentials:
    """A normalized username/password pair ready for the credential check."""
    username: str
    password: str


@dataclass(frozen=True)
class FieldRule:
    """
    One check against one login field.

    Attributes:
        field: "username" or "password"
        kind: What the rule checks
        minimum: Minimum length for MIN_LENGTH rules
    """
    field: str
    kind: RuleKind
    minimum: int = 0

    def check(self, value: str) -> Optional[ValidationError]:
        """Return the error this rule reports for ``value``, or None."""
        if self.kind == RuleKind.REQUIRED:
            if not value:
                return FieldRequired(self.field)
        elif self.kind == RuleKind.MIN_LENGTH:
            if len(value) < self.minimum:
                return FieldTooShort(self.field, self.minimum)
        return None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a login form."""
    error: Optional[ValidationError] = None
    credentials: Optional[Credentials] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


def login_rules(username_min_length: int = 3, password_min_length: int = 8) -> tuple:
    """
    Build the ordered login rule list.

    Username rules come before any password rule.
    """
    return (
        FieldRule("username", RuleKind.REQUIRED),
        FieldRule("username", RuleKind.MIN_LENGTH, username_min_length),
        FieldRule("password", RuleKind.REQUIRED),
        FieldRule("password", RuleKind.MIN_LENGTH, password_min_length),
    )


DEFAULT_LOGIN_RULES = login_rules()


def normalize(username: Optional[str], password: Optional[str]) -> Credentials:
    """Treat missing fields as empty; both values are otherwise kept verbatim."""
    return Credentials(
        username=username or "",
        password=password or "",
    )


def validate_login(
    username: Optional[str],
    password: Optional[str],
    rules: Sequence[FieldRule] = DEFAULT_LOGIN_RULES
) -> ValidationResult:
    """
    Validate login form fields.

    Args:
        username: Submitted username (None is treated as empty)
        password: Submitted password (None is treated as empty)
        rules: Ordered rules to apply

    Returns:
        ValidationResult carrying either the first failing rule's error or the
        normalized credentials
    """
    credentials = normalize(username, password)

    for rule in rules:
        error = rule.check(getattr(credentials, rule.field))
        if error is not None:
            return ValidationResult(error=error)

    return ValidationResult(credentials=credentials)
