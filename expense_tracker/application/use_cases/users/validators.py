"""Common validation helpers for user use cases."""

import re

from sqlalchemy.exc import IntegrityError

from expense_tracker.application.errors import ConflictError, ValidationError

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,50}$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def normalize_username(username: str) -> str:
    """Return the trimmed username or raise ``ValidationError``."""

    normalized = username.strip()
    if not _USERNAME_PATTERN.match(normalized):
        raise ValidationError(
            "username must be 3-50 characters of letters, digits, '.', '_' or '-'"
        )
    return normalized


def normalize_currency(currency: str) -> str:
    normalized = currency.strip().upper()
    if not _CURRENCY_PATTERN.match(normalized):
        raise ValidationError("currency must be a three letter ISO 4217 code")
    return normalized


MIN_PASSWORD_LENGTH = 5


def ensure_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return password


def conflict_from_integrity_error(exc: IntegrityError) -> ConflictError:
    """Translate a unique constraint violation on ``users`` into a ``ConflictError``."""

    if "email" in str(exc.orig).lower():
        return ConflictError("Email already exists")
    return ConflictError("Username already exists")
