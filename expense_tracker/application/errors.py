"""Errors raised by use cases and translated to HTTP responses by the API layer.

They subclass ``ValueError`` so existing ``except ValueError`` handlers keep
catching them.
"""


class ApplicationError(ValueError):
    """Base class for expected business rule failures."""


class ValidationError(ApplicationError):
    """Input is malformed or refers to something that cannot be used."""


class NotFoundError(ApplicationError):
    """A referenced record does not exist or is not visible to the caller."""


class ConflictError(ApplicationError):
    """The change would violate a uniqueness rule."""


class PermissionDeniedError(ApplicationError):
    """The caller is authenticated but not allowed to perform the action."""


__all__ = [
    "ApplicationError",
    "ConflictError",
    "NotFoundError",
    "PermissionDeniedError",
    "ValidationError",
]
