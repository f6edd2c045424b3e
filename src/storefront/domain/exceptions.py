"""Domain-level exceptions.

All storefront errors are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """User input or a business rule failed validation.

    ``field_errors`` maps a form field name to its message when the
    failure can be pinned to individual fields.
    """

    def __init__(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.field_errors = dict(field_errors or {})


class InvalidTransitionError(DomainException):
    """The checkout step machine was asked to make a move it does not allow."""


class ServiceError(DomainException):
    """A call to the remote backend failed.

    ``message`` is the server's own explanation when it sent one.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ServiceError):
    """The backend rejected the stored credentials (HTTP 401)."""
