from __future__ import annotations


class DomainError(Exception):
    """Base for errors raised by domain services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    pass


class ForbiddenError(DomainError):
    pass


class ValidationError(DomainError):
    pass


class MalformedFilterError(ValidationError):
    pass


class ConflictError(DomainError):
    pass


class InfrastructureError(DomainError):
    """Storage or network fault. Not attributable to the caller's input."""


class AuthenticationError(DomainError):
    """No caller identity on the request."""
