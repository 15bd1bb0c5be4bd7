"""Domain error types for the legislative news service.

Every error the service raises on purpose derives from AppError, which
carries the HTTP status the API layer renders it with.

Kinds:
    - ValidationError: bad input caught before the store or cache is touched (400)
    - NotFoundError: the requested entity does not exist (404)
    - ConflictError: a unique constraint rejected an insert (409)
    - DependencyError: PostgreSQL or Redis failed or is unreachable (503)

Services report a missing article as a None return. Only the HTTP layer
turns that into a NotFoundError.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class DependencyError(AppError):
    """Store or cache failure. Logged where it happens, never retried here."""

    status_code = 503
