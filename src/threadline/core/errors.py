"""Domain error taxonomy.

Every error raised by the services carries a stable ``kind`` so that API
clients can branch on the category instead of the message text.
"""

from __future__ import annotations

from fastapi import status


class ForumError(Exception):
    """Base class for domain errors raised by the forum services."""

    kind = "internal"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, dict[str, str]]:
        """Return the JSON body rendered for this error."""
        return {"error": {"kind": self.kind, "message": self.message}}


class ValidationError(ForumError):
    """A required field is missing or holds an illegal value."""

    kind = "validation"
    http_status = status.HTTP_400_BAD_REQUEST


class NotFoundError(ForumError):
    """The referenced post or comment does not exist."""

    kind = "not_found"
    http_status = status.HTTP_404_NOT_FOUND


class ForbiddenError(ForumError):
    """The authorization gate denied a mutation."""

    kind = "forbidden"
    http_status = status.HTTP_403_FORBIDDEN


class VerificationFailure(ForumError):
    """A credential token is expired, malformed or carries a bad signature."""

    kind = "unauthorized"
    http_status = status.HTTP_401_UNAUTHORIZED
