"""Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


class ErrorBody(BaseModel):
    kind: str
    message: str


class ErrorResponse(BaseModel):
    """Envelope used for every error response."""

    error: ErrorBody


def author_username(item: object) -> str | None:
    """Display name of a registered author, resolved through the relationship."""
    author = getattr(item, "author", None)
    return getattr(author, "username", None)
