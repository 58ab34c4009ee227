"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import author_username


class CommentCreate(BaseModel):
    """Schema for creating a new comment."""

    content: str = Field(..., max_length=10000)
    post_id: int
    parent_comment_id: int | None = Field(None, description="Parent comment for nested replies")
    anonymous_id: str | None = None


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    post_id: int
    parent_comment_id: int | None
    content: str
    author_user_id: str | None
    author_username: str | None = None
    anonymous_id: str | None
    is_deleted: bool
    upvotes: list[str]
    downvotes: list[str]
    vote_score: int
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _resolve_author(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            extracted["author_username"] = author_username(data)
            data = extracted
        return data

    model_config = ConfigDict(from_attributes=True)


class CommentCreated(BaseModel):
    """Creation response; ``deletion_token`` is set only for anonymous comments."""

    comment: CommentResponse
    deletion_token: str | None = None
