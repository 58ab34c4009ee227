"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import author_username


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., max_length=300, description="Post title")
    content: str = Field(..., max_length=40000, description="Post body")
    category: str = Field(..., max_length=100, description="Category label")
    anonymous_id: str | None = Field(
        None,
        description="Client-persisted anonymous identifier, ignored for registered users",
    )


class PostResponse(BaseModel):
    """Schema for post information returned by the API.

    The deletion token is never part of this schema.
    """

    id: int
    title: str
    content: str
    category: str
    author_user_id: str | None
    author_username: str | None = None
    anonymous_id: str | None
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


class PostCreated(BaseModel):
    """Creation response; ``deletion_token`` is set only for anonymous posts."""

    post: PostResponse
    deletion_token: str | None = None


class PostListResponse(BaseModel):
    """One page of posts."""

    posts: list[PostResponse]
    total_pages: int
    current_page: int
