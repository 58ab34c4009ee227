"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentCreated, CommentResponse
from .common import ErrorResponse, MessageResponse
from .post import PostCreate, PostCreated, PostListResponse, PostResponse
from .user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from .vote import VoteRequest

__all__ = [
    "CommentCreate", "CommentCreated", "CommentResponse",
    "ErrorResponse", "MessageResponse",
    "PostCreate", "PostCreated", "PostListResponse", "PostResponse",
    "LoginRequest", "LoginResponse", "RegisterRequest", "UserResponse",
    "VoteRequest",
]
