"""Data access helpers for posts and comments."""

from .comment_repo import CommentRepository
from .post_repo import PostRepository

__all__ = ["CommentRepository", "PostRepository"]
