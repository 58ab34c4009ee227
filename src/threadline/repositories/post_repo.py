"""Data access helpers for working with posts."""
from __future__ import annotations

import math

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from threadline.models.post import Post

__all__ = ["PostPage", "PostRepository"]


class PostPage:
    """One page of posts plus the page count for the whole listing."""

    def __init__(self, posts: list[Post], total_pages: int, current_page: int) -> None:
        self.posts = posts
        self.total_pages = total_pages
        self.current_page = current_page


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list_page(self, *, page: int, limit: int, category: str | None = None) -> PostPage:
        """Return a page of posts ordered by score, newest first among equals.

        Args:
            page: 1-based page number.
            limit: Page size.
            category: Optional exact-match category filter.
        """
        stmt = select(Post)
        count_stmt = select(func.count()).select_from(Post)
        if category:
            stmt = stmt.where(Post.category == category)
            count_stmt = count_stmt.where(Post.category == category)

        stmt = (
            stmt.order_by(Post.vote_score.desc(), Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        posts = list(self.session.execute(stmt).unique().scalars())
        total = self.session.execute(count_stmt).scalar_one()
        return PostPage(posts, math.ceil(total / limit), page)

    def add(self, post: Post) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        """Remove a post permanently; its votes go with it."""
        self.session.delete(post)
        self.session.commit()
