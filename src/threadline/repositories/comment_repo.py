"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from threadline.models.comment import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, comment_id: int) -> Comment | None:
        """Return a comment by identifier, tombstoned or not."""
        return self.session.get(Comment, comment_id)

    def list_top_level(self, post_id: int, order_by: tuple) -> list[Comment]:
        """Return the comments attached directly to a post."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id, Comment.parent_comment_id.is_(None))
            .order_by(*order_by)
        )
        return list(self.session.execute(stmt).unique().scalars())

    def list_replies(self, comment_id: int) -> list[Comment]:
        """Return direct children, best-scored first, oldest first among equals."""
        stmt = (
            select(Comment)
            .where(Comment.parent_comment_id == comment_id)
            .order_by(Comment.vote_score.desc(), Comment.created_at.asc(), Comment.id.asc())
        )
        return list(self.session.execute(stmt).unique().scalars())

    def add(self, comment: Comment) -> Comment:
        """Insert a new comment and return the persisted ORM instance."""
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(comment)
        return comment

    def save(self, comment: Comment) -> Comment:
        """Persist in-place changes to a comment."""
        self.session.commit()
        self.session.refresh(comment)
        return comment
