"""Comment tree builder.

Threads are never materialized: consumers fetch the top level of a post and
then expand one level of replies at a time.
"""

from __future__ import annotations

from typing import Final, Literal

from sqlalchemy.orm import Session

from threadline.core.errors import ValidationError
from threadline.models import Comment
from threadline.repositories import CommentRepository

SortMode = Literal["top", "new", "old"]

SORT_ORDERS: Final[dict[str, tuple]] = {
    "top": (Comment.vote_score.desc(), Comment.id.asc()),
    "new": (Comment.created_at.desc(), Comment.id.desc()),
    "old": (Comment.created_at.asc(), Comment.id.asc()),
}


class CommentTreeBuilder:
    """Read-only access to one level of a comment forest."""

    def __init__(self, session: Session) -> None:
        self.comments = CommentRepository(session)

    def top_level_comments(self, post_id: int, sort: str = "top") -> list[Comment]:
        """Return comments attached directly to ``post_id``.

        ``top`` orders by score descending, ``new`` by creation time
        descending and ``old`` by creation time ascending.

        Raises:
            ValidationError: If ``sort`` is not a known mode.
        """
        order_by = SORT_ORDERS.get(sort)
        if order_by is None:
            raise ValidationError(f"Invalid sort mode: {sort!r}")
        return self.comments.list_top_level(post_id, order_by)

    def replies_of(self, comment_id: int) -> list[Comment]:
        """Return direct replies to ``comment_id``, tombstones included."""
        return self.comments.list_replies(comment_id)
