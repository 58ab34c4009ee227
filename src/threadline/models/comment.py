"""SQLAlchemy model for threaded comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadline.db.session import Base
from threadline.db.time import utcnow
from threadline.models.user import User
from threadline.models.vote import CommentVote, VotableMixin


class Comment(VotableMixin, Base):
    """Reply attached to a post, optionally nested under another comment.

    Comments are never removed; deletion tombstones them so that replies stay
    attached to their parent.
    """

    __tablename__ = "comment"
    __table_args__ = (
        CheckConstraint(
            "(author_user_id IS NULL) <> (anonymous_id IS NULL)",
            name="ck_comment_single_author",
        ),
        CheckConstraint(
            "(deletion_token IS NULL) = (anonymous_id IS NULL)",
            name="ck_comment_deletion_token",
        ),
    )

    vote_model = CommentVote

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # No foreign keys on the thread columns: comments outlive their post and a
    # parent id is stored as given.
    post_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    parent_comment_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Plain reference: a verified token may name a user with no row here.
    author_user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    anonymous_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    deletion_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    vote_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    author: Mapped[User | None] = relationship(
        "User",
        primaryjoin="foreign(Comment.author_user_id) == User.id",
        lazy="joined",
        viewonly=True,
    )
    votes: Mapped[list[CommentVote]] = relationship(
        "CommentVote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
