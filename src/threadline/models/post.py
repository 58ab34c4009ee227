"""SQLAlchemy model for forum posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadline.db.session import Base
from threadline.db.time import utcnow
from threadline.models.user import User
from threadline.models.vote import PostVote, VotableMixin


class Post(VotableMixin, Base):
    """Top-level content item.

    Exactly one of ``author_user_id`` and ``anonymous_id`` is populated, and a
    deletion token exists only for anonymous posts. Posts are removed outright
    when deleted.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint(
            "(author_user_id IS NULL) <> (anonymous_id IS NULL)",
            name="ck_post_single_author",
        ),
        CheckConstraint(
            "(deletion_token IS NULL) = (anonymous_id IS NULL)",
            name="ck_post_deletion_token",
        ),
    )

    vote_model = PostVote

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    # Plain reference: a verified token may name a user with no row here.
    author_user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    anonymous_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Returned once to the anonymous creator, never serialized afterwards.
    deletion_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    vote_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    author: Mapped[User | None] = relationship(
        "User",
        primaryjoin="foreign(Post.author_user_id) == User.id",
        lazy="joined",
        viewonly=True,
    )
    votes: Mapped[list[PostVote]] = relationship(
        "PostVote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
