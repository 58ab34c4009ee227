"""Models capturing voting interactions on posts and comments."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadline.db.session import Base

UPVOTE = 1
DOWNVOTE = -1


class PostVote(Base):
    """Per-voter vote on a post.

    The composite primary key keeps a voter in at most one of the upvote and
    downvote sets of an item.
    """

    __tablename__ = "post_vote"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_post_vote_direction"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Registered user id or client-supplied anonymous id.
    voter_id: Mapped[str] = mapped_column(Text, primary_key=True)
    # 1 = upvote, -1 = downvote.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)


class CommentVote(Base):
    """Per-voter vote on a comment."""

    __tablename__ = "comment_vote"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_comment_vote_direction"),
    )

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[str] = mapped_column(Text, primary_key=True)
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)


class VotableMixin:
    """Derived vote views shared by posts and comments.

    Subclasses provide a ``votes`` relationship and name their vote row class
    in ``vote_model``.
    """

    @property
    def upvotes(self) -> list[str]:
        """Voter ids currently upvoting this item."""
        return sorted(vote.voter_id for vote in self.votes if vote.direction == UPVOTE)

    @property
    def downvotes(self) -> list[str]:
        """Voter ids currently downvoting this item."""
        return sorted(vote.voter_id for vote in self.votes if vote.direction == DOWNVOTE)

    def find_vote(self, voter_id: str) -> PostVote | CommentVote | None:
        """Return the active vote cast by ``voter_id``, if any."""
        for vote in self.votes:
            if vote.voter_id == voter_id:
                return vote
        return None

    def new_vote(self, voter_id: str, direction: int) -> PostVote | CommentVote:
        """Build a vote row of the right type for this item."""
        return self.vote_model(voter_id=voter_id, direction=direction)
