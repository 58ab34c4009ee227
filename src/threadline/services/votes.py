"""Vote ledger: set-based vote tracking and score derivation.

The contract is "set the resulting state", not "toggle": re-applying the
same vote type leaves the ledger unchanged, and clients that want
toggle-to-remove pass ``"remove"`` explicitly.
"""

from __future__ import annotations

import logging
from typing import Final, Literal

from sqlalchemy.orm import Session

from threadline.core.errors import NotFoundError, ValidationError
from threadline.models import DOWNVOTE, UPVOTE, Comment, Post, VotableMixin

logger = logging.getLogger(__name__)

VoteType = Literal["upvote", "downvote", "remove"]
VOTE_TYPES: Final[tuple[str, ...]] = ("upvote", "downvote", "remove")
_DIRECTIONS: Final[dict[str, int]] = {"upvote": UPVOTE, "downvote": DOWNVOTE}


def validate_vote(voter_id: str | None, vote_type: str | None) -> None:
    """Reject a missing voter id or a vote type outside ``VOTE_TYPES``."""
    if not voter_id:
        raise ValidationError("Voter ID is required")
    if vote_type not in VOTE_TYPES:
        raise ValidationError("Invalid vote type")


def apply_vote(item: VotableMixin, voter_id: str | None, vote_type: str | None) -> VotableMixin:
    """Apply a vote transition to ``item`` in memory.

    Any previous vote by ``voter_id`` is dropped, the requested one (if any)
    recorded, and ``vote_score`` recomputed from the sets.

    Raises:
        ValidationError: If ``voter_id`` is missing or ``vote_type`` is illegal.
    """
    validate_vote(voter_id, vote_type)

    existing = item.find_vote(voter_id)
    direction = _DIRECTIONS.get(vote_type)
    if direction is None:
        if existing is not None:
            item.votes.remove(existing)  # type: ignore[attr-defined]
    elif existing is not None:
        existing.direction = direction
    else:
        item.votes.append(item.new_vote(voter_id, direction))  # type: ignore[attr-defined]

    item.vote_score = len(item.upvotes) - len(item.downvotes)  # type: ignore[attr-defined]
    return item


class VoteLedger:
    """Loads a post or comment, applies a vote and persists the result."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def vote_on_post(self, post_id: int, voter_id: str | None, vote_type: str | None) -> Post:
        validate_vote(voter_id, vote_type)
        post = self.session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return self._commit(post, voter_id, vote_type)

    def vote_on_comment(
        self, comment_id: int, voter_id: str | None, vote_type: str | None
    ) -> Comment:
        validate_vote(voter_id, vote_type)
        comment = self.session.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return self._commit(comment, voter_id, vote_type)

    def _commit(
        self, item: Post | Comment, voter_id: str | None, vote_type: str | None
    ) -> Post | Comment:
        apply_vote(item, voter_id, vote_type)
        self.session.commit()
        self.session.refresh(item)
        logger.info(
            "Applied %s on %s %s (score=%d)",
            vote_type,
            type(item).__name__.lower(),
            item.id,
            item.vote_score,
            extra={"item_id": item.id, "item_kind": type(item).__name__.lower()},
        )
        return item
