"""Authorization gate for deleting posts and comments."""

from __future__ import annotations

from threadline.core.security import tokens_match
from threadline.models import Comment, Post
from threadline.services.identity import Actor, RegisteredActor


def can_delete(item: Post | Comment, actor: Actor, supplied_token: str | None) -> bool:
    """Decide whether ``actor`` may delete ``item``.

    Registered authors and admins may delete anything they own or moderate.
    Anonymous content is deletable by whoever presents its deletion token,
    whatever their own identity.
    """
    if isinstance(actor, RegisteredActor):
        if item.author_user_id is not None and actor.id == item.author_user_id:
            return True
        if actor.is_admin:
            return True

    if item.anonymous_id is not None:
        return tokens_match(supplied_token, item.deletion_token)
    return False
