"""Content lifecycle: creation, listing and deletion of posts and comments."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from threadline.core.errors import ForbiddenError, NotFoundError, ValidationError
from threadline.core.security import new_anonymous_id, new_deletion_token
from threadline.core.settings import settings
from threadline.models import Comment, Post
from threadline.repositories import CommentRepository, PostRepository
from threadline.repositories.post_repo import PostPage
from threadline.services.authorization import can_delete
from threadline.services.identity import Actor, RegisteredActor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorFields:
    """Author columns for a new item."""

    author_user_id: str | None
    anonymous_id: str | None
    deletion_token: str | None


@dataclass(frozen=True)
class Created:
    """A freshly created item and, for anonymous authors, its deletion token.

    This is the only place the token is ever handed back to a caller.
    """

    item: Post | Comment
    deletion_token: str | None = None


class ContentLifecycleManager:
    """Creates, lists and deletes posts and comments."""

    def __init__(
        self,
        session: Session,
        *,
        mint_anonymous_id: Callable[[], str] = new_anonymous_id,
        mint_deletion_token: Callable[[], str] = new_deletion_token,
        tombstone_text: str | None = None,
    ) -> None:
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)
        self.mint_anonymous_id = mint_anonymous_id
        self.mint_deletion_token = mint_deletion_token
        self.tombstone_text = tombstone_text or settings.tombstone_text

    def author_fields(self, actor: Actor, client_anonymous_id: str | None = None) -> AuthorFields:
        """Resolve the author columns for ``actor``.

        Registered actors own content by user id. Anonymous actors own it by
        their anonymous id (the actor's, else the client-supplied one, else a
        freshly minted one) and receive a new deletion token.
        """
        if isinstance(actor, RegisteredActor):
            fields = AuthorFields(actor.id, None, None)
        else:
            anonymous_id = actor.id or client_anonymous_id or self.mint_anonymous_id()
            fields = AuthorFields(None, anonymous_id, self.mint_deletion_token())
        _check_authorship(fields)
        return fields

    def create_post(
        self,
        *,
        title: str | None,
        content: str | None,
        category: str | None,
        actor: Actor,
        client_anonymous_id: str | None = None,
    ) -> Created:
        title = _require(title, "title")
        content = _require(content, "content")
        category = _require(category, "category")
        fields = self.author_fields(actor, client_anonymous_id)

        post = self.posts.add(
            Post(
                title=title,
                content=content,
                category=category,
                author_user_id=fields.author_user_id,
                anonymous_id=fields.anonymous_id,
                deletion_token=fields.deletion_token,
                vote_score=0,
            )
        )
        logger.info(
            "Created post %s (%s author)",
            post.id,
            actor.kind,
            extra={"item_id": post.id, "item_kind": "post", "actor_kind": actor.kind},
        )
        return Created(post, fields.deletion_token)

    def create_comment(
        self,
        *,
        content: str | None,
        post_id: int | None,
        parent_comment_id: int | None,
        actor: Actor,
        client_anonymous_id: str | None = None,
    ) -> Created:
        """Create a comment on ``post_id``.

        ``parent_comment_id`` is stored as given; ``None`` attaches the comment
        directly to the post.

        Raises:
            NotFoundError: If the post does not exist.
        """
        if post_id is None:
            raise ValidationError("postId is required")
        if self.posts.get_by_id(post_id) is None:
            raise NotFoundError("Post not found")
        content = _require(content, "content")
        fields = self.author_fields(actor, client_anonymous_id)

        comment = self.comments.add(
            Comment(
                content=content,
                post_id=post_id,
                parent_comment_id=parent_comment_id,
                author_user_id=fields.author_user_id,
                anonymous_id=fields.anonymous_id,
                deletion_token=fields.deletion_token,
                is_deleted=False,
                vote_score=0,
            )
        )
        logger.info(
            "Created comment %s on post %s (%s author)",
            comment.id,
            post_id,
            actor.kind,
            extra={"item_id": comment.id, "item_kind": "comment", "actor_kind": actor.kind},
        )
        return Created(comment, fields.deletion_token)

    def get_post(self, post_id: int) -> Post:
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def list_posts(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        category: str | None = None,
    ) -> PostPage:
        limit = limit or settings.default_page_size
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")
        return self.posts.list_page(
            page=page,
            limit=min(limit, settings.max_page_size),
            category=category,
        )

    def delete_post(self, post_id: int, actor: Actor, supplied_token: str | None = None) -> None:
        """Remove a post permanently.

        Its comments are left in place and stay queryable by post id.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If ``actor`` may not delete it.
        """
        post = self.get_post(post_id)
        if not can_delete(post, actor, supplied_token):
            _deny("post", post_id, actor)
        self.posts.delete(post)
        logger.info(
            "Deleted post %s",
            post_id,
            extra={"item_id": post_id, "item_kind": "post", "actor_kind": actor.kind},
        )

    def delete_comment(
        self, comment_id: int, actor: Actor, supplied_token: str | None = None
    ) -> Comment:
        """Tombstone a comment, keeping its id and parent link.

        Raises:
            NotFoundError: If the comment does not exist.
            ForbiddenError: If ``actor`` may not delete it.
        """
        comment = self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if not can_delete(comment, actor, supplied_token):
            _deny("comment", comment_id, actor)

        comment.is_deleted = True
        comment.content = self.tombstone_text
        self.comments.save(comment)
        logger.info(
            "Tombstoned comment %s",
            comment_id,
            extra={"item_id": comment_id, "item_kind": "comment", "actor_kind": actor.kind},
        )
        return comment


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


def _check_authorship(fields: AuthorFields) -> None:
    """Exactly one of user id and anonymous id; a token only for anonymous authors."""
    if (fields.author_user_id is None) == (fields.anonymous_id is None):
        raise ValidationError(
            "Content must have exactly one of a registered author or an anonymous id"
        )
    if (fields.deletion_token is None) != (fields.anonymous_id is None):
        raise ValidationError("Deletion token must accompany anonymous authorship only")


def _deny(kind: str, item_id: int, actor: Actor) -> None:
    logger.warning(
        "Denied delete of %s %s",
        kind,
        item_id,
        extra={"item_id": item_id, "item_kind": kind, "actor_kind": actor.kind},
    )
    raise ForbiddenError(f"Not authorized to delete this {kind}")
