# tests/test_threads.py
"""Tests for comment tree traversal."""

from datetime import UTC, datetime, timedelta

import pytest

from threadline.core.errors import ValidationError
from threadline.models import Comment
from threadline.services.content import ContentLifecycleManager
from threadline.services.identity import AnonymousActor
from threadline.services.threads import CommentTreeBuilder

BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture()
def add_comment(db_session, anon_post):
    def _add(minutes: int, score: int = 0, parent: int | None = None, post_id: int | None = None):
        comment = Comment(
            content=f"comment at +{minutes}m",
            post_id=post_id if post_id is not None else anon_post.id,
            parent_comment_id=parent,
            anonymous_id="anon",
            deletion_token="tok",
            vote_score=score,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _add


def test_top_level_excludes_replies_and_other_posts(db_session, anon_post, add_comment):
    root = add_comment(0)
    add_comment(1, parent=root.id)
    add_comment(2, post_id=anon_post.id + 100)

    comments = CommentTreeBuilder(db_session).top_level_comments(anon_post.id)
    assert [c.id for c in comments] == [root.id]


def test_sort_modes(db_session, anon_post, add_comment):
    first = add_comment(0, score=1)
    second = add_comment(5, score=7)
    third = add_comment(10, score=-2)
    tree = CommentTreeBuilder(db_session)

    top = tree.top_level_comments(anon_post.id, "top")
    new = tree.top_level_comments(anon_post.id, "new")
    old = tree.top_level_comments(anon_post.id, "old")

    assert [c.id for c in top] == [second.id, first.id, third.id]
    assert [c.id for c in new] == [third.id, second.id, first.id]
    assert [c.id for c in old] == [first.id, second.id, third.id]


def test_new_and_old_are_monotonic(db_session, anon_post):
    manager = ContentLifecycleManager(db_session)
    for n in range(5):
        manager.create_comment(
            content=f"c{n}",
            post_id=anon_post.id,
            parent_comment_id=None,
            actor=AnonymousActor(id="a"),
        )
    tree = CommentTreeBuilder(db_session)

    new = [c.created_at for c in tree.top_level_comments(anon_post.id, "new")]
    old = [c.created_at for c in tree.top_level_comments(anon_post.id, "old")]
    assert all(a >= b for a, b in zip(new, new[1:]))
    assert all(a <= b for a, b in zip(old, old[1:]))


def test_unknown_sort_mode(db_session, anon_post):
    with pytest.raises(ValidationError):
        CommentTreeBuilder(db_session).top_level_comments(anon_post.id, "hot")


def test_replies_ordered_by_score_then_age(db_session, add_comment):
    root = add_comment(0)
    late_high = add_comment(9, score=3, parent=root.id)
    early_low = add_comment(1, score=0, parent=root.id)
    late_low = add_comment(5, score=0, parent=root.id)
    add_comment(6, parent=late_high.id)

    replies = CommentTreeBuilder(db_session).replies_of(root.id)
    assert [c.id for c in replies] == [late_high.id, early_low.id, late_low.id]


def test_replies_of_leaf_is_empty(db_session, add_comment):
    leaf = add_comment(0)
    assert CommentTreeBuilder(db_session).replies_of(leaf.id) == []
