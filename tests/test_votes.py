# tests/test_votes.py
"""Tests for the vote ledger and the vote endpoints."""

import itertools

import pytest
from fastapi import status

from threadline.core.errors import NotFoundError, ValidationError
from threadline.models import Comment, Post
from threadline.services.votes import VoteLedger, apply_vote


def _post() -> Post:
    return Post(
        title="t",
        content="c",
        category="general",
        anonymous_id="author",
        deletion_token="tok",
        vote_score=0,
        votes=[],
    )


class TestApplyVote:
    """In-memory vote transitions."""

    def test_upvote_adds_voter(self):
        post = apply_vote(_post(), "v1", "upvote")
        assert post.upvotes == ["v1"]
        assert post.downvotes == []
        assert post.vote_score == 1

    def test_reapplying_upvote_is_idempotent(self):
        post = _post()
        apply_vote(post, "v1", "upvote")
        apply_vote(post, "v1", "upvote")
        assert post.upvotes == ["v1"]
        assert post.vote_score == 1

    def test_switching_direction_moves_voter(self):
        post = _post()
        apply_vote(post, "v1", "upvote")
        apply_vote(post, "v1", "downvote")
        assert post.upvotes == []
        assert post.downvotes == ["v1"]
        assert post.vote_score == -1

    def test_remove_clears_vote(self):
        post = _post()
        apply_vote(post, "v1", "downvote")
        apply_vote(post, "v1", "remove")
        assert post.upvotes == [] and post.downvotes == []
        assert post.vote_score == 0

    def test_remove_without_prior_vote_is_noop(self):
        post = apply_vote(_post(), "v1", "remove")
        assert post.votes == []
        assert post.vote_score == 0

    def test_missing_voter_rejected(self):
        with pytest.raises(ValidationError):
            apply_vote(_post(), None, "upvote")
        with pytest.raises(ValidationError):
            apply_vote(_post(), "", "upvote")

    @pytest.mark.parametrize("vote_type", [None, "toggle", "UPVOTE", ""])
    def test_illegal_vote_type_rejected(self, vote_type):
        with pytest.raises(ValidationError):
            apply_vote(_post(), "v1", vote_type)

    def test_score_and_exclusivity_hold_for_all_sequences(self):
        voters = ["a", "b", "c"]
        types = ["upvote", "downvote", "remove"]
        steps = list(itertools.product(voters, types))
        for sequence in itertools.product(steps, repeat=3):
            post = _post()
            for voter, vote_type in sequence:
                apply_vote(post, voter, vote_type)
            assert post.vote_score == len(post.upvotes) - len(post.downvotes)
            assert not set(post.upvotes) & set(post.downvotes)
            assert len(post.votes) == len({vote.voter_id for vote in post.votes})


class TestVoteLedger:
    """Persisted vote transitions."""

    def test_vote_on_missing_post(self, db_session):
        with pytest.raises(NotFoundError):
            VoteLedger(db_session).vote_on_post(9999, "v1", "upvote")

    def test_validation_precedes_lookup(self, db_session):
        with pytest.raises(ValidationError):
            VoteLedger(db_session).vote_on_post(9999, None, "upvote")

    def test_votes_persist(self, db_session, anon_post):
        ledger = VoteLedger(db_session)
        ledger.vote_on_post(anon_post.id, "v1", "upvote")
        ledger.vote_on_post(anon_post.id, "v2", "upvote")
        ledger.vote_on_post(anon_post.id, "v3", "downvote")

        db_session.expire_all()
        post = db_session.get(Post, anon_post.id)
        assert post.upvotes == ["v1", "v2"]
        assert post.downvotes == ["v3"]
        assert post.vote_score == 1

    def test_comment_votes_persist(self, db_session, anon_post):
        comment = Comment(
            content="c",
            post_id=anon_post.id,
            anonymous_id="x",
            deletion_token="y",
            vote_score=0,
        )
        db_session.add(comment)
        db_session.commit()

        VoteLedger(db_session).vote_on_comment(comment.id, "v1", "downvote")
        db_session.expire_all()
        assert db_session.get(Comment, comment.id).vote_score == -1

    def test_vote_on_missing_comment(self, db_session):
        with pytest.raises(NotFoundError):
            VoteLedger(db_session).vote_on_comment(9999, "v1", "upvote")


def test_vote_endpoint_returns_updated_post(client, anon_post) -> None:
    """Voting returns the post with its recomputed score."""
    response = client.patch(
        f"/api/v1/posts/{anon_post.id}/vote",
        json={"vote_type": "upvote", "voter_id": "voter-1"},
    )
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["vote_score"] == 1
    assert body["upvotes"] == ["voter-1"]
    assert "deletion_token" not in body


def test_vote_endpoint_requires_voter(client, anon_post) -> None:
    response = client.patch(f"/api/v1/posts/{anon_post.id}/vote", json={"vote_type": "upvote"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["kind"] == "validation"


def test_vote_endpoint_rejects_unknown_type(client, anon_post) -> None:
    response = client.patch(
        f"/api/v1/posts/{anon_post.id}/vote",
        json={"vote_type": "sideways", "voter_id": "voter-1"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_vote_endpoint_missing_post(client) -> None:
    response = client.patch(
        "/api/v1/posts/99999/vote",
        json={"vote_type": "upvote", "voter_id": "voter-1"},
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"]["kind"] == "not_found"


def test_registered_user_switches_comment_vote(client, auth_token, test_user, anon_post) -> None:
    """Upvote then downvote leaves the voter in downvotes only, two points lower."""
    created = client.post(
        "/api/v1/comments/",
        json={"content": "first", "post_id": anon_post.id},
        headers={"X-Anonymous-Id": "commenter"},
    ).json()
    comment_id = created["comment"]["id"]

    up = client.patch(
        f"/api/v1/comments/{comment_id}/vote",
        json={"vote_type": "upvote", "voter_id": test_user.id},
        headers=auth_token,
    ).json()
    down = client.patch(
        f"/api/v1/comments/{comment_id}/vote",
        json={"vote_type": "downvote", "voter_id": test_user.id},
        headers=auth_token,
    ).json()

    assert down["upvotes"] == []
    assert down["downvotes"] == [test_user.id]
    assert down["vote_score"] == up["vote_score"] - 2
