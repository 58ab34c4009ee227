"""SQLAlchemy models for the Threadline application."""

from .comment import Comment
from .post import Post
from .user import User
from .vote import DOWNVOTE, UPVOTE, CommentVote, PostVote, VotableMixin

__all__ = [
    "Comment",
    "Post",
    "User",
    "CommentVote", "PostVote", "VotableMixin",
    "UPVOTE", "DOWNVOTE",
]
