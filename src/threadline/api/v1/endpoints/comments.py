# src/threadline/api/v1/endpoints/comments.py
"""Comment-related endpoints for the Threadline API."""

from fastapi import APIRouter, Query, status

from threadline.models import Comment
from threadline.schemas.comment import CommentCreate, CommentCreated, CommentResponse
from threadline.schemas.common import ErrorResponse, MessageResponse
from threadline.schemas.vote import VoteRequest
from threadline.services.content import ContentLifecycleManager
from threadline.services.threads import CommentTreeBuilder
from threadline.services.votes import VoteLedger

from ..dependencies import ActorDep, DeletionTokenDep, SessionDep

router = APIRouter(
    prefix="/comments",
    tags=["comments"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get("/post/{post_id}", response_model=list[CommentResponse])
async def list_post_comments(
    post_id: int,
    db: SessionDep,
    sort: str = Query("top", description="top, new or old"),
) -> list[Comment]:
    """List top-level comments of a post."""
    return CommentTreeBuilder(db).top_level_comments(post_id, sort)


@router.get("/{comment_id}/replies", response_model=list[CommentResponse])
async def list_replies(comment_id: int, db: SessionDep) -> list[Comment]:
    """List direct replies to a comment."""
    return CommentTreeBuilder(db).replies_of(comment_id)


@router.post("/", response_model=CommentCreated, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    actor: ActorDep,
    db: SessionDep,
) -> CommentCreated:
    """Create a comment on a post, optionally as a reply to another comment."""
    created = ContentLifecycleManager(db).create_comment(
        content=comment_data.content,
        post_id=comment_data.post_id,
        parent_comment_id=comment_data.parent_comment_id,
        actor=actor,
        client_anonymous_id=comment_data.anonymous_id,
    )
    return CommentCreated(
        comment=CommentResponse.model_validate(created.item),
        deletion_token=created.deletion_token,
    )


@router.patch("/{comment_id}/vote", response_model=CommentResponse)
async def vote_on_comment(comment_id: int, vote: VoteRequest, db: SessionDep) -> Comment:
    """Set the voter's resulting vote on a comment."""
    return VoteLedger(db).vote_on_comment(comment_id, vote.voter_id, vote.vote_type)


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    responses={status.HTTP_403_FORBIDDEN: {"model": ErrorResponse}},
)
async def delete_comment(
    comment_id: int,
    actor: ActorDep,
    deletion_token: DeletionTokenDep,
    db: SessionDep,
) -> MessageResponse:
    """Tombstone a comment; replies stay attached to it."""
    ContentLifecycleManager(db).delete_comment(comment_id, actor, deletion_token)
    return MessageResponse(message="Comment deleted successfully")
