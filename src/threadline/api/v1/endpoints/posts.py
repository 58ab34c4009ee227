# src/threadline/api/v1/endpoints/posts.py
"""Post-related endpoints for the Threadline API."""

from fastapi import APIRouter, Query, status

from threadline.models import Post
from threadline.schemas.common import ErrorResponse, MessageResponse
from threadline.schemas.post import PostCreate, PostCreated, PostListResponse, PostResponse
from threadline.schemas.vote import VoteRequest
from threadline.services.content import ContentLifecycleManager
from threadline.services.votes import VoteLedger

from ..dependencies import ActorDep, DeletionTokenDep, SessionDep

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get("/", response_model=PostListResponse)
async def list_posts(
    db: SessionDep,
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Posts per page, capped by MAX_PAGE_SIZE"),
    category: str | None = Query(None, description="Filter by category"),
) -> PostListResponse:
    """List posts by score, newest first among equal scores."""
    result = ContentLifecycleManager(db).list_posts(page=page, limit=limit, category=category)
    return PostListResponse(
        posts=[PostResponse.model_validate(post) for post in result.posts],
        total_pages=result.total_pages,
        current_page=result.current_page,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep) -> Post:
    """Get a specific post by ID."""
    return ContentLifecycleManager(db).get_post(post_id)


@router.post("/", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    actor: ActorDep,
    db: SessionDep,
) -> PostCreated:
    """Create a post as a registered or anonymous author.

    Anonymous authors receive the post's deletion token in this response only.
    """
    created = ContentLifecycleManager(db).create_post(
        title=post_data.title,
        content=post_data.content,
        category=post_data.category,
        actor=actor,
        client_anonymous_id=post_data.anonymous_id,
    )
    return PostCreated(
        post=PostResponse.model_validate(created.item),
        deletion_token=created.deletion_token,
    )


@router.patch("/{post_id}/vote", response_model=PostResponse)
async def vote_on_post(post_id: int, vote: VoteRequest, db: SessionDep) -> Post:
    """Set the voter's resulting vote on a post."""
    return VoteLedger(db).vote_on_post(post_id, vote.voter_id, vote.vote_type)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={status.HTTP_403_FORBIDDEN: {"model": ErrorResponse}},
)
async def delete_post(
    post_id: int,
    actor: ActorDep,
    deletion_token: DeletionTokenDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete a post permanently (author, admin or deletion-token holder)."""
    ContentLifecycleManager(db).delete_post(post_id, actor, deletion_token)
    return MessageResponse(message="Post deleted successfully")
