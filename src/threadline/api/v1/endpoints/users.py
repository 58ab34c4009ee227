# src/threadline/api/v1/endpoints/users.py
"""Account endpoints for the Threadline API."""

from fastapi import APIRouter, status

from threadline.models import User
from threadline.schemas.common import ErrorResponse
from threadline.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from threadline.services.accounts import AccountService

from ..dependencies import RegisteredActorDep, SessionDep

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> User:
    """Register a new (non-admin) account."""
    return AccountService(db).register(payload.username, payload.password)


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange a username and password for an access token."""
    accounts = AccountService(db)
    user = accounts.authenticate(payload.username, payload.password)
    return LoginResponse(
        access_token=accounts.issue_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def read_current_user(actor: RegisteredActorDep, db: SessionDep) -> User:
    """Return the account behind the bearer token."""
    return AccountService(db).get(actor.id)
