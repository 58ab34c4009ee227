"""User account schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for registering an account."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=8, max_length=256)


class LoginRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    """Public account information."""

    id: str
    username: str
    is_admin: bool

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Issued access token for a registered user."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
