"""Registered user accounts and access-token issuance."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from threadline.core.errors import NotFoundError, ValidationError, VerificationFailure
from threadline.core.security import create_access_token, hash_password, verify_password
from threadline.models import User

logger = logging.getLogger(__name__)


class AccountService:
    """Creates users, checks passwords and issues access tokens."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_username(self, username: str) -> User | None:
        return self.session.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def get(self, user_id: str) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def register(self, username: str, password: str, *, is_admin: bool = False) -> User:
        """Create an account.

        Raises:
            ValidationError: If the username is already taken.
        """
        if self.get_by_username(username) is not None:
            raise ValidationError("Username already taken")
        user = User(username=username, password_hash=hash_password(password), is_admin=is_admin)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as err:
            self.session.rollback()
            raise ValidationError("Username already taken") from err
        self.session.refresh(user)
        logger.info("Registered user %s (admin=%s)", user.username, user.is_admin)
        return user

    def authenticate(self, username: str, password: str) -> User:
        """Return the user whose credentials match.

        Raises:
            VerificationFailure: If the username is unknown or the password wrong.
        """
        user = self.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise VerificationFailure("Invalid username or password")
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id, username=user.username, is_admin=user.is_admin)
