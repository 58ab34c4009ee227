"""Credential, password and secret helpers."""

from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import nacl.pwhash
from jose import JWTError, jwt
from nacl.exceptions import InvalidkeyError

from threadline.core.errors import VerificationFailure
from threadline.core.settings import settings

DELETION_TOKEN_BYTES = 32


@dataclass(frozen=True)
class Claims:
    """Verified claims carried by an access token."""

    user_id: str
    is_admin: bool = False
    username: str | None = None


def create_access_token(
    subject: str,
    *,
    username: str | None = None,
    is_admin: bool = False,
    expires_minutes: int | None = None,
) -> str:
    """Create a JWT access token for a registered user."""
    minutes = (
        expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    )
    to_encode: dict[str, object] = {
        "sub": subject,
        "is_admin": is_admin,
        "exp": datetime.now(UTC) + timedelta(minutes=minutes),
    }
    if username is not None:
        to_encode["username"] = username
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


class CredentialVerifier:
    """Stateless verifier turning an access token into ``Claims``."""

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None) -> None:
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.jwt_algorithm

    def verify(self, token: str) -> Claims:
        """Return the token's claims.

        Raises:
            VerificationFailure: If the token is expired, malformed or badly signed.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as err:
            raise VerificationFailure("Could not validate credentials") from err

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise VerificationFailure("Could not validate credentials")
        return Claims(
            user_id=subject,
            is_admin=bool(payload.get("is_admin", False)),
            username=payload.get("username"),
        )


def hash_password(password: str) -> str:
    """Hash a password with argon2id."""
    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches the stored hash."""
    try:
        return nacl.pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False


def new_anonymous_id() -> str:
    """Mint an anonymous identifier for clients that did not supply one."""
    return str(uuid.uuid4())


def new_deletion_token() -> str:
    """Mint an unguessable deletion token."""
    return secrets.token_urlsafe(DELETION_TOKEN_BYTES)


def tokens_match(supplied: str | None, expected: str | None) -> bool:
    """Compare two secrets in constant time; absent values never match."""
    if not supplied or not expected:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))
