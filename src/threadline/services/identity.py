"""Identity resolution for inbound requests.

Every operation runs on behalf of exactly one ``Actor``: a registered user
whose bearer token verified, or an anonymous participant identified by a
client-generated string. Anonymous identifiers are trusted at face value;
hardening them (e.g. signing) only has to touch this module and
``threadline.services.authorization``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from threadline.core.errors import VerificationFailure
from threadline.core.security import CredentialVerifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredActor:
    """Requester holding a verified access token."""

    id: str
    is_admin: bool = False
    username: str | None = None

    @property
    def kind(self) -> str:
        return "registered"


@dataclass(frozen=True)
class AnonymousActor:
    """Requester known only by a client-supplied identifier.

    ``id`` is None when the client sent none; callers that need an identity
    (content creation) mint one themselves.
    """

    id: str | None = None

    @property
    def kind(self) -> str:
        return "anonymous"


Actor = RegisteredActor | AnonymousActor


def resolve_actor(
    token: str | None,
    anonymous_id: str | None,
    verifier: CredentialVerifier,
) -> Actor:
    """Resolve the requester, never failing.

    An invalid token is treated exactly like an absent one.
    """
    if token:
        try:
            claims = verifier.verify(token)
        except VerificationFailure:
            logger.info("Ignoring unverifiable credential; resolving as anonymous")
        else:
            return RegisteredActor(
                id=claims.user_id,
                is_admin=claims.is_admin,
                username=claims.username,
            )
    anonymous_id = anonymous_id.strip() if anonymous_id else None
    return AnonymousActor(id=anonymous_id or None)


def require_registered(token: str | None, verifier: CredentialVerifier) -> RegisteredActor:
    """Resolve a registered actor or fail.

    Raises:
        VerificationFailure: If the token is absent or does not verify.
    """
    if not token:
        raise VerificationFailure("Not authenticated")
    claims = verifier.verify(token)
    return RegisteredActor(id=claims.user_id, is_admin=claims.is_admin, username=claims.username)
