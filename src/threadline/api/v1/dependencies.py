"""Shared API dependencies for identity resolution and storage access."""

from typing import Annotated

from fastapi import Depends, Header, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from threadline.core.security import CredentialVerifier
from threadline.db.session import get_db
from threadline.services.identity import (
    Actor,
    RegisteredActor,
    require_registered,
    resolve_actor,
)

# Bearer credentials are optional everywhere; endpoints decide how strict to be.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_credential_verifier() -> CredentialVerifier:
    """Return the verifier used for bearer tokens."""
    return CredentialVerifier()


VerifierDep = Annotated[CredentialVerifier, Depends(get_credential_verifier)]


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials is not None else None


def get_actor(
    credentials: BearerDep,
    verifier: VerifierDep,
    x_anonymous_id: Annotated[str | None, Header()] = None,
) -> Actor:
    """Resolve the requester, falling back to anonymous on bad credentials."""
    return resolve_actor(_token(credentials), x_anonymous_id, verifier)


def get_registered_actor(credentials: BearerDep, verifier: VerifierDep) -> RegisteredActor:
    """Resolve the requester as a registered user or fail with 401."""
    return require_registered(_token(credentials), verifier)


def get_deletion_token(
    x_deletion_token: Annotated[str | None, Header()] = None,
    deletion_token: Annotated[str | None, Query()] = None,
) -> str | None:
    """Deletion token from the ``X-Deletion-Token`` header or the query string."""
    return x_deletion_token or deletion_token


# Type aliases for identity dependencies
ActorDep = Annotated[Actor, Depends(get_actor)]
RegisteredActorDep = Annotated[RegisteredActor, Depends(get_registered_actor)]
DeletionTokenDep = Annotated[str | None, Depends(get_deletion_token)]
