"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteRequest(BaseModel):
    """Requested resulting vote state for one voter.

    Both fields are checked by the vote ledger so that a missing voter or an
    unknown type is reported as a validation error rather than a schema error.
    """

    vote_type: str | None = Field(None, description="upvote, downvote or remove")
    voter_id: str | None = Field(None, description="Registered user id or anonymous id")
