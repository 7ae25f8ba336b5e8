"""Vote use cases."""

from .cast_vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteStatus,
    CastVoteUseCase,
)
from .get_vote_tallies import (
    GetVoteTalliesRequest,
    GetVoteTalliesResponse,
    GetVoteTalliesUseCase,
    VoteTally,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteStatus",
    "CastVoteUseCase",
    "GetVoteTalliesRequest",
    "GetVoteTalliesResponse",
    "GetVoteTalliesUseCase",
    "VoteTally",
]
