"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .vote_service import (
    CategoryVoteAggregator,
    CategoryVoteReader,
    VoteService,
    add_votes_to_item,
)

__all__ = [
    "CategoryVoteAggregator",
    "CategoryVoteReader",
    "JWTService",
    "Service",
    "VoteService",
    "add_votes_to_item",
]
