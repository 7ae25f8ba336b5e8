"""Get vote tallies use case."""

import logfire
from pydantic import BaseModel, Field

from tally.application.usecase.base import BaseUseCase
from tally.domain.service import VoteService


class VoteTally(BaseModel):
    """Vote tally for one item."""

    item_id: str
    votes: int
    voted_for: bool


class GetVoteTalliesRequest(BaseModel):
    """Get vote tallies request."""

    item_type: str
    item_ids: list[str] = Field(default_factory=list)
    user_id: str | None = None  # Current user ID (if authenticated)


class GetVoteTalliesResponse(BaseModel):
    """Get vote tallies response."""

    item_type: str
    tallies: list[VoteTally]


class GetVoteTalliesUseCase(BaseUseCase):
    """Use case for reading vote counts and the current user's vote state."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get vote tallies use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetVoteTalliesRequest) -> GetVoteTalliesResponse:
        """Execute get vote tallies flow.

        Tallies come back in request order, one per requested ID.

        Args:
            request: Item type, item IDs and optional current user

        Returns:
            Vote tallies
        """
        with logfire.span(
            "get_vote_tallies.execute",
            item_type=request.item_type,
            count=len(request.item_ids),
        ):
            add_votes = self.vote_service.aggregator_for(request.item_type, "item_id")
            items = await add_votes(
                [{"item_id": item_id} for item_id in request.item_ids],
                request.user_id,
            )

            return GetVoteTalliesResponse(
                item_type=request.item_type,
                tallies=[VoteTally(**item) for item in items],
            )
