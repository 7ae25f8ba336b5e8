"""Cast vote use case."""

from enum import Enum

import logfire
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from tally.application.usecase.base import BaseUseCase
from tally.domain.error import DuplicateVoteError
from tally.domain.service import VoteService
from tally.domain.value import UserId, coerce_item_id, item_type_value

# Only upvotes can be submitted
ACCEPTED_AMOUNT = "1"

AMOUNT_ERROR = "Items can only be upvoted."
ITEM_ID_ERROR = "Invalid item id."


class CastVoteStatus(str, Enum):
    """Outcome of a vote submission."""

    RECORDED = "recorded"
    INVALID = "invalid"
    UNAUTHORIZED = "unauthorized"
    DUPLICATE = "duplicate"
    FAILED = "failed"


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    item_type: str
    item_id: str = ""
    amount: str = ""
    user_id: str | None = None  # User ID from authenticated user


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``errors`` is only filled for ``invalid`` submissions and ``vote_id``
    only for ``recorded`` ones.
    """

    status: CastVoteStatus
    vote_id: str | None = None
    errors: list[str] = Field(default_factory=list)


class CastVoteUseCase(BaseUseCase):
    """Use case for casting a vote on an item of any type."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    @staticmethod
    def validate(request: CastVoteRequest) -> list[str]:
        """Collect every validation error in a submission."""
        errors = []
        if request.amount != ACCEPTED_AMOUNT:
            errors.append(AMOUNT_ERROR)
        if not request.item_id.strip():
            errors.append(ITEM_ID_ERROR)
        return errors

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Never raises for bad input or storage failures; the outcome is
        reported in the response status.

        Args:
            request: Cast vote request

        Returns:
            Cast vote response
        """
        errors = self.validate(request)
        if errors:
            return CastVoteResponse(status=CastVoteStatus.INVALID, errors=errors)

        if not request.user_id:
            return CastVoteResponse(status=CastVoteStatus.UNAUTHORIZED)

        item_type = item_type_value(request.item_type)
        try:
            vote = await self.vote_service.record_vote(
                item_id=coerce_item_id(request.item_id),
                voter=UserId(request.user_id),
                amount=int(request.amount),
                item_type=item_type,
            )
        except DuplicateVoteError:
            return CastVoteResponse(status=CastVoteStatus.DUPLICATE)
        except SQLAlchemyError as e:
            logfire.error(
                "Vote could not be saved",
                item_id=request.item_id,
                item_type=item_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            return CastVoteResponse(status=CastVoteStatus.FAILED)

        return CastVoteResponse(status=CastVoteStatus.RECORDED, vote_id=str(vote.id))
