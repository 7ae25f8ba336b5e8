"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from tally.domain.error import DuplicateVoteError
from tally.domain.model.vote import Vote
from tally.domain.repository.vote import VoteRepository
from tally.domain.value import ItemId, UserId, canonical_item_id


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_voter_and_item(
        self,
        voter: UserId,
        item_type: str | None,
        item: ItemId,
    ) -> Optional[Vote]:
        """Find a vote by voter and item."""
        key = canonical_item_id(item)
        for vote in self._votes:
            if (
                str(vote.voter) == str(voter)
                and vote.item_type == item_type
                and canonical_item_id(vote.item) == key
            ):
                return vote
        return None

    async def find_by_items(
        self,
        item_types: Sequence[str | None],
        items: Sequence[ItemId],
    ) -> list[Vote]:
        """Find all votes on any of the given items (batch query)."""
        keys = {canonical_item_id(i) for i in items}
        accepted = set(item_types)
        return [
            v
            for v in self._votes
            if canonical_item_id(v.item) in keys and v.item_type in accepted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Untyped votes are never treated as duplicates, matching PostgreSQL
        where NULLs are distinct under a UNIQUE constraint.

        Raises:
            DuplicateVoteError: If vote already exists
        """
        if vote.item_type is None:
            self._votes.append(vote)
            return vote

        existing = await self.find_by_voter_and_item(
            vote.voter, vote.item_type, vote.item
        )
        if existing:
            raise DuplicateVoteError(
                item=canonical_item_id(vote.item),
                voter=str(vote.voter),
                item_type=vote.item_type,
            )

        self._votes.append(vote)
        return vote
