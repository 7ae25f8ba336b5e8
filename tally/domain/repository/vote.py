"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from tally.domain.model.vote import Vote
from tally.domain.value import ItemId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_voter_and_item(
        self,
        voter: UserId,
        item_type: str | None,
        item: ItemId,
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific item.

        Args:
            voter: The voter's ID
            item_type: Category of the item (None for legacy votes)
            item: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_items(
        self,
        item_types: Sequence[str | None],
        items: Sequence[ItemId],
    ) -> List[Vote]:
        """Find all votes on any of the given items (batch query).

        Args:
            item_types: Accepted item types; ``None`` matches untyped votes
            items: IDs of the items

        Returns:
            Votes on the items, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            DuplicateVoteError: If the voter already voted on this item
        """
        pass
