"""Vote domain service."""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Union
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel

from tally.domain.error import DuplicateVoteError
from tally.domain.model.vote import Vote
from tally.domain.repository import VoteRepository
from tally.domain.value import (
    LEGACY_ITEM_TYPE,
    ItemId,
    UserId,
    VotableType,
    VoteId,
    canonical_item_id,
    item_type_value,
)

from .base import Service

ItemIds = Union[ItemId, Sequence[ItemId]]
Item = Union[BaseModel, Mapping[str, Any]]


def _as_id_list(item_ids: ItemIds) -> list[ItemId]:
    if isinstance(item_ids, (str, UUID)):
        return [item_ids]
    return list(item_ids)


def _is_item_list(items: Any) -> bool:
    return isinstance(items, Sequence) and not isinstance(items, (str, bytes))


def _item_data(item: Item) -> dict[str, Any]:
    """Plain-data copy of an item, leaving the caller's object untouched."""
    if isinstance(item, BaseModel):
        return item.model_dump()
    return dict(item)


def add_votes_to_item(
    item: Item,
    item_id: ItemId,
    user_id: UserId | str | None,
    votes: Sequence[Vote],
) -> dict[str, Any]:
    """Tally the votes that apply to one item.

    Args:
        item: The item (pydantic model or mapping)
        item_id: ID of the item, compared in canonical form
        user_id: Current user's ID, if any
        votes: Votes to pick from; may cover other items too

    Returns:
        Copy of the item with ``votes`` (summed amounts) and ``voted_for``
        (whether ``user_id`` cast one of them)
    """
    data = _item_data(item)
    key = canonical_item_id(item_id)
    voter = str(user_id) if user_id else None

    total = 0
    voted_for = False
    for vote in votes:
        if canonical_item_id(vote.item) != key:
            continue
        total += vote.amount
        if voter is not None and str(vote.voter) == voter:
            voted_for = True

    data["votes"] = total
    data["voted_for"] = voted_for
    return data


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(self, vote_repository: VoteRepository) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
        """
        self.vote_repository = vote_repository

    async def record_vote(
        self,
        item_id: ItemId,
        voter: UserId,
        amount: int,
        item_type: str,
    ) -> Vote:
        """Record a vote on an item.

        Args:
            item_id: Item ID (already coerced)
            voter: ID of the voting user
            amount: Vote weight
            item_type: Category of the item

        Returns:
            Created vote

        Raises:
            DuplicateVoteError: If the user already voted on this item
        """
        item_type = item_type_value(item_type)
        with logfire.span(
            "record_vote",
            item_id=str(item_id),
            item_type=item_type,
            voter=str(voter),
        ):
            vote = Vote(
                id=VoteId(uuid4()),
                item=item_id,
                voter=voter,
                amount=amount,
                item_type=item_type,
                created_at=datetime.now(),
            )

            try:
                saved_vote = await self.vote_repository.save(vote)
            except DuplicateVoteError:
                logfire.warn(
                    "Duplicate vote attempt",
                    voter=str(voter),
                    item_id=str(item_id),
                    item_type=item_type,
                )
                raise

            logfire.info(
                "Vote recorded",
                vote_id=str(saved_vote.id),
                item_id=str(item_id),
                item_type=item_type,
            )
            return saved_vote

    async def retrieve_votes_for(self, category: str, item_ids: ItemIds) -> list[Vote]:
        """Find every vote on one or more items of a category.

        News votes predating item typing have no item type; they are
        matched along with typed news votes.

        Args:
            category: Item category, e.g. ``news``
            item_ids: A single item ID or a sequence of them

        Returns:
            All matching votes, unordered
        """
        category = item_type_value(category)
        item_types: list[str | None] = [category]
        if category == VotableType.NEWS.value:
            item_types.append(LEGACY_ITEM_TYPE)

        return await self.vote_repository.find_by_items(
            item_types=item_types,
            items=_as_id_list(item_ids),
        )

    def reader_for(self, category: str) -> "CategoryVoteReader":
        """Bind ``retrieve_votes_for`` to a category."""
        return CategoryVoteReader(self, category)

    async def add_votes_for(
        self,
        category: str,
        id_property: str,
        items: Union[Item, Sequence[Item]],
        user_id: UserId | str | None,
    ) -> Union[dict[str, Any], list[dict[str, Any]]]:
        """Add ``votes`` and ``voted_for`` to one item or a list of items.

        All votes are fetched with a single query, whatever the number of
        items.

        Args:
            category: Item category
            id_property: Name of the field holding each item's ID
            items: A single item or a sequence of items
            user_id: Current user's ID, if any

        Returns:
            Plain-data copies of the items, in the shape they were passed
            (a single dict for a single item, a list otherwise)
        """
        was_list = _is_item_list(items)
        item_list = list(items) if was_list else [items]

        data = [_item_data(item) for item in item_list]
        item_ids = [entry[id_property] for entry in data]

        votes = await self.retrieve_votes_for(category, item_ids)

        tallied = [
            add_votes_to_item(entry, entry[id_property], user_id, votes)
            for entry in data
        ]

        return tallied if was_list else tallied[0]

    def aggregator_for(
        self, category: str, id_property: str
    ) -> "CategoryVoteAggregator":
        """Bind ``add_votes_for`` to a category and ID field."""
        return CategoryVoteAggregator(self, category, id_property)


class CategoryVoteReader:
    """Vote reader bound to a single category."""

    def __init__(self, vote_service: VoteService, category: str) -> None:
        self.vote_service = vote_service
        self.category = category

    async def __call__(self, item_ids: ItemIds) -> list[Vote]:
        return await self.vote_service.retrieve_votes_for(self.category, item_ids)


class CategoryVoteAggregator:
    """Vote aggregator bound to a category and an ID field."""

    def __init__(
        self, vote_service: VoteService, category: str, id_property: str
    ) -> None:
        self.vote_service = vote_service
        self.category = category
        self.id_property = id_property

    async def __call__(
        self,
        items: Union[Item, Sequence[Item]],
        user_id: UserId | str | None,
    ) -> Union[dict[str, Any], list[dict[str, Any]]]:
        return await self.vote_service.add_votes_for(
            self.category, self.id_property, items, user_id
        )
