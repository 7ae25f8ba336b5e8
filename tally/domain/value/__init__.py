"""Domain value objects for Tally."""

from tally.domain.value.identifiers import (
    ItemId,
    UserId,
    VoteId,
    canonical_item_id,
    coerce_item_id,
)
from tally.domain.value.types import LEGACY_ITEM_TYPE, VotableType, item_type_value

__all__ = [
    # Identifiers
    "ItemId",
    "UserId",
    "VoteId",
    "canonical_item_id",
    "coerce_item_id",
    # Types
    "LEGACY_ITEM_TYPE",
    "VotableType",
    "item_type_value",
]
