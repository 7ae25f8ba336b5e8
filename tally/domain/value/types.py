"""Domain value types for Tally."""

from enum import Enum


class VotableType(str, Enum):
    """Known categories of votable items.

    Categories are an open set: any string is accepted wherever a category is
    expected. These are the ones the application routes votes for.
    """

    NEWS = "news"
    COMMENT = "comment"
    ISSUE = "issue"


# Votes stored before items were typed carry no category; they count as news
LEGACY_ITEM_TYPE = None


def item_type_value(category: str) -> str:
    """Plain string form of a category, whether given as enum or string."""
    if isinstance(category, VotableType):
        return category.value
    return category
