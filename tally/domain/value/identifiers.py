"""Strongly typed identifiers for Tally domain entities.

Voted-on items come from several collections and are not all keyed the same
way: most carry a UUID, older ones a free-form string. ``ItemId`` covers both,
and every comparison goes through ``canonical_item_id``.
"""

import re
from typing import NewType, Union
from uuid import UUID

VoteId = NewType("VoteId", UUID)
UserId = NewType("UserId", str)

# Structured (UUID) or opaque string identifier of a voted-on item
ItemId = Union[UUID, str]

# Hyphenated 8-4-4-4-12 form; braces, URNs and bare hex stay opaque
UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def coerce_item_id(raw: ItemId) -> ItemId:
    """Interpret a submitted item id as a UUID when it is written as one.

    Only the hyphenated form (in either case) counts. Anything else,
    including other spellings ``uuid.UUID`` would accept, is kept verbatim
    so distinct opaque ids never collapse into one.

    Args:
        raw: Identifier as submitted by the client

    Returns:
        A UUID if ``raw`` is a hyphenated UUID, otherwise ``raw`` as a string
    """
    if isinstance(raw, UUID):
        return raw
    raw = str(raw)
    if UUID_PATTERN.fullmatch(raw):
        return UUID(raw)
    return raw


def canonical_item_id(value: ItemId) -> str:
    """Return the canonical string form of an item id.

    UUIDs render lowercase and hyphenated; opaque strings are unchanged.
    """
    return str(coerce_item_id(value))
