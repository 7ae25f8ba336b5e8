"""Vote entity.

A vote records one member's weight on one item (news post, comment, issue).
Each member can cast one vote per item and category.
"""

from datetime import datetime

from pydantic import Field

from tally.domain.model.common import DomainModel
from tally.domain.value import ItemId, UserId, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per item and item type (enforced by database unique constraint)
    - Amounts are summed into tallies; the API only ever records upvotes of 1
    - Polymorphic reference to the votable item via ``item_type``
    """

    id: VoteId
    item: ItemId  # UUID or opaque string
    voter: UserId
    amount: int = 1
    item_type: str | None = None  # None on legacy news votes
    created_at: datetime = Field(default_factory=datetime.now)
