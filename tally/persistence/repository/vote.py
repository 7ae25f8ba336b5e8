"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, insert, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.error import DuplicateVoteError
from tally.domain.model import Vote
from tally.domain.repository import VoteRepository
from tally.domain.value import ItemId, UserId, canonical_item_id
from tally.persistence.mappers import row_to_vote, vote_to_dict
from tally.persistence.tables import votes_table

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Whether an IntegrityError comes from a unique constraint."""
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code == UNIQUE_VIOLATION


def _item_type_clause(item_types: Sequence[str | None]):
    named = [t for t in item_types if t is not None]
    clauses = []
    if named:
        clauses.append(votes_table.c.item_type.in_(named))
    if len(named) != len(item_types):
        clauses.append(votes_table.c.item_type.is_(None))
    return or_(*clauses)


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_voter_and_item(
        self,
        voter: UserId,
        item_type: str | None,
        item: ItemId,
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter == str(voter),
                _item_type_clause([item_type]),
                votes_table.c.item == canonical_item_id(item),
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_items(
        self,
        item_types: Sequence[str | None],
        items: Sequence[ItemId],
    ) -> List[Vote]:
        """Find all votes on any of the given items (batch query)."""
        if not items or not item_types:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.item.in_([canonical_item_id(i) for i in items]),
                _item_type_clause(item_types),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create) and commit it.

        The insert runs in a savepoint so a rejected duplicate leaves the
        request transaction usable. Commits on success; a failed
        commit raises to the caller.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateVoteError(
                    item=canonical_item_id(vote.item),
                    voter=str(vote.voter),
                    item_type=vote.item_type,
                ) from e
            raise

        await self.session.commit()
        return vote
