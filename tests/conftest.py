"""Test configuration and fixtures."""

from contextlib import asynccontextmanager
from datetime import datetime
from uuid import uuid4

from tally.domain.model import Vote
from tally.domain.value import ItemId, UserId, VoteId


def make_vote(
    item: ItemId,
    voter: str,
    amount: int = 1,
    item_type: str | None = "news",
) -> Vote:
    """Helper function to build a vote for seeding repositories.

    Args:
        item: ID of the voted-on item
        voter: Voter's user ID
        amount: Vote weight
        item_type: Item category, None for a legacy untyped vote

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(uuid4()),
        item=item,
        voter=UserId(voter),
        amount=amount,
        item_type=item_type,
        created_at=datetime.now(),
    )


class FakeDriverError(Exception):
    """Driver error carrying a SQLSTATE, like asyncpg's adapted errors."""

    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


class FakeRow:
    def __init__(self, data: dict):
        self._data = data

    def _asdict(self) -> dict:
        return dict(self._data)


class FakeResult:
    def __init__(self, rows: list[FakeRow]):
        self._rows = rows

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeSession:
    """Stand-in for AsyncSession that records statements instead of running them.

    Args:
        rows: Row dicts returned by every ``execute``
        execute_error: Raised by ``execute`` when set
        commit_error: Raised by ``commit`` when set
    """

    def __init__(self, rows=(), execute_error=None, commit_error=None):
        self.rows = [FakeRow(row) for row in rows]
        self.execute_error = execute_error
        self.commit_error = commit_error
        self.statements = []
        self.savepoints = 0
        self.commits = 0

    @asynccontextmanager
    async def begin_nested(self):
        self.savepoints += 1
        yield self

    async def execute(self, stmt):
        self.statements.append(stmt)
        if self.execute_error is not None:
            raise self.execute_error
        return FakeResult(self.rows)

    async def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1
