"""Unit tests for VoteService."""

from collections import deque
from uuid import uuid4

import pytest
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from tally.domain.error import DuplicateVoteError
from tally.domain.repository import VoteRepository
from tally.domain.service import VoteService, add_votes_to_item
from tally.domain.value import UserId, VotableType
from tally.persistence.repository.inmemory import InMemoryVoteRepository
from tests.conftest import make_vote
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class CountingVoteRepository(InMemoryVoteRepository):
    """In-memory repository that counts read queries."""

    def __init__(self) -> None:
        super().__init__()
        self.queries = 0

    async def find_by_items(self, item_types, items):
        self.queries += 1
        return await super().find_by_items(item_types, items)


class BrokenVoteRepository(InMemoryVoteRepository):
    """In-memory repository whose reads fail."""

    async def find_by_items(self, item_types, items):
        raise OperationalError("SELECT votes", None, Exception("connection lost"))


class NewsPost(BaseModel):
    """Minimal votable item for tests."""

    id: str
    title: str


class TestRecordVote:
    """Tests for record_vote method."""

    @pytest.mark.asyncio
    async def test_record_vote_saves_vote(self, unit_env):
        """Recording a vote should store it with the given fields."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        item_id = uuid4()

        # Act
        result = await vote_service.record_vote(
            item_id=item_id,
            voter=UserId("u1"),
            amount=1,
            item_type="issue",
        )

        # Assert
        saved_vote = await vote_repo.find_by_voter_and_item(
            UserId("u1"), "issue", item_id
        )
        assert saved_vote == result
        assert saved_vote.amount == 1
        assert saved_vote.item_type == "issue"

    @pytest.mark.asyncio
    async def test_record_vote_stores_enum_category_as_plain_string(self, unit_env):
        """Enum categories should be stored by value."""
        vote_service = await unit_env.get(VoteService)

        result = await vote_service.record_vote(
            item_id="abc", voter=UserId("u1"), amount=1, item_type=VotableType.COMMENT
        )

        assert result.item_type == "comment"
        assert type(result.item_type) is str

    @pytest.mark.asyncio
    async def test_record_vote_duplicate_raises_error(self, unit_env):
        """Second vote by the same user on the same item should be rejected."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        await vote_service.record_vote("abc", UserId("u1"), 1, "news")

        # Act & Assert
        with pytest.raises(DuplicateVoteError):
            await vote_service.record_vote("abc", UserId("u1"), 1, "news")

    @pytest.mark.asyncio
    async def test_same_item_in_other_category_is_not_duplicate(self, unit_env):
        """Uniqueness covers item, voter and item type together."""
        vote_service = await unit_env.get(VoteService)
        await vote_service.record_vote("abc", UserId("u1"), 1, "news")

        vote = await vote_service.record_vote("abc", UserId("u1"), 1, "comment")

        assert vote.item_type == "comment"


class TestRetrieveVotesFor:
    """Tests for retrieve_votes_for method."""

    @pytest.mark.asyncio
    async def test_news_includes_untyped_votes(self, unit_env):
        """News lookups should also match votes without an item type."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        typed = await vote_repo.save(make_vote("X", "u1", item_type="news"))
        legacy = await vote_repo.save(make_vote("X", "u2", item_type=None))
        await vote_repo.save(make_vote("X", "u3", item_type="comment"))

        # Act
        votes = await vote_service.retrieve_votes_for("news", "X")

        # Assert
        assert {v.id for v in votes} == {typed.id, legacy.id}

    @pytest.mark.asyncio
    async def test_other_categories_exclude_untyped_votes(self, unit_env):
        """Only news gets the untyped-vote fallback."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        comment_vote = await vote_repo.save(make_vote("X", "u1", item_type="comment"))
        await vote_repo.save(make_vote("X", "u2", item_type=None))

        votes = await vote_service.retrieve_votes_for("comment", "X")

        assert [v.id for v in votes] == [comment_vote.id]

    @pytest.mark.asyncio
    async def test_list_of_ids_matches_any(self, unit_env):
        """A list of IDs should match votes on any of them."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        item_a, item_b = uuid4(), uuid4()
        await vote_repo.save(make_vote(item_a, "u1"))
        await vote_repo.save(make_vote(item_b, "u1"))
        await vote_repo.save(make_vote("elsewhere", "u1"))

        votes = await vote_service.retrieve_votes_for("news", [item_a, str(item_b)])

        assert len(votes) == 2

    @pytest.mark.asyncio
    async def test_no_matches_returns_empty_list(self, unit_env):
        """No votes should give an empty list."""
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.retrieve_votes_for("issue", ["nothing"]) == []

    @pytest.mark.asyncio
    async def test_reader_for_binds_category(self, unit_env):
        """A bound reader should behave like the full call."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.save(make_vote("X", "u1", item_type="issue"))
        await vote_repo.save(make_vote("X", "u2", item_type="news"))

        read_issue_votes = vote_service.reader_for("issue")
        votes = await read_issue_votes("X")

        assert read_issue_votes.category == "issue"
        assert [v.voter for v in votes] == ["u1"]


class TestAddVotesToItem:
    """Tests for the add_votes_to_item function."""

    VOTES = [
        make_vote("A", "u1", amount=1),
        make_vote("A", "u2", amount=1),
        make_vote("B", "u1", amount=5),
    ]

    def test_counts_votes_and_marks_current_user(self):
        """Votes on the item are summed and the user's vote is detected."""
        item = add_votes_to_item({"id": "A"}, "A", "u1", self.VOTES)

        assert item["votes"] == 2
        assert item["voted_for"] is True

    def test_other_user_has_not_voted(self):
        """A user without a vote on the item is not marked."""
        item = add_votes_to_item({"id": "A"}, "A", "u3", self.VOTES)

        assert item["votes"] == 2
        assert item["voted_for"] is False

    def test_anonymous_user_never_voted(self):
        """Without a user the item is never marked as voted for."""
        item = add_votes_to_item({"id": "B"}, "B", None, self.VOTES)

        assert item["votes"] == 5
        assert item["voted_for"] is False

    def test_compares_ids_in_canonical_form(self):
        """UUID and string forms of the same ID should match."""
        item_id = uuid4()
        votes = [make_vote(item_id, "u1"), make_vote(str(item_id).upper(), "u2")]

        item = add_votes_to_item({"id": str(item_id)}, str(item_id), "u2", votes)

        assert item["votes"] == 2
        assert item["voted_for"] is True

    def test_sums_signed_amounts(self):
        """Amounts are summed as they are stored."""
        votes = [make_vote("A", "u1", amount=3), make_vote("A", "u2", amount=-1)]

        assert add_votes_to_item({}, "A", None, votes)["votes"] == 2

    def test_does_not_mutate_original_item(self):
        """The caller's item should be left untouched."""
        original = {"id": "A", "title": "Hello"}
        post = NewsPost(id="A", title="Hello")

        from_dict = add_votes_to_item(original, "A", "u1", self.VOTES)
        from_model = add_votes_to_item(post, "A", "u1", self.VOTES)

        assert original == {"id": "A", "title": "Hello"}
        assert from_dict is not original
        assert from_model == {"id": "A", "title": "Hello", "votes": 2, "voted_for": True}


class TestAddVotesFor:
    """Tests for add_votes_for method."""

    @pytest.mark.asyncio
    async def test_single_item_returns_single_item(self):
        """A single item comes back unwrapped."""
        # Arrange
        repo = CountingVoteRepository()
        await repo.save(make_vote("A", "u1"))
        vote_service = VoteService(vote_repository=repo)

        # Act
        result = await vote_service.add_votes_for("news", "id", {"id": "A"}, "u1")

        # Assert
        assert result == {"id": "A", "votes": 1, "voted_for": True}
        assert repo.queries == 1

    @pytest.mark.asyncio
    async def test_list_uses_one_query(self):
        """A list of N items gives N results from a single query."""
        # Arrange
        repo = CountingVoteRepository()
        await repo.save(make_vote("A", "u1"))
        await repo.save(make_vote("A", "u2"))
        await repo.save(make_vote("C", "u2"))
        vote_service = VoteService(vote_repository=repo)
        posts = [NewsPost(id=i, title=f"Post {i}") for i in ("A", "B", "C")]

        # Act
        result = await vote_service.add_votes_for("news", "id", posts, "u2")

        # Assert
        assert repo.queries == 1
        assert [(p["id"], p["votes"], p["voted_for"]) for p in result] == [
            ("A", 2, True),
            ("B", 0, False),
            ("C", 1, True),
        ]

    @pytest.mark.asyncio
    async def test_any_sequence_is_treated_as_a_list(self):
        """Non-list sequences of items come back as a list."""
        repo = CountingVoteRepository()
        await repo.save(make_vote("A", "u1"))
        vote_service = VoteService(vote_repository=repo)

        result = await vote_service.add_votes_for(
            "news", "id", deque([{"id": "A"}, {"id": "B"}]), "u1"
        )

        assert result == [
            {"id": "A", "votes": 1, "voted_for": True},
            {"id": "B", "votes": 0, "voted_for": False},
        ]
        assert repo.queries == 1

    @pytest.mark.asyncio
    async def test_empty_list_returns_empty_list(self):
        """An empty list stays an empty list."""
        vote_service = VoteService(vote_repository=CountingVoteRepository())

        assert await vote_service.add_votes_for("news", "id", [], None) == []

    @pytest.mark.asyncio
    async def test_repeated_calls_give_same_output(self):
        """Aggregation should not depend on earlier calls."""
        repo = CountingVoteRepository()
        await repo.save(make_vote("A", "u1"))
        vote_service = VoteService(vote_repository=repo)
        items = [{"id": "A"}, {"id": "B"}]

        first = await vote_service.add_votes_for("news", "id", items, "u1")
        second = await vote_service.add_votes_for("news", "id", items, "u1")

        assert first == second
        assert items == [{"id": "A"}, {"id": "B"}]

    @pytest.mark.asyncio
    async def test_read_errors_propagate(self):
        """Storage failures reach the caller."""
        vote_service = VoteService(vote_repository=BrokenVoteRepository())

        with pytest.raises(OperationalError):
            await vote_service.add_votes_for("news", "id", [{"id": "A"}], None)

    @pytest.mark.asyncio
    async def test_aggregator_for_binds_category_and_id_property(self):
        """A bound aggregator should behave like the full call."""
        repo = CountingVoteRepository()
        await repo.save(make_vote("A", "u1", item_type="issue"))
        vote_service = VoteService(vote_repository=repo)

        add_issue_votes = vote_service.aggregator_for("issue", "number")
        result = await add_issue_votes({"number": "A"}, None)

        assert result == {"number": "A", "votes": 1, "voted_for": False}
