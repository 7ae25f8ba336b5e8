"""Unit tests for item identifier handling."""

from uuid import UUID, uuid4

import pytest

from tally.domain.value import canonical_item_id, coerce_item_id


class TestCoerceItemId:
    """Tests for coerce_item_id."""

    def test_uuid_string_becomes_uuid(self):
        item_id = uuid4()

        assert coerce_item_id(str(item_id)) == item_id

    def test_uuid_is_kept(self):
        item_id = uuid4()

        assert coerce_item_id(item_id) is item_id

    @pytest.mark.parametrize("raw", ["52f8a1c0e4b0d1a2b3c4d5e6", "hello-world", ""])
    def test_other_strings_fall_back_to_string(self, raw):
        """Anything that is not a UUID stays an opaque string."""
        result = coerce_item_id(raw)

        assert result == raw
        assert not isinstance(result, UUID)


class TestCanonicalItemId:
    """Tests for canonical_item_id."""

    def test_uuid_forms_agree(self):
        """A UUID and its hyphenated spellings share one canonical form."""
        item_id = uuid4()

        forms = {
            canonical_item_id(item_id),
            canonical_item_id(str(item_id)),
            canonical_item_id(str(item_id).upper()),
        }

        assert forms == {str(item_id)}

    def test_opaque_string_is_unchanged(self):
        assert canonical_item_id("Some-Item") == "Some-Item"

    @pytest.mark.parametrize(
        "raw",
        [
            "1" * 32,
            "{" + "1" * 32 + "}",
            "urn:uuid:11111111-1111-1111-1111-111111111111",
            "１" * 32,
        ],
    )
    def test_other_uuid_spellings_stay_opaque(self, raw):
        """Only the hyphenated form is structured; the rest are kept verbatim."""
        assert canonical_item_id(raw) == raw
        assert not isinstance(coerce_item_id(raw), UUID)

    def test_distinct_opaque_ids_stay_distinct(self):
        ids = ["1" * 32, "{" + "1" * 32 + "}", "１" * 32]

        canonical = {canonical_item_id(raw) for raw in ids}

        assert len(canonical) == len(ids)
        assert "11111111-1111-1111-1111-111111111111" not in canonical
