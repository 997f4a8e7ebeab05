"""Tests for QueryOptions parsing and merging."""

import pytest
from pydantic import ValidationError

from answer_engine.query import QueryOptions


class TestQueryOptions:
    """Test QueryOptions."""

    @pytest.mark.parametrize(
        "overrides, field, expected",
        [
            ({"useVectorStore": False}, "use_vector_store", False),
            ({"useLLM": False}, "use_llm", False),
            ({"useInternet": False}, "use_internet", False),
            ({"minScore": 0.5}, "min_score", 0.5),
            ({"topK": 3}, "top_k", 3),
            ({"use_llm": False}, "use_llm", False),
        ],
    )
    def test_wire_and_field_names(self, overrides, field, expected):
        """camelCase wire names and snake_case field names both apply."""
        assert getattr(QueryOptions().merged(overrides), field) == expected

    def test_merge_keeps_unset_fields(self):
        """Only the keys a caller sends replace the defaults."""
        defaults = QueryOptions(min_score=0.7, use_internet=False)

        merged = defaults.merged({"useLLM": False})

        assert merged.use_llm is False
        assert merged.min_score == 0.7
        assert merged.use_internet is False
        assert merged.use_vector_store is True

    def test_unknown_keys_ignored(self):
        assert QueryOptions().merged({"useCache": True}) == QueryOptions()

    def test_invalid_top_k(self):
        with pytest.raises(ValidationError):
            QueryOptions().merged({"topK": 0})
