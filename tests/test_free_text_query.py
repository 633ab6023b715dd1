"""Tests for the free-text predicate and its two renderings."""

from unittest.mock import MagicMock

import pytest

from docmanager import ConfigurationError, DocumentQuery, FreeTextQuery
from tests.sample_documents import Organization


@pytest.mark.parametrize("term", [None, "", False])
def test_empty_term_builds_nothing(term):
    assert FreeTextQuery.build(term, ["name"]) is None


def test_term_without_fields_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="no query fields"):
        FreeTextQuery.build("bob", [])


def test_match_document_is_an_or_of_case_insensitive_regexes():
    free_text = FreeTextQuery.build("bob", ["name", "type"])
    assert free_text.to_match_document() == {
        "$or": [
            {"name": {"$regex": "bob", "$options": "i"}},
            {"type": {"$regex": "bob", "$options": "i"}},
        ]
    }


def test_term_is_escaped_by_default():
    assert FreeTextQuery.build("dave.io", ["name"]).pattern == r"dave\.io"
    assert FreeTextQuery.build(".*", ["name"], escape=False).pattern == ".*"


def test_apply_to_adds_one_or_expression_per_field():
    query = DocumentQuery(MagicMock(), Organization)
    query.field("type").equals("a")

    FreeTextQuery.build("bob", ["name", "type"]).apply_to(query)

    assert query.get_filter() == {
        "$and": [
            {"type": {"$eq": "a"}},
            {"$or": [
                {"name": {"$regex": "bob", "$options": "i"}},
                {"type": {"$regex": "bob", "$options": "i"}},
            ]},
        ]
    }
