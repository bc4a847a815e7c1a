#!/usr/bin/env python3
"""
Tests for the metadata query filter.

Covers query tokenization (special-character expansion, short-token removal),
record flattening, OR semantics across query words and the degenerate-input
contract.
"""

from pathlib import Path

# Add parent to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent))

import pytest

from meta_parser.filter import MetadataFilter, filter_metadata, record_text, tokenize_query
from meta_parser.schemas import Metadata


@pytest.fixture
def records():
    return [
        Metadata(title="Cat food reviews", keywords=("pets", "cats")),
        Metadata(title="Dog park guide", site_name="Parks"),
        Metadata(title="Fish tank basics", url="https://fish.example.com/tanks"),
        Metadata(title="Lightyear Chronicles", author="Jane Doe"),
    ]


def test_tokenize_plain_words():
    assert tokenize_query("cat dog") == ["cat", "dog"]


def test_tokenize_expands_special_characters():
    assert tokenize_query("light-year") == ["light", "year", "lightyear", "light-year"]


def test_tokenize_drops_short_tokens():
    assert tokenize_query("a") == []
    assert tokenize_query("a-b") == ["ab", "a-b"]
    # Double space yields an empty word
    assert tokenize_query("foo  bar") == ["foo", "bar"]


def test_tokenize_every_special_character():
    for char in "@#$%^&*_=+.,-":
        assert tokenize_query(f"ab{char}cd") == ["ab", "cd", "abcd", f"ab{char}cd"]


def test_record_text_flattens_and_cleans():
    record = Metadata(url="https://ex.com/a-b", site_name="Ex", title="T", keywords=("x", "y"))

    # description and author are absent but keep their slots
    assert record_text(record) == "https://excom/ab ex t  xy "


def test_empty_collection():
    assert filter_metadata([], "anything") == []


def test_empty_query_returns_input_unchanged(records):
    result = filter_metadata(records, "")

    assert result is records
    assert [r.title for r in result] == [r.title for r in records]


@pytest.mark.parametrize("bad_records", [None, "not a list", 42, {"title": "x"}])
def test_invalid_records_give_empty_list(bad_records):
    assert filter_metadata(bad_records, "cat") == []


@pytest.mark.parametrize("bad_query", [None, 5, ["cat"]])
def test_invalid_query_gives_empty_list(records, bad_query):
    assert filter_metadata(records, bad_query) == []


def test_special_character_query_matches_joined_form(records):
    result = filter_metadata(records, "light-year")

    assert [r.title for r in result] == ["Lightyear Chronicles"]


def test_multi_word_query_is_or(records):
    result = filter_metadata(records, "cat dog")

    assert [r.title for r in result] == ["Cat food reviews", "Dog park guide"]


def test_matching_is_case_insensitive():
    records = [Metadata(title="Example")]

    assert filter_metadata(records, "EXAMPLE") == records


def test_single_letter_query_matches_nothing(records):
    assert filter_metadata(records, "a") == []


def test_substring_not_whole_word(records):
    result = filter_metadata(records, "ark")

    assert [r.title for r in result] == ["Dog park guide"]


def test_every_field_is_searched(records):
    assert [r.title for r in filter_metadata(records, "parks")] == ["Dog park guide"]
    assert [r.title for r in filter_metadata(records, "tanks")] == ["Fish tank basics"]
    assert [r.title for r in filter_metadata(records, "doe")] == ["Lightyear Chronicles"]
    assert [r.title for r in filter_metadata(records, "pets")] == ["Cat food reviews"]


def test_special_characters_in_records_are_ignored():
    records = [Metadata(title="e-mail tips")]

    assert filter_metadata(records, "email") == records
    # The record text has no hyphen left, but "e-mail" also expands to "email"
    assert filter_metadata(records, "e-mail") == records


def test_order_preserved_and_input_untouched(records):
    snapshot = list(records)

    result = filter_metadata(records, "guide tank cat")

    assert [r.title for r in result] == ["Cat food reviews", "Dog park guide", "Fish tank basics"]
    assert records == snapshot


def test_tuple_input_returns_list(records):
    result = filter_metadata(tuple(records), "fish")

    assert isinstance(result, list)
    assert len(result) == 1


def test_mapping_records_filter_like_models():
    plain = [
        {"url": None, "siteName": "Wikipedia", "title": "Main Page",
         "description": None, "keywords": ["wiki"], "author": None},
        {"title": "Other"},
    ]

    result = filter_metadata(plain, "wikipedia")

    assert result == [plain[0]]
    assert record_text(plain[0]) == record_text(Metadata.model_validate(plain[0]))


def test_metadata_filter_reusable(records):
    metadata_filter = MetadataFilter("Fish")

    assert metadata_filter.tokens == ["fish"]
    assert metadata_filter.apply(records) == [records[2]]
    assert metadata_filter.apply(records[:2]) == []
    assert str(metadata_filter) == "MetadataFilter(tokens: fish)"
    assert str(MetadataFilter("")) == "MetadataFilter(matches everything)"
