"""
Metadata filtering module.

Selects the records in a collection whose combined text contains any token
derived from a free-text query. Matching is a boolean raw-substring test,
case-insensitive, with no ranking.
"""

import re
from collections.abc import Mapping
from typing import Any, Sequence, Union

from .schemas import FIELD_KEYS, Metadata
from .logger import get_module_logger

logger = get_module_logger("filter")

SPECIAL_CHARS = "@#$%^&*_=+.,-"
SPECIAL_CHARS_PATTERN = re.compile(f"[{re.escape(SPECIAL_CHARS)}]")

Record = Union[Metadata, Mapping]


def expand_word(word: str) -> list[str]:
    """
    Expand one query word into its candidate tokens.

    A word with special characters yields its pieces, the word with the
    special characters removed, and the word itself:

        light-year → ["light", "year", "lightyear", "light-year"]

    Any other word is returned alone.
    """
    if not SPECIAL_CHARS_PATTERN.search(word):
        return [word]
    return [
        *SPECIAL_CHARS_PATTERN.split(word),
        SPECIAL_CHARS_PATTERN.sub('', word),
        word,
    ]


def tokenize_query(query: str) -> list[str]:
    """Split a query on single spaces, expand each word, and keep tokens longer than one character."""
    tokens = []
    for word in query.split(' '):
        tokens.extend(expand_word(word))
    return [token for token in tokens if len(token) > 1]


def _field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else str(item) for item in value)
    return str(value)


def _record_values(record: Any) -> list[Any]:
    """Field values in interchange order; plain mappings may use siteName or site_name."""
    if isinstance(record, Metadata):
        record = record.to_dict()
    if not isinstance(record, Mapping):
        return []
    values = []
    for key in FIELD_KEYS:
        if key == "siteName" and key not in record:
            values.append(record.get("site_name"))
        else:
            values.append(record.get(key))
    return values


def record_text(record: Record) -> str:
    """
    Flatten a record into the string queries are matched against.

    Values are joined with single spaces (absent fields still take their
    slot), keywords with commas; the result is lowercased and stripped of
    special characters.
    """
    combined = " ".join(_field_text(value) for value in _record_values(record))
    return SPECIAL_CHARS_PATTERN.sub('', combined).lower()


class MetadataFilter:
    """
    Query filter over Metadata records.

    The query is tokenized once at construction; apply() can then be called
    on any number of collections.
    """

    def __init__(self, query: str):
        """
        Initialize a MetadataFilter instance.

        Args:
            query: Free-text search query; words are OR-ed together
        """
        self.query = query
        self.tokens = [token.lower() for token in tokenize_query(query)]

    def matches(self, record: Record) -> bool:
        """True if any query token is a substring of the record's flattened text."""
        text = record_text(record)
        return any(token in text for token in self.tokens)

    def apply(self, records: Sequence[Record]) -> list[Record]:
        """
        Return the records that match, in their original order.

        An empty query matches everything and returns records itself.
        """
        if not self.query:
            return records
        matched = [record for record in records if self.matches(record)]
        logger.debug(f"Query {self.query!r}: {len(matched)}/{len(records)} records matched")
        return matched

    def __str__(self):
        if not self.query:
            return "MetadataFilter(matches everything)"
        return f"MetadataFilter(tokens: {', '.join(self.tokens) or 'none'})"


def filter_metadata(records: Any, query: Any) -> list:
    """
    Filter records down to those matching query.

    Never raises: records that are not a list or tuple, or a query that is
    not a string, produce an empty list.

    Args:
        records: Metadata records (or mappings with the same keys)
        query: Search query

    Returns:
        The matching records in input order
    """
    if not isinstance(records, (list, tuple)) or not isinstance(query, str):
        logger.debug("Invalid records or query, returning no results")
        return []
    return MetadataFilter(query).apply(records)
