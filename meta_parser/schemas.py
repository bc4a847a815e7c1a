"""
Pydantic schema for the record passed between the extractor and the filter.

Metadata: produced by the Extractor (one per HTML document), persisted by the
MetadataStore, consumed read-only by the Filter.

Data flow:
  HTML → Extractor → Metadata → MetadataStore (optional) → Filter → list[Metadata]
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Interchange key order; the filter flattens values in this order too
FIELD_KEYS = ("url", "siteName", "title", "description", "keywords", "author")


class Metadata(BaseModel):
    """
    Descriptive fields from a document's <head>.

    Every field is either populated or None ("absent"). Empty strings and
    empty keyword lists are never stored: validation collapses them to None,
    so a record built from JSON obeys the same rules as one built by the
    Extractor.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: Optional[str] = None                                   # og:url
    site_name: Optional[str] = Field(default=None, alias="siteName")  # og:site_name
    title: Optional[str] = None                                 # <title>
    description: Optional[str] = None                           # og:description or description
    keywords: Optional[tuple[str, ...]] = None                  # keywords, split on commas
    author: Optional[str] = None                                # author

    @field_validator("url", "site_name", "title", "description", "author", mode="before")
    @classmethod
    def _empty_string_is_absent(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("keywords", mode="before")
    @classmethod
    def _clean_keywords(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            # A bare string is left for pydantic to reject
            return value
        seen = set()
        keywords = []
        for keyword in value:
            if keyword == "" or keyword in seen:
                continue
            seen.add(keyword)
            keywords.append(keyword)
        return tuple(keywords) or None

    @classmethod
    def empty(cls) -> "Metadata":
        """The all-absent record."""
        return cls()

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())

    def to_dict(self) -> dict:
        """Interchange form: the six camelCase keys, keywords as a list."""
        return self.model_dump(mode="json", by_alias=True)
