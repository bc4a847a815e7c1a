"""
Pattern-based <head> metadata extractor.

Pulls six descriptive fields (url, site name, title, description, keywords,
author) out of the <head> of an HTML document with regular expressions
instead of a DOM parser.

Pipeline position: Stage 2 of 2 (Preprocessor → Extractor).
Input:  HTML string (possibly malformed, possibly None)
Output: Metadata

Known limitation: meta tags only match when their attributes come in the
documented order, property/name before content:

    <meta property="og:url" content="...">      matches
    <meta content="..." property="og:url">      does not

Changing this changes which documents yield which values, so it stays.
"""

import re
from typing import Optional

from .preprocessor import Preprocessor
from .schemas import Metadata
from .logger import get_module_logger

logger = get_module_logger("extractor")

# All patterns: case-insensitive, non-greedy, one capture group, first match wins.
# DOTALL only matters for input that bypassed Preprocessor.flatten().
HEAD_PATTERN = re.compile(r'<head>(.*?)</head>', re.IGNORECASE | re.DOTALL)
TITLE_PATTERN = re.compile(r'<title>(.*?)</title>', re.IGNORECASE | re.DOTALL)


def _meta_pattern(attribute: str, value: str) -> re.Pattern:
    """<meta {attribute}="{value}" content="..."> with an optional closing slash."""
    return re.compile(
        rf'<meta\s*{attribute}="{re.escape(value)}"\s*content="(.*?)"\s*/?>',
        re.IGNORECASE | re.DOTALL
    )


URL_PATTERN = _meta_pattern("property", "og:url")
SITE_NAME_PATTERN = _meta_pattern("property", "og:site_name")
OG_DESCRIPTION_PATTERN = _meta_pattern("property", "og:description")
DESCRIPTION_PATTERN = _meta_pattern("name", "description")
KEYWORDS_PATTERN = _meta_pattern("name", "keywords")
AUTHOR_PATTERN = _meta_pattern("name", "author")


def _search(pattern: re.Pattern, text: Optional[str]) -> Optional[str]:
    """First capture of pattern in text; None when text is None or nothing matches."""
    if text is None:
        return None
    match = pattern.search(text)
    if not match:
        return None
    # Empty captures are treated as missing
    return match.group(1) or None


class Extractor:
    """Extracts a Metadata record from an HTML document's <head>."""

    def __init__(self, preprocessor: Optional[Preprocessor] = None):
        self.preprocessor = preprocessor or Preprocessor()

    def extract(self, html: Optional[str]) -> Metadata:
        """
        Extract metadata from an HTML document.

        Never raises: missing, empty or non-string input and documents without
        a <head> all produce Metadata.empty().

        Args:
            html: Complete HTML document text

        Returns:
            Metadata with each field populated or None
        """
        if not isinstance(html, str) or not html:
            logger.debug(f"Nothing to extract from {type(html).__name__} input")
            return Metadata.empty()

        head = self.find_head(html)
        if head is None:
            logger.debug("No <head> span found")
            return Metadata.empty()

        return Metadata(
            url=_search(URL_PATTERN, head),
            site_name=_search(SITE_NAME_PATTERN, head),
            title=_search(TITLE_PATTERN, head),
            # og:description wins; plain description is the fallback
            description=(_search(OG_DESCRIPTION_PATTERN, head)
                         or _search(DESCRIPTION_PATTERN, head)),
            keywords=self._split_keywords(_search(KEYWORDS_PATTERN, head)),
            author=_search(AUTHOR_PATTERN, head),
        )

    def find_head(self, html: str) -> Optional[str]:
        """
        Inner text of the first <head>...</head> span, line breaks flattened.

        Only the first span counts, even if a malformed document has several.
        """
        return _search(HEAD_PATTERN, self.preprocessor.flatten(html))

    @staticmethod
    def _split_keywords(content: Optional[str]) -> Optional[list[str]]:
        """Split on commas without trimming; Metadata drops empties and duplicates."""
        if content is None:
            return None
        return content.split(',')


# Extractor holds no per-call state, so one instance serves every caller
_default_extractor = Extractor()


def extract_metadata(html: Optional[str]) -> Metadata:
    """Convenience function to extract metadata from an HTML string."""
    return _default_extractor.extract(html)
