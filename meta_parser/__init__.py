"""
meta_parser

Pattern-based <head> metadata extraction plus query filtering over the
extracted records.
- Extractor: url, site name, title, description, keywords, author from <head>
- Filter: tokenizing, OR-ed substring search over a collection of records

Public API surface:
  Core operations  — extract_metadata, filter_metadata
  Core classes     — Extractor, MetadataFilter, Preprocessor
  Data model       — Metadata
  Batch / storage  — MetaParser, MetadataStore
  Error types      — MetaParserError, DocumentLoadError, StoreError
"""

# --- Core operations (never raise) ---
from .extractor import Extractor, extract_metadata
from .filter import MetadataFilter, filter_metadata, tokenize_query
from .preprocessor import Preprocessor

# --- Data model ---
from .schemas import Metadata

# --- File layer ---
from .main import MetaParser
from .metadata_store import MetadataStore

# --- Exceptions (raised by the file layer only) ---
from .exceptions import MetaParserError, DocumentLoadError, StoreError

__version__ = "0.1.0"
__all__ = [
    "extract_metadata",
    "filter_metadata",
    "tokenize_query",
    "Extractor",
    "MetadataFilter",
    "Preprocessor",
    "Metadata",
    "MetaParser",
    "MetadataStore",
    "MetaParserError",
    "DocumentLoadError",
    "StoreError",
]
