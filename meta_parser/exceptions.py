"""
Custom exceptions for meta_parser.

Error philosophy:
  - Extractor / Filter  → NEVER RAISE: bad input yields the all-absent record
                          or an empty list.
  - DocumentLoadError   → FAIL for one document: the file could not be read.
  - StoreError          → NON-FATAL: the record was extracted but not persisted.

Only the file and store layer around the core raises; a batch run reports the
failure for that one file and moves on to the next.
"""

from typing import Optional


class MetaParserError(Exception):
    """Base exception for all meta_parser errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DocumentLoadError(MetaParserError):
    """
    Raised when an HTML document cannot be read from disk.

    The document is skipped; other documents in the batch are unaffected.
    """

    def __init__(
        self,
        message: str,
        path: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.path = path

    def to_response(self) -> dict:
        """Convert to the per-file error entry written by the CLI."""
        return {
            "error": "DocumentLoadError",
            "message": self.message,
            "path": self.path,
            "details": self.details
        }


class StoreError(MetaParserError):
    """
    Raised when an extracted record cannot be written to the record store.

    Non-fatal - the extracted record is still returned to the caller.
    """

    def __init__(
        self,
        message: str,
        key: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.key = key
