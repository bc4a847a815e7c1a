"""
File-based store for extracted Metadata records.

One JSON file per source document, so a batch run can extract now and the
search script can filter later without touching the HTML again. Files are
plain interchange JSON and can be inspected or edited by hand.
"""

import hashlib
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .schemas import Metadata
from .exceptions import StoreError
from .logger import get_module_logger

logger = get_module_logger("metadata_store")

STORE_DIR_ENV = "META_PARSER_STORE_DIR"


class MetadataStore:
    """
    File-based store for Metadata records.

    Stores each record as a JSON file in the store directory, named by the
    source name when given, otherwise by a hash of the document.
    """

    def __init__(self, store_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the record store.

        Args:
            store_dir: Directory to store record files.
                       Defaults to $META_PARSER_STORE_DIR, then ./metadata_store/
        """
        if store_dir is None:
            store_dir = os.getenv(STORE_DIR_ENV) or Path.cwd() / "metadata_store"

        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Metadata store initialized at: {self.store_dir}")

    def _generate_key(self, html: str, source_name: Optional[str] = None) -> str:
        """
        Generate a store key for a document.

        Uses source_name if provided (e.g., filename), otherwise hashes the HTML.
        """
        if source_name:
            # Readable keys keep the store directory easy to audit
            safe_name = "".join(c if c.isalnum() or c in '-_.' else '_' for c in source_name)
            return safe_name.replace('.html', '').replace('.htm', '')

        # Everything extracted lives in <head>, which sits in the first few KB
        html_sample = (html or "")[:10000]
        return hashlib.md5(html_sample.encode('utf-8', errors='replace')).hexdigest()[:12]

    def _path_for(self, key: str) -> Path:
        return self.store_dir / f"{key}.json"

    @staticmethod
    def _load_record(data: dict) -> Metadata:
        return Metadata.model_validate(data['metadata'])

    def get(self, html: str, source_name: Optional[str] = None) -> Optional[Metadata]:
        """
        Retrieve the stored record for a document.

        Args:
            html: HTML content (used for key generation if no source_name)
            source_name: Optional source identifier (e.g., filename)

        Returns:
            Metadata if stored and readable, None otherwise
        """
        key = self._generate_key(html, source_name)
        record_file = self._path_for(key)

        if not record_file.exists():
            logger.debug(f"No stored record for key: {key}")
            return None

        try:
            record = self._load_record(json.loads(record_file.read_text(encoding="utf-8")))
        except (OSError, ValueError, KeyError, ValidationError) as e:
            logger.warning(f"Failed to load stored record {key}: {e}")
            return None

        logger.debug(f"Loaded stored record for key: {key}")
        return record

    def put(
        self,
        html: str,
        record: Metadata,
        source_name: Optional[str] = None,
        extra_info: Optional[dict] = None
    ) -> str:
        """
        Store a record.

        Args:
            html: HTML content the record was extracted from
            record: Metadata to store
            source_name: Optional source identifier
            extra_info: Optional extra information to store (e.g. charset)

        Returns:
            Key used

        Raises:
            StoreError: If the record file cannot be written
        """
        key = self._generate_key(html, source_name)
        record_file = self._path_for(key)

        data = {
            "key": key,
            "source_name": source_name,
            "created_at": datetime.now().isoformat(),
            "metadata": record.to_dict(),
            "extra_info": extra_info or {}
        }

        try:
            record_file.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise StoreError(f"Failed to write record: {e}", key=key,
                             details={"file": str(record_file)}) from e

        logger.info(f"Stored record with key: {key} -> {record_file}")
        return key

    def exists(self, html: str, source_name: Optional[str] = None) -> bool:
        """Check if a record is stored."""
        return self._path_for(self._generate_key(html, source_name)).exists()

    def delete(self, html: str, source_name: Optional[str] = None) -> bool:
        """Delete a stored record."""
        key = self._generate_key(html, source_name)
        record_file = self._path_for(key)

        if record_file.exists():
            record_file.unlink()
            logger.info(f"Deleted record for key: {key}")
            return True
        return False

    def clear(self) -> int:
        """Delete all stored records. Returns count of deleted files."""
        count = 0
        for record_file in self.store_dir.glob("*.json"):
            record_file.unlink()
            count += 1
        logger.info(f"Cleared {count} stored records")
        return count

    def list_stored(self) -> list[dict]:
        """List all stored entries (without their metadata)."""
        entries = []
        for record_file in sorted(self.store_dir.glob("*.json")):
            try:
                data = json.loads(record_file.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning(f"Skipping unreadable record file {record_file.name}: {e}")
                continue
            entries.append({
                "key": data.get("key"),
                "source_name": data.get("source_name"),
                "created_at": data.get("created_at"),
                "file": str(record_file)
            })
        return entries

    def load_all(self) -> list[Metadata]:
        """All stored records, ordered by key. Corrupt files are skipped."""
        records = []
        for record_file in sorted(self.store_dir.glob("*.json")):
            try:
                records.append(self._load_record(json.loads(record_file.read_text(encoding="utf-8"))))
            except (OSError, ValueError, KeyError, ValidationError) as e:
                logger.warning(f"Skipping unreadable record file {record_file.name}: {e}")
        return records
