"""
Main orchestrator for meta_parser.

Wires the file layer around the two core operations: documents are read and
decoded (Preprocessor), their <head> metadata extracted (Extractor) and
optionally persisted (MetadataStore); stored or given records are then
searched (MetadataFilter).
"""

import hashlib
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .preprocessor import Preprocessor
from .extractor import Extractor
from .filter import filter_metadata
from .metadata_store import MetadataStore
from .schemas import Metadata
from .exceptions import DocumentLoadError, MetaParserError
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")


class MetaParser:
    """
    Batch extraction and search over HTML documents.

    1. Preprocessor: reads bytes, detects charset, decodes
    2. Extractor: pulls the six <head> fields into a Metadata record
    3. MetadataStore (optional): persists records for later searches
    4. Filter: selects records matching a query
    """

    def __init__(
        self,
        store: Optional[MetadataStore] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.preprocessor = Preprocessor()
        self.extractor = Extractor(preprocessor=self.preprocessor)
        self.store = store

        logger.info(f"MetaParser initialized (store: {store.store_dir if store else 'none'})")

    def extract(
        self,
        html: Optional[str],
        source_name: Optional[str] = None,
        extra_info: Optional[dict] = None
    ) -> Metadata:
        """
        Extract metadata from an HTML string, storing it when a store is configured.

        Raises:
            StoreError: If the record was extracted but could not be stored
        """
        record = self.extractor.extract(html)

        if self.store is not None and isinstance(html, str) and html:
            self.store.put(html, record, source_name=source_name, extra_info=extra_info)

        return record

    def extract_file(self, file_path: Union[str, Path]) -> Metadata:
        """
        Read, decode and extract an HTML file.

        Raises:
            DocumentLoadError: If the file cannot be read
            StoreError: If the record cannot be stored
        """
        file_path = Path(file_path)

        # Read raw bytes so the page's own <meta charset> picks the decoder
        try:
            raw_bytes = file_path.read_bytes()
        except OSError as e:
            raise DocumentLoadError(f"Cannot read {file_path}: {e}", path=str(file_path),
                                    details={"errno": e.errno}) from e

        html, charset = self.preprocessor.decode(raw_bytes)
        logger.info(f"Extracting: {file_path.name} ({charset})")

        return self.extract(html, source_name=self.source_name_for(file_path),
                            extra_info={"charset": charset, "path": str(file_path.resolve())})

    @staticmethod
    def source_name_for(file_path: Union[str, Path]) -> str:
        """
        Store key source name for a file: its stem plus a short hash of the resolved path.

        a/index.html and b/index.html share a stem but get different keys.
        """
        file_path = Path(file_path)
        path_hash = hashlib.md5(str(file_path.resolve()).encode('utf-8', errors='replace')).hexdigest()[:8]
        return f"{file_path.stem}-{path_hash}"

    def extract_files(self, file_paths: Iterable[Union[str, Path]]) -> list[dict]:
        """
        Extract every file, reporting failures per file instead of raising.

        Returns:
            One entry per file: {"file", "status", "metadata"} on success,
            {"file", "status", "error"} on failure
        """
        results = []
        for file_path in file_paths:
            path = Path(file_path)
            try:
                record = self.extract_file(path)
            except MetaParserError as e:
                logger.warning(f"Failed: {path.name}: {e.message}")
                results.append({"file": path.name, "status": "error", "error": e.message})
                continue
            results.append({"file": path.name, "status": "success", "metadata": record.to_dict()})

        ok = sum(1 for r in results if r["status"] == "success")
        logger.info(f"Complete: {ok}/{len(results)} files extracted")
        return results

    def search(self, query: str, records: Optional[Sequence[Metadata]] = None) -> list[Metadata]:
        """
        Filter records by query.

        Args:
            query: Search query
            records: Records to search; defaults to everything in the store

        Returns:
            Matching records in order
        """
        if records is None:
            records = self.store.load_all() if self.store is not None else []
        results = filter_metadata(records, query)
        logger.info(f"Search {query!r}: {len(results)} of {len(records)} records")
        return results
