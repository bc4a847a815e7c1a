#!/usr/bin/env python3
"""
CLI script to search stored metadata records.

Step 2 of the two-step workflow:
  Step 1: run_extractor.py → extracts records from HTML, saves to the store
  Step 2: run_search.py    → filters stored records by a query (no HTML needed)

Usage:
    python run_search.py "light-year"
    python run_search.py "cat dog" -o matches.json
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from meta_parser.main import MetaParser
from meta_parser.metadata_store import MetadataStore
from meta_parser.logger import setup_logger, level_from_name


def main():
    parser = argparse.ArgumentParser(description="Search stored <head> metadata records")
    parser.add_argument("query", help="Search query; words are OR-ed, empty matches everything")
    parser.add_argument("--store-dir", help="Record store directory (default: $META_PARSER_STORE_DIR or ./metadata_store)")
    parser.add_argument("--output", "-o", help="Output JSON file (default: print to stdout)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else level_from_name(os.getenv("META_PARSER_LOG_LEVEL"))
    setup_logger(level=level)

    meta_parser = MetaParser(store=MetadataStore(args.store_dir))
    matches = meta_parser.search(args.query)

    output = json.dumps([record.to_dict() for record in matches], indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"{len(matches)} matches saved to: {args.output}", file=sys.stderr)
    else:
        print(output)


if __name__ == "__main__":
    main()
