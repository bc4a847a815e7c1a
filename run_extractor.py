#!/usr/bin/env python3
"""
CLI script to extract <head> metadata from HTML files.

Records are written to the metadata store so run_search.py can filter them
later without re-reading the HTML.

Usage:
    python run_extractor.py page1.html page2.html
    python run_extractor.py pages/*.html -o metadata.json
    python run_extractor.py page1.html --no-store
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
    parser = argparse.ArgumentParser(description="Extract <head> metadata from HTML files")
    parser.add_argument("files", nargs="+", help="HTML files to process")
    parser.add_argument("--output", "-o", help="Output JSON file (default: print to stdout)")
    parser.add_argument("--store-dir", help="Record store directory (default: $META_PARSER_STORE_DIR or ./metadata_store)")
    parser.add_argument("--no-store", action="store_true", help="Don't persist extracted records")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else level_from_name(os.getenv("META_PARSER_LOG_LEVEL"))
    setup_logger(level=level)

    store = None if args.no_store else MetadataStore(args.store_dir)
    meta_parser = MetaParser(store=store)

    results = meta_parser.extract_files(args.files)

    for result in results:
        if result["status"] == "success":
            title = result["metadata"].get("title") or "(no title)"
            print(f"  ✓ {result['file']}: {title}", file=sys.stderr)
        else:
            print(f"  ✗ {result['file']}: {result['error']}", file=sys.stderr)

    # ensure_ascii=False keeps non-ASCII titles readable
    output = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"\nSaved to: {args.output}", file=sys.stderr)
    else:
        print(output)


if __name__ == "__main__":
    main()
