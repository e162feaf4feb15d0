#!/usr/bin/env python3
"""CLI tool for seeding the search term catalog.

Seeds the bundled list of common marketplace terms, or a JSON file holding
a list of {"term", "type", "categoryId"?, "metadata"?} objects. Existing
(normalized term, type) pairs are skipped, so it is safe to re-run.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from sqlmodel import Session, SQLModel, create_engine

import search_fallback.models  # noqa: F401 — register SQLModel tables
from search_fallback.catalog_data import COMMON_SEARCH_TERMS
from search_fallback.errors import SearchFallbackError
from search_fallback.services.catalog import CatalogService

DEFAULT_DB_URL = "sqlite:////app/data/search.db"


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Seed the search term catalog (idempotent)."
    )
    parser.add_argument(
        "--file",
        "-f",
        type=str,
        default=None,
        help="JSON file with a list of terms (default: bundled common terms)",
    )
    parser.add_argument(
        "--db-url",
        type=str,
        default=os.environ.get("DB_URL", DEFAULT_DB_URL),
        help=f"SQLAlchemy database URL (default: $DB_URL or {DEFAULT_DB_URL})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log each step",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.file:
        try:
            with open(args.file, encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Error reading {args.file}: {e}", file=sys.stderr)
            return 1
        if isinstance(entries, dict):
            entries = entries.get("terms", [])
        if not isinstance(entries, list):
            print("Error: expected a JSON list of terms", file=sys.stderr)
            return 1
    else:
        entries = COMMON_SEARCH_TERMS

    connect_args = {"check_same_thread": False} if args.db_url.startswith("sqlite") else {}
    engine = create_engine(args.db_url, connect_args=connect_args)
    SQLModel.metadata.create_all(engine)

    try:
        with Session(engine) as session:
            inserted = CatalogService().seed(session, entries)
    except SearchFallbackError as e:
        print(f"Error seeding catalog: {e}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()

    print(f"Inserted {inserted} of {len(entries)} term(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
