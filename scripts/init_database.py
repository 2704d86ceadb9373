#!/usr/bin/env python3
"""
Create the procurement tables (companies, rfqs, open tenders and their line items).

Uses DATABASE_URL environment variable. Does NOT drop existing tables.
"""

from __future__ import annotations
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

# Make sure src is on sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect
from src.database.store_real import DocumentStore
from src.errors import StorageError


def main() -> int:
    url = os.environ.get("DATABASE_URL")
    if not url:
        print("DATABASE_URL is not set", file=sys.stderr)
        return 1

    store = DocumentStore(connection_string=url)
    if not store.ping():
        print("❌ Failed to connect to database", file=sys.stderr)
        return 2
    print("✅ Database connection OK")

    try:
        store.create_tables()
    except StorageError as e:
        print(f"❌ Failed to create tables: {e.details or e}", file=sys.stderr)
        return 3

    tables = inspect(store.engine).get_table_names()
    print("✅ App tables now exist:", sorted(tables))
    return 0


if __name__ == "__main__":
    sys.exit(main())
