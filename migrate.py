#!/usr/bin/env python3
"""
Provision the JSON data files used by the Barbershop Scheduling API.

Creates the data directory and an empty ``customers.json``,
``services.json`` and ``appointments.json`` where they do not exist.
Existing files are never touched.

Usage:
    python migrate.py
    python migrate.py --data-dir ./data
"""

import argparse
import sys

from barbershop_api.app.core.errors import StorageFailure
from barbershop_api.app.core.store import COLLECTIONS, RecordStore, get_data_dir


def main():
    ap = argparse.ArgumentParser(description="Create empty collection files for the scheduling API.")
    ap.add_argument("--data-dir", default=None, help="Data directory (defaults to DATA_DIR / ./data)")
    args = ap.parse_args()

    store = RecordStore(args.data_dir or get_data_dir())
    try:
        for name in COLLECTIONS:
            path = store.path_for(name)
            if store.ensure_collection(name):
                print(f"Created {path}")
            else:
                print(f"{path} already exists, skipping")
    except StorageFailure as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        sys.exit(1)
    print("Migration (JSON files) complete.")


if __name__ == "__main__":
    main()
