#!/usr/bin/env python3
"""
CLI Setup Script
Provisions the DynamoDB tables and checks connectivity to the store and
image buckets before the dashboard is deployed.
"""

import argparse
import os
import sys

# Unbuffered output for real-time progress
os.environ['PYTHONUNBUFFERED'] = '1'

from raed_admin.core.config import BUCKETS, AppConfig
from raed_admin.core.errors import ConfigurationError, StoreError
from raed_admin.data.storage import ObjectStorage
from raed_admin.data.store import DataStore


def create_tables(config: AppConfig) -> int:
    """Create every missing table."""
    print(f"Creating tables with prefix '{config.table_prefix}'...")
    store = DataStore(config)
    try:
        created = store.create_tables()
    except StoreError as e:
        print(f"  FAILED: {e}")
        return 1

    for table_name in created:
        print(f"  created: {table_name}")
    print(f"Done: {len(created)} table(s) created")
    return 0


def check_connections(config: AppConfig) -> int:
    """Test the store and each image bucket."""
    failures = 0

    ok, message = DataStore(config).test_connection()
    print(f"{'OK    ' if ok else 'FAILED'} store: {message}")
    failures += 0 if ok else 1

    storage = ObjectStorage(config)
    for bucket in BUCKETS:
        ok, message = storage.test_connection(bucket)
        print(f"{'OK    ' if ok else 'FAILED'} {bucket}: {message}")
        failures += 0 if ok else 1

    print("\n" + "=" * 60)
    print("ALL CHECKS PASSED" if failures == 0 else f"{failures} CHECK(S) FAILED")
    print("=" * 60)
    return 0 if failures == 0 else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Al-Raed admin dashboard setup")
    parser.add_argument('--create-tables', action='store_true', help="create missing DynamoDB tables")
    parser.add_argument('--check', action='store_true', help="test store and bucket connectivity")
    args = parser.parse_args(argv)

    if not args.create_tables and not args.check:
        parser.print_help()
        return 2

    try:
        config = AppConfig.load().validate()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        for name in e.missing:
            print(f"  missing: {name}")
        return 1

    status = 0
    if args.create_tables:
        status = create_tables(config)
    if args.check and status == 0:
        status = check_connections(config)
    return status


if __name__ == "__main__":
    sys.exit(main())
