"""
Shared fixtures: an in-memory stand-in for DataStore and a signed-in session.
"""

from copy import deepcopy
from datetime import datetime, timedelta, timezone

import pytest

from raed_admin.core.config import AppConfig
from raed_admin.core.errors import StoreError
from raed_admin.data.store import KEY_SCHEMAS, matches_term, sort_rows
from raed_admin.services.auth import AdminSession

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


class FakeStore:
    """Same interface as DataStore, backed by dictionaries."""

    def __init__(self):
        self.tables = {entity: [] for entity in KEY_SCHEMAS}
        self.calls = []
        self.failures = {}

    def fail(self, method, entity, error=None):
        self.failures[(method, entity)] = error or StoreError("boom", code="InternalServerError")

    def _call(self, method, entity):
        self.calls.append((method, entity))
        error = self.failures.get((method, entity))
        if error is not None:
            raise error

    def _key(self, entity, key):
        if isinstance(key, dict):
            return key
        return {KEY_SCHEMAS[entity][0]: key}

    def _find(self, entity, key):
        key = self._key(entity, key)
        for row in self.tables[entity]:
            if all(row.get(k) == v for k, v in key.items()):
                return row
        return None

    def seed(self, entity, *rows):
        self.tables[entity].extend(deepcopy(list(rows)))

    def select(self, entity, filters=None, in_filter=None, order_by=None,
               descending=False, limit=None, projection=None):
        self._call("select", entity)
        rows = [
            row for row in self.tables[entity]
            if all(row.get(k) == v for k, v in (filters or {}).items())
        ]
        if in_filter is not None:
            column, values = in_filter
            values = list(values)
            rows = [row for row in rows if row.get(column) in values]
        if projection:
            rows = [{k: row[k] for k in projection if k in row} for row in rows]
        rows = deepcopy(rows)
        if order_by:
            rows = sort_rows(rows, order_by, descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    def get(self, entity, key):
        self._call("get", entity)
        row = self._find(entity, key)
        return deepcopy(row) if row else None

    def search(self, entity, columns, term, limit=20, order_by=None, descending=False):
        self._call("search", entity)
        rows = deepcopy(self.tables[entity])
        if order_by:
            rows = sort_rows(rows, order_by, descending)
        return [row for row in rows if matches_term(row, columns, term)][:limit]

    def count_by(self, entity, column):
        self._call("count_by", entity)
        counts = {}
        for row in self.tables[entity]:
            value = row.get(column)
            if value is not None:
                counts[value] = counts.get(value, 0) + 1
        return counts

    def insert(self, entity, item):
        self._call("insert", entity)
        hash_key = KEY_SCHEMAS[entity][0]
        if self._find(entity, item[hash_key]) is not None:
            raise StoreError("The conditional request failed", code="ConditionalCheckFailedException")
        self.tables[entity].append(deepcopy(item))
        return dict(item)

    def insert_many(self, entity, items):
        self._call("insert_many", entity)
        self.tables[entity].extend(deepcopy(items))

    def update(self, entity, key, changes):
        self._call("update", entity)
        row = self._find(entity, key)
        if row is None:
            raise StoreError("The conditional request failed", code="ConditionalCheckFailedException")
        for column, value in changes.items():
            if value is None:
                row.pop(column, None)
            else:
                row[column] = value
        return deepcopy(row)

    def delete(self, entity, key):
        self._call("delete", entity)
        row = self._find(entity, key)
        if row is not None:
            self.tables[entity].remove(row)

    def delete_where(self, entity, filters):
        self._call("delete_where", entity)
        doomed = [
            row for row in self.tables[entity]
            if all(row.get(k) == v for k, v in filters.items())
        ]
        for row in doomed:
            self.tables[entity].remove(row)
        return len(doomed)


class FakeStorage:
    def __init__(self):
        self.uploads = []

    def upload_image(self, file_obj, filename, bucket=None):
        self.uploads.append((bucket, filename, file_obj))
        return f"https://cdn.example.com/{bucket}/{len(self.uploads)}-{filename}"


@pytest.fixture
def config():
    return AppConfig(
        aws_region="us-east-1",
        table_prefix="test-",
        bucket_prefix="raed",
        cognito_client_id="client-123",
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def session(store, storage):
    return AdminSession(
        user_id="admin-1",
        email="admin@raed.sa",
        access_token="token",
        expires_at=NOW + timedelta(hours=1),
        store=store,
        storage=storage,
        clock=lambda: NOW,
    )


@pytest.fixture
def expired_session(store, storage):
    return AdminSession(
        user_id="admin-1",
        email="admin@raed.sa",
        access_token="token",
        expires_at=NOW - timedelta(seconds=1),
        store=store,
        storage=storage,
        clock=lambda: NOW,
    )
