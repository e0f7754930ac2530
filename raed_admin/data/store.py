"""
DynamoDB table access for the admin dashboard.

Every logical operation maps to one table call (plus pagination). An equality
filter on the hash key or an indexed column becomes a query; any other
filter is a scan expression. Sorting and limits happen client-side.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import ClientError

from ..core.config import AppConfig, TABLE_NAMES
from ..core.errors import SessionExpiredError, StoreError
from ..core.utils import from_store, to_store

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Error codes that mean our credentials are no longer accepted
SESSION_ERROR_CODES = {
    'ExpiredTokenException',
    'UnrecognizedClientException',
    'NotAuthorizedException',
    'InvalidSignatureException',
}

# DynamoDB caps IN-list filters at 100 operands
IN_FILTER_CHUNK = 100

# Key schema per logical table: (hash key, hash type, range key, range type)
KEY_SCHEMAS = {
    "products": ("id", "S", None, None),
    "categories": ("id", "S", None, None),
    "cutting_methods": ("id", "N", None, None),
    "product_cutting_methods": ("product_id", "S", "cutting_method_id", "N"),
    "orders": ("id", "S", None, None),
    "order_items": ("id", "S", None, None),
    "profiles": ("id", "S", None, None),
    "banners": ("id", "S", None, None),
    "app_settings": ("id", "S", None, None),
}

# Secondary indexes for the common foreign-key lookups
SECONDARY_INDEXES = {
    "products": [("category-index", "category_id", "S")],
    "order_items": [("order-index", "order_id", "S")],
}


def raise_store_error(error: ClientError, action: str) -> None:
    """Re-raise a ClientError as the matching dashboard error."""
    store_error = StoreError.from_client_error(error)
    if store_error.code in SESSION_ERROR_CODES:
        logger.warning(f"Session rejected during {action}: {store_error.code}")
        raise SessionExpiredError(store_error.message) from error
    logger.error(f"Store error during {action}: {store_error}")
    raise store_error from error


def sort_rows(rows: List[Dict[str, Any]], order_by: str, descending: bool = False) -> List[Dict[str, Any]]:
    """Sort on one column; rows missing the column go last."""
    present = [r for r in rows if r.get(order_by) is not None]
    missing = [r for r in rows if r.get(order_by) is None]
    present.sort(key=lambda r: r[order_by], reverse=descending)
    return present + missing


def matches_term(row: Dict[str, Any], columns: Sequence[str], term: str) -> bool:
    """Case-insensitive substring match across the given columns."""
    needle = term.lower()
    for column in columns:
        value = row.get(column)
        if value is not None and needle in str(value).lower():
            return True
    return False


class DataStore:
    """Reads and writes rows in the remote tables."""

    def __init__(self, config: AppConfig, dynamodb=None):
        self.config = config
        if dynamodb is None:
            boto_config = Config(
                connect_timeout=5,
                read_timeout=10,
                retries={'max_attempts': 1}
            )
            dynamodb = boto3.resource('dynamodb', config=boto_config, **config.boto_kwargs())
        self.dynamodb = dynamodb

    def table(self, entity: str):
        return self.dynamodb.Table(self.config.table_name(entity))

    def key_for(self, entity: str, key: Any) -> Dict[str, Any]:
        """Build a key dict; a bare value is taken as the hash key."""
        if isinstance(key, dict):
            return to_store(key)
        hash_key = KEY_SCHEMAS[entity][0]
        return to_store({hash_key: key})

    # -- reads --------------------------------------------------------------

    def _read(self, entity: str, operation: str = 'scan', **read_kwargs) -> List[Dict[str, Any]]:
        table = self.table(entity)
        read = getattr(table, operation)
        try:
            response = read(**read_kwargs)
            items = response.get('Items', [])

            # Handle pagination
            while 'LastEvaluatedKey' in response:
                response = read(ExclusiveStartKey=response['LastEvaluatedKey'], **read_kwargs)
                items.extend(response.get('Items', []))
        except ClientError as e:
            raise_store_error(e, f"{operation} {entity}")

        return [from_store(item) for item in items]

    def _scan(self, entity: str, **scan_kwargs) -> List[Dict[str, Any]]:
        return self._read(entity, 'scan', **scan_kwargs)

    def key_lookup(self, entity: str, filters: Dict[str, Any]) -> Optional[Tuple[Optional[str], str]]:
        """
        (index name, column) for the first equality filter a query can use.

        The table's own hash key comes first, with no index name; otherwise
        any secondary index on a filtered column.
        """
        hash_key = KEY_SCHEMAS[entity][0]
        if hash_key in filters:
            return None, hash_key
        for index_name, column, _ in SECONDARY_INDEXES.get(entity, []):
            if column in filters:
                return index_name, column
        return None

    def select(
        self,
        entity: str,
        filters: Optional[Dict[str, Any]] = None,
        in_filter: Optional[Tuple[str, Iterable[Any]]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        projection: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch rows with optional equality and in-list filters.

        Args:
            entity: Logical table name
            filters: Column -> value equality filters, combined with AND
            in_filter: (column, values) membership filter
            order_by: Column to sort on
            descending: Sort direction
            limit: Maximum number of rows returned
            projection: Columns to return

        Returns:
            List of plain dictionaries
        """
        filters = dict(filters or {})
        lookup = self.key_lookup(entity, filters) if filters and in_filter is None else None

        key_condition = None
        if lookup is not None:
            index_name, key_column = lookup
            key_condition = Key(key_column).eq(to_store(filters.pop(key_column)))

        condition = None
        for column, value in filters.items():
            clause = Attr(column).eq(to_store(value))
            condition = clause if condition is None else condition & clause

        scan_kwargs = {}
        if projection:
            names = {f"#p{i}": col for i, col in enumerate(projection)}
            scan_kwargs['ProjectionExpression'] = ", ".join(names)
            scan_kwargs['ExpressionAttributeNames'] = names

        if key_condition is not None:
            scan_kwargs['KeyConditionExpression'] = key_condition
            if index_name:
                scan_kwargs['IndexName'] = index_name
            if condition is not None:
                scan_kwargs['FilterExpression'] = condition
            rows = self._read(entity, 'query', **scan_kwargs)
        elif in_filter is not None:
            column, values = in_filter
            values = list(dict.fromkeys(values))
            if not values:
                return []
            rows = []
            for start in range(0, len(values), IN_FILTER_CHUNK):
                chunk = [to_store(v) for v in values[start:start + IN_FILTER_CHUNK]]
                clause = Attr(column).is_in(chunk)
                if condition is not None:
                    clause = condition & clause
                rows.extend(self._scan(entity, FilterExpression=clause, **scan_kwargs))
        elif condition is not None:
            rows = self._scan(entity, FilterExpression=condition, **scan_kwargs)
        else:
            rows = self._scan(entity, **scan_kwargs)

        if order_by:
            rows = sort_rows(rows, order_by, descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    def get(self, entity: str, key: Any) -> Optional[Dict[str, Any]]:
        """Fetch one row by key; None when absent."""
        try:
            response = self.table(entity).get_item(Key=self.key_for(entity, key))
        except ClientError as e:
            raise_store_error(e, f"get {entity}")
        item = response.get('Item')
        return from_store(item) if item else None

    def search(
        self,
        entity: str,
        columns: Sequence[str],
        term: str,
        limit: int = 20,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        """Case-insensitive substring search across columns, capped at limit."""
        rows = self._scan(entity)
        if order_by:
            rows = sort_rows(rows, order_by, descending)
        return [row for row in rows if matches_term(row, columns, term)][:limit]

    def count_by(self, entity: str, column: str) -> Dict[Any, int]:
        """Count rows per distinct value of a column."""
        counts: Dict[Any, int] = {}
        for row in self.select(entity, projection=[column]):
            value = row.get(column)
            if value is not None:
                counts[value] = counts.get(value, 0) + 1
        return counts

    # -- writes -------------------------------------------------------------

    def insert(self, entity: str, item: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new row; fails if the key already exists."""
        hash_key = KEY_SCHEMAS[entity][0]
        try:
            self.table(entity).put_item(
                Item=to_store(item),
                ConditionExpression=Attr(hash_key).not_exists()
            )
        except ClientError as e:
            raise_store_error(e, f"insert {entity}")
        logger.info(f"Inserted {entity} row {item.get(hash_key)}")
        return dict(item)

    def insert_many(self, entity: str, items: List[Dict[str, Any]]) -> None:
        """Write several rows in batches. Not atomic across batches."""
        if not items:
            return
        try:
            with self.table(entity).batch_writer() as batch:
                for item in items:
                    batch.put_item(Item=to_store(item))
        except ClientError as e:
            raise_store_error(e, f"batch insert {entity}")
        logger.info(f"Inserted {len(items)} {entity} rows")

    def update(self, entity: str, key: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Update columns on an existing row and return the full new row."""
        key_dict = self.key_for(entity, key)
        changes = {k: v for k, v in changes.items() if k not in key_dict}
        if not changes:
            row = self.get(entity, key)
            if row is None:
                raise StoreError("Row not found", code="ConditionalCheckFailedException")
            return row

        set_parts, remove_parts = [], []
        names, values = {}, {}
        for i, (column, value) in enumerate(changes.items()):
            names[f"#c{i}"] = column
            if value is None:
                remove_parts.append(f"#c{i}")
            else:
                values[f":v{i}"] = to_store(value)
                set_parts.append(f"#c{i} = :v{i}")

        expression = []
        if set_parts:
            expression.append("SET " + ", ".join(set_parts))
        if remove_parts:
            expression.append("REMOVE " + ", ".join(remove_parts))

        hash_key = KEY_SCHEMAS[entity][0]
        update_kwargs = {
            'Key': key_dict,
            'UpdateExpression': " ".join(expression),
            'ExpressionAttributeNames': names,
            'ConditionExpression': Attr(hash_key).exists(),
            'ReturnValues': 'ALL_NEW',
        }
        if values:
            update_kwargs['ExpressionAttributeValues'] = values

        try:
            response = self.table(entity).update_item(**update_kwargs)
        except ClientError as e:
            raise_store_error(e, f"update {entity}")
        logger.info(f"Updated {entity} row {key_dict.get(hash_key)}")
        return from_store(response.get('Attributes', {}))

    def delete(self, entity: str, key: Any) -> None:
        try:
            self.table(entity).delete_item(Key=self.key_for(entity, key))
        except ClientError as e:
            raise_store_error(e, f"delete {entity}")
        logger.info(f"Deleted {entity} row {key}")

    def delete_where(self, entity: str, filters: Dict[str, Any]) -> int:
        """Delete every row matching the equality filters."""
        hash_key, _, range_key, _ = KEY_SCHEMAS[entity]
        rows = self.select(entity, filters=filters)
        for row in rows:
            key = {hash_key: row[hash_key]}
            if range_key:
                key[range_key] = row[range_key]
            self.delete(entity, key)
        return len(rows)

    # -- provisioning -------------------------------------------------------

    def create_tables(self) -> List[str]:
        """Create any missing tables. Returns the names that were created."""
        created = []
        client = self.dynamodb.meta.client

        for entity in TABLE_NAMES:
            hash_key, hash_type, range_key, range_type = KEY_SCHEMAS[entity]
            table_name = self.config.table_name(entity)

            key_schema = [{'AttributeName': hash_key, 'KeyType': 'HASH'}]
            attributes = {hash_key: hash_type}
            if range_key:
                key_schema.append({'AttributeName': range_key, 'KeyType': 'RANGE'})
                attributes[range_key] = range_type

            create_kwargs = {
                'TableName': table_name,
                'KeySchema': key_schema,
                'BillingMode': 'PAY_PER_REQUEST',
            }

            indexes = SECONDARY_INDEXES.get(entity, [])
            if indexes:
                create_kwargs['GlobalSecondaryIndexes'] = [
                    {
                        'IndexName': index_name,
                        'KeySchema': [{'AttributeName': column, 'KeyType': 'HASH'}],
                        'Projection': {'ProjectionType': 'ALL'},
                    }
                    for index_name, column, _ in indexes
                ]
                for _, column, column_type in indexes:
                    attributes[column] = column_type

            create_kwargs['AttributeDefinitions'] = [
                {'AttributeName': name, 'AttributeType': attr_type}
                for name, attr_type in attributes.items()
            ]

            try:
                table = self.dynamodb.create_table(**create_kwargs)
                logger.info(f"Creating {table_name} table...")
                table.wait_until_exists()
                created.append(table_name)
            except client.exceptions.ResourceInUseException:
                logger.info(f"Table {table_name} already exists")
            except ClientError as e:
                raise_store_error(e, f"create table {table_name}")

        return created

    def test_connection(self) -> Tuple[bool, str]:
        """Test the store by describing the products table."""
        table_name = self.config.table_name("products")
        try:
            self.dynamodb.meta.client.describe_table(TableName=table_name)
            return True, f"Connected to table: {table_name}"
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            error_msg = e.response.get('Error', {}).get('Message', str(e))
            return False, f"Store Error ({error_code}): {error_msg}"
        except Exception as e:
            return False, f"Connection test failed: {e}"
