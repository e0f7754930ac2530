"""
Tests for the DynamoDB-backed store using botocore's Stubber.
"""

import boto3
import pytest
from botocore.stub import Stubber

from raed_admin.core.errors import SessionExpiredError, StoreError
from raed_admin.data.store import DataStore


@pytest.fixture
def dynamodb():
    return boto3.resource(
        'dynamodb',
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def data_store(config, dynamodb):
    return DataStore(config, dynamodb=dynamodb)


@pytest.fixture
def stubber(dynamodb):
    with Stubber(dynamodb.meta.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_table_names_use_prefix(data_store):
    assert data_store.table("products").name == "test-products"


def test_select_follows_pagination(data_store, stubber):
    stubber.add_response('scan', {
        'Items': [{'id': {'S': "p1"}, 'price': {'N': "12.5"}, 'stock': {'N': "3"}}],
        'LastEvaluatedKey': {'id': {'S': "p1"}},
    }, None)
    stubber.add_response('scan', {
        'Items': [{'id': {'S': "p2"}, 'price': {'N': "7"}, 'stock': {'N': "1"}}],
    }, None)

    rows = data_store.select("products", order_by="price")
    assert [r['id'] for r in rows] == ["p2", "p1"]
    assert rows[1]['price'] == 12.5
    assert rows[0]['stock'] == 1


def test_select_with_empty_in_filter_makes_no_call(data_store, stubber):
    assert data_store.select("profiles", in_filter=("id", [])) == []


def test_select_limit_and_missing_sort_values_last(data_store, stubber):
    stubber.add_response('scan', {
        'Items': [
            {'id': {'S': "a"}},
            {'id': {'S': "b"}, 'created_at': {'S': "2024-05-01"}},
            {'id': {'S': "c"}, 'created_at': {'S': "2024-05-03"}},
        ],
    }, None)
    rows = data_store.select("orders", order_by="created_at", descending=True, limit=3)
    assert [r['id'] for r in rows] == ["c", "b", "a"]


def test_get_missing_row_returns_none(data_store, stubber):
    stubber.add_response('get_item', {}, None)
    assert data_store.get("products", "nope") is None


def test_store_error_keeps_native_code_and_message(data_store, stubber):
    stubber.add_client_error(
        'get_item',
        service_error_code="ResourceNotFoundException",
        service_message="Requested resource not found",
        http_status_code=400,
    )
    with pytest.raises(StoreError) as exc:
        data_store.get("products", "p1")
    assert exc.value.code == "ResourceNotFoundException"
    assert exc.value.message == "Requested resource not found"
    assert exc.value.details['status'] == 400


def test_rejected_credentials_mean_expired_session(data_store, stubber):
    stubber.add_client_error(
        'scan',
        service_error_code="ExpiredTokenException",
        service_message="The security token included in the request is expired",
        http_status_code=400,
    )
    with pytest.raises(SessionExpiredError):
        data_store.select("orders")


def test_insert_existing_key_fails(data_store, stubber):
    stubber.add_client_error(
        'put_item',
        service_error_code="ConditionalCheckFailedException",
        service_message="The conditional request failed",
        http_status_code=400,
    )
    with pytest.raises(StoreError) as exc:
        data_store.insert("categories", {'id': "sheep", 'name_ar': "غنم"})
    assert exc.value.code == "ConditionalCheckFailedException"


def test_update_returns_new_row(data_store, stubber):
    stubber.add_response('update_item', {
        'Attributes': {
            'id': {'S': "o1"},
            'status': {'S': "completed"},
            'total_amount': {'N': "150.75"},
        },
    }, None)
    row = data_store.update("orders", "o1", {'status': "completed"})
    assert row == {'id': "o1", 'status': "completed", 'total_amount': 150.75}


@pytest.fixture
def sent(dynamodb):
    """Operation name and parameters of every request the client builds."""
    calls = []

    def record(params, event_name, **kwargs):
        calls.append((event_name.rsplit('.', 1)[-1], dict(params)))

    dynamodb.meta.client.meta.events.register('before-parameter-build.dynamodb.*', record)
    return calls


def test_delete_where_deletes_each_match(data_store, stubber, sent):
    stubber.add_response('query', {
        'Items': [
            {'product_id': {'S': "p1"}, 'cutting_method_id': {'N': "1"}},
            {'product_id': {'S': "p1"}, 'cutting_method_id': {'N': "2"}},
        ],
    }, None)
    stubber.add_response('delete_item', {}, None)
    stubber.add_response('delete_item', {}, None)

    assert data_store.delete_where("product_cutting_methods", {'product_id': "p1"}) == 2
    operation, params = sent[0]
    assert operation == "Query"
    assert 'IndexName' not in params


def test_indexed_equality_filter_queries_the_index(data_store, stubber, sent):
    stubber.add_response('query', {
        'Items': [{'id': {'S': "i1"}, 'order_id': {'S': "o1"}, 'qty': {'N': "2"}}],
    }, None)
    rows = data_store.select("order_items", filters={'order_id': "o1"})
    assert rows == [{'id': "i1", 'order_id': "o1", 'qty': 2}]

    operation, params = sent[0]
    assert operation == "Query"
    assert params['TableName'] == "test-order_items"
    assert params['IndexName'] == "order-index"
    assert 'FilterExpression' not in params


def test_other_filters_ride_along_on_the_index_query(data_store, stubber, sent):
    stubber.add_response('query', {'Items': []}, None)
    assert data_store.select("products", filters={'category_id': "sheep", 'is_active': True}) == []

    operation, params = sent[0]
    assert operation == "Query"
    assert params['IndexName'] == "category-index"
    assert 'FilterExpression' in params


def test_unindexed_filter_scans(data_store, stubber, sent):
    stubber.add_response('scan', {'Items': [{'id': {'S': "o2"}, 'status': {'S': "new"}}]}, None)
    assert [r['id'] for r in data_store.select("orders", filters={'status': "new"})] == ["o2"]
    assert sent[0][0] == "Scan"



def test_count_by(data_store, stubber):
    stubber.add_response('scan', {
        'Items': [
            {'category_id': {'S': "sheep"}},
            {'category_id': {'S': "sheep"}},
            {'category_id': {'S': "beef"}},
            {},
        ],
    }, None)
    assert data_store.count_by("products", "category_id") == {"sheep": 2, "beef": 1}


def test_search_is_case_insensitive_and_limited(data_store, stubber):
    stubber.add_response('scan', {
        'Items': [
            {'id': {'S': str(i)}, 'name_en': {'S': f"Lamb {i}"}} for i in range(25)
        ],
    }, None)
    rows = data_store.search("products", ["name_ar", "name_en"], "LAMB")
    assert len(rows) == 20


def test_connection_failure_is_reported(data_store, stubber):
    stubber.add_client_error(
        'describe_table',
        service_error_code="ResourceNotFoundException",
        service_message="Table not found",
    )
    ok, message = data_store.test_connection()
    assert ok is False
    assert "ResourceNotFoundException" in message
