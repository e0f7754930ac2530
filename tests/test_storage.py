"""
Tests for image uploads to S3.
"""

import io

import boto3
import pytest
from botocore.stub import Stubber

from raed_admin.core.errors import StoreError
from raed_admin.data.storage import ObjectStorage, random_object_key


@pytest.fixture
def s3_client():
    return boto3.client(
        's3',
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def object_storage(config, s3_client):
    return ObjectStorage(config, s3_client=s3_client)


def test_object_key_keeps_extension_as_typed():
    key = random_object_key("photo.PNG")
    assert key.endswith(".PNG")
    assert key != "photo.PNG"


def test_object_keys_are_unique():
    assert random_object_key("a.jpg") != random_object_key("a.jpg")


def test_object_key_without_extension():
    assert "." not in random_object_key("blob")


def test_public_url(object_storage):
    assert object_storage.public_url("banners", "k.png") == (
        "https://raed-banners.s3.us-east-1.amazonaws.com/k.png"
    )


def test_public_url_with_base(config, s3_client):
    config.public_url_base = "https://cdn.raed.sa/"
    storage = ObjectStorage(config, s3_client=s3_client)
    assert storage.public_url("products", "k.png") == "https://cdn.raed.sa/raed-products/k.png"


def test_upload_returns_public_url(object_storage, s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response('put_object', {}, None)
        stubber.add_response('put_object', {}, None)

        first = object_storage.upload_image(io.BytesIO(b"png-bytes"), "photo.PNG", "products")
        second = object_storage.upload_image(b"png-bytes", "photo.PNG", "products")

    assert first.startswith("https://raed-products.s3.us-east-1.amazonaws.com/")
    assert first.endswith(".PNG")
    assert first.rsplit("/", 1)[-1] != second.rsplit("/", 1)[-1]


def test_upload_error_is_store_error(object_storage, s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error(
            'put_object',
            service_error_code="NoSuchBucket",
            service_message="The specified bucket does not exist",
            http_status_code=404,
        )
        with pytest.raises(StoreError) as exc:
            object_storage.upload_image(b"x", "a.png", "banners")

    assert exc.value.code == "NoSuchBucket"
