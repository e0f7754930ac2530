"""
S3 object storage for product, category and banner images.
"""

import logging
import secrets
from typing import Optional, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..core.config import AppConfig
from .store import raise_store_error

logger = logging.getLogger(__name__)


def random_object_key(filename: str) -> str:
    """
    Random basename that keeps the original extension as typed.

    Args:
        filename: Original file name, e.g. "photo.PNG"

    Returns:
        Object key such as "3f9c0a1b2d4e5f60.PNG"
    """
    basename = secrets.token_hex(8)
    if filename and '.' in filename:
        extension = filename.rsplit('.', 1)[-1]
        if extension:
            return f"{basename}.{extension}"
    return basename


class ObjectStorage:
    """Uploads binary blobs and resolves their public URLs."""

    def __init__(self, config: AppConfig, s3_client=None):
        self.config = config
        if s3_client is None:
            boto_config = Config(
                connect_timeout=5,
                read_timeout=30,
                retries={'max_attempts': 1}
            )
            s3_client = boto3.client('s3', config=boto_config, **config.boto_kwargs())
        self.s3_client = s3_client

    def public_url(self, bucket: str, key: str) -> str:
        """Publicly resolvable URL for an object in a logical bucket."""
        bucket_name = self.config.bucket_name(bucket)
        if self.config.public_url_base:
            return f"{self.config.public_url_base.rstrip('/')}/{bucket_name}/{key}"
        return f"https://{bucket_name}.s3.{self.config.aws_region}.amazonaws.com/{key}"

    def upload_image(self, file_obj, filename: str, bucket: Optional[str] = None) -> str:
        """
        Store a file under a random name and return its public URL.

        No collision detection, content-type validation or size limit.

        Args:
            file_obj: Binary file-like object (or bytes)
            filename: Original file name, used only for its extension
            bucket: Logical bucket name; defaults to the configured default

        Returns:
            Public URL of the stored object
        """
        bucket = bucket or self.config.default_bucket
        bucket_name = self.config.bucket_name(bucket)
        key = random_object_key(filename)

        body = file_obj if isinstance(file_obj, (bytes, bytearray)) else file_obj.read()

        try:
            self.s3_client.put_object(Bucket=bucket_name, Key=key, Body=body)
        except ClientError as e:
            raise_store_error(e, f"upload to {bucket_name}")

        logger.info(f"Uploaded {filename} to s3://{bucket_name}/{key}")
        return self.public_url(bucket, key)

    def test_connection(self, bucket: Optional[str] = None) -> Tuple[bool, str]:
        """Test storage by checking that the bucket is reachable."""
        bucket_name = self.config.bucket_name(bucket or self.config.default_bucket)
        try:
            self.s3_client.head_bucket(Bucket=bucket_name)
            return True, f"Connected to bucket: {bucket_name}"
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            error_msg = e.response.get('Error', {}).get('Message', str(e))
            return False, f"S3 Error ({error_code}): {error_msg}"
        except Exception as e:
            return False, f"Connection test failed: {e}"
