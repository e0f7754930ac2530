"""
Application configuration and constants.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import os

from .errors import ConfigurationError


# Remote tables, keyed by the logical entity name used throughout the app
TABLE_NAMES = {
    "products": "products",
    "categories": "categories",
    "cutting_methods": "cutting_methods",
    "product_cutting_methods": "product_cutting_methods",
    "orders": "orders",
    "order_items": "order_items",
    "profiles": "profiles",
    "banners": "banners",
    "app_settings": "app_settings",
}

# Object storage buckets observed per entity
BUCKETS = ["products", "categories", "banners"]

SEARCH_LIMIT = 20
TOP_PRODUCTS_LIMIT = 5
SALES_WINDOW_DAYS = 7

STORE_NAME = "الرائد للذبائح"
UNKNOWN_PRODUCT_NAME = "منتج غير معروف"


@dataclass
class AppConfig:
    """Application configuration settings."""

    # AWS Settings
    aws_access_key: Optional[str] = None
    aws_secret_key: Optional[str] = None
    aws_region: str = "us-east-1"

    # Store Settings
    table_prefix: str = "raed-"
    bucket_prefix: Optional[str] = None
    default_bucket: str = "products"
    public_url_base: Optional[str] = None

    # Auth Settings
    cognito_client_id: Optional[str] = None
    cognito_user_pool_id: Optional[str] = None
    session_ttl_seconds: int = 3600

    bucket_overrides: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_environment(cls) -> 'AppConfig':
        """Load configuration from environment variables."""
        return cls(
            aws_access_key=os.environ.get("AWS_ACCESS_KEY_ID"),
            aws_secret_key=os.environ.get("AWS_SECRET_ACCESS_KEY"),
            aws_region=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            table_prefix=os.environ.get("RAED_TABLE_PREFIX", "raed-"),
            bucket_prefix=os.environ.get("RAED_BUCKET_PREFIX"),
            default_bucket=os.environ.get("RAED_DEFAULT_BUCKET", "products"),
            public_url_base=os.environ.get("RAED_PUBLIC_URL_BASE"),
            cognito_client_id=os.environ.get("COGNITO_CLIENT_ID"),
            cognito_user_pool_id=os.environ.get("COGNITO_USER_POOL_ID"),
            session_ttl_seconds=int(os.environ.get("RAED_SESSION_TTL", "3600")),
        )

    @classmethod
    def from_streamlit_secrets(cls) -> 'AppConfig':
        """Load configuration from Streamlit secrets."""
        try:
            import streamlit as st

            aws_secrets = st.secrets.get("aws", {})
            store_secrets = st.secrets.get("store", {})
            cognito_secrets = st.secrets.get("cognito", {})
            return cls(
                aws_access_key=aws_secrets.get("access_key_id"),
                aws_secret_key=aws_secrets.get("secret_access_key"),
                aws_region=aws_secrets.get("region", "us-east-1"),
                table_prefix=store_secrets.get("table_prefix", "raed-"),
                bucket_prefix=store_secrets.get("bucket_prefix"),
                default_bucket=store_secrets.get("default_bucket", "products"),
                public_url_base=store_secrets.get("public_url_base"),
                cognito_client_id=cognito_secrets.get("client_id"),
                cognito_user_pool_id=cognito_secrets.get("user_pool_id"),
                bucket_overrides=dict(store_secrets.get("buckets", {})),
            )
        except Exception:
            return cls()

    @classmethod
    def load(cls) -> 'AppConfig':
        """Load configuration from environment first, then Streamlit secrets as fallback."""
        config = cls.from_environment()

        # Fill in missing values from Streamlit secrets
        st_config = cls.from_streamlit_secrets()

        if not config.aws_access_key:
            config.aws_access_key = st_config.aws_access_key
        if not config.aws_secret_key:
            config.aws_secret_key = st_config.aws_secret_key
        if "AWS_DEFAULT_REGION" not in os.environ:
            config.aws_region = st_config.aws_region
        if "RAED_TABLE_PREFIX" not in os.environ:
            config.table_prefix = st_config.table_prefix
        if not config.bucket_prefix:
            config.bucket_prefix = st_config.bucket_prefix
        if not config.public_url_base:
            config.public_url_base = st_config.public_url_base
        if not config.cognito_client_id:
            config.cognito_client_id = st_config.cognito_client_id
        if not config.cognito_user_pool_id:
            config.cognito_user_pool_id = st_config.cognito_user_pool_id
        if not config.bucket_overrides:
            config.bucket_overrides = st_config.bucket_overrides

        return config

    def missing_settings(self) -> List[str]:
        """Names of required settings that are not configured."""
        required = {
            "aws_region": self.aws_region,
            "table_prefix": self.table_prefix,
            "bucket_prefix": self.bucket_prefix,
            "cognito_client_id": self.cognito_client_id,
        }
        return [name for name, value in required.items() if not value]

    def validate(self) -> 'AppConfig':
        """Raise ConfigurationError if any required setting is absent."""
        missing = self.missing_settings()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing,
            )
        return self

    def table_name(self, entity: str) -> str:
        """Physical table name for a logical entity."""
        return f"{self.table_prefix}{TABLE_NAMES[entity]}"

    def bucket_name(self, bucket: str) -> str:
        """Physical bucket name for a logical bucket."""
        if bucket in self.bucket_overrides:
            return self.bucket_overrides[bucket]
        return f"{self.bucket_prefix}-{bucket}"

    def boto_kwargs(self) -> Dict[str, str]:
        """Keyword arguments shared by every boto3 client/resource."""
        kwargs = {'region_name': self.aws_region}
        if self.aws_access_key and self.aws_secret_key:
            kwargs['aws_access_key_id'] = self.aws_access_key
            kwargs['aws_secret_access_key'] = self.aws_secret_key
        return kwargs
