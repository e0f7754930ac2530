"""
Configuration, error types and shared helpers.
"""

from .config import (
    BUCKETS,
    STORE_NAME,
    TABLE_NAMES,
    AppConfig,
)
from .errors import (
    AuthorizationError,
    ConfigurationError,
    DashboardError,
    NotFoundError,
    SessionExpiredError,
    StoreError,
    ValidationError,
)
from .utils import category_slug, format_currency, from_store, to_store

__all__ = [
    # Config
    'BUCKETS',
    'STORE_NAME',
    'TABLE_NAMES',
    'AppConfig',
    # Errors
    'AuthorizationError',
    'ConfigurationError',
    'DashboardError',
    'NotFoundError',
    'SessionExpiredError',
    'StoreError',
    'ValidationError',
    # Utils
    'category_slug',
    'format_currency',
    'from_store',
    'to_store',
]
