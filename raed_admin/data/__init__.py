"""
Data access: DynamoDB tables, S3 images, typed records and reports.
"""

from .store import DataStore
from .storage import ObjectStorage
from .models import (
    AppSettings,
    Banner,
    Category,
    CuttingMethod,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    Profile,
)
from . import repository, reports

__all__ = [
    'DataStore',
    'ObjectStorage',
    'AppSettings',
    'Banner',
    'Category',
    'CuttingMethod',
    'Order',
    'OrderItem',
    'OrderStatus',
    'Product',
    'Profile',
    'repository',
    'reports',
]
