"""
Al-Raed Admin Dashboard - Consolidated Import Package

Single import point for the admin dashboard of the Al-Raed meat store.

Usage:
    from raed_admin import (
        AppConfig,
        DataStore,
        ObjectStorage,
        AuthService,
        repository,
        reports,
        plot_sales_trend,
    )
"""

# =============================================================================
# Core Configuration & Errors
# =============================================================================
from .core.config import (
    STORE_NAME,
    TABLE_NAMES,
    BUCKETS,
    AppConfig,
)
from .core.errors import (
    DashboardError,
    ConfigurationError,
    NotFoundError,
    ValidationError,
    StoreError,
    AuthorizationError,
    SessionExpiredError,
)

# =============================================================================
# Data Management
# =============================================================================
from .data.store import DataStore
from .data.storage import ObjectStorage
from .data import repository, reports

# =============================================================================
# Services
# =============================================================================
from .services.auth import AdminSession, AuthService

# =============================================================================
# UI Components
# =============================================================================
from .ui.charts import (
    plot_sales_trend,
    plot_top_products,
    plot_status_distribution,
)

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "1.0.0"
__author__ = "Al-Raed Team"

__all__ = [
    # Version info
    '__version__',
    '__author__',

    # Configuration
    'STORE_NAME',
    'TABLE_NAMES',
    'BUCKETS',
    'AppConfig',

    # Errors
    'DashboardError',
    'ConfigurationError',
    'NotFoundError',
    'ValidationError',
    'StoreError',
    'AuthorizationError',
    'SessionExpiredError',

    # Data management
    'DataStore',
    'ObjectStorage',
    'repository',
    'reports',

    # Services
    'AdminSession',
    'AuthService',

    # Visualization
    'plot_sales_trend',
    'plot_top_products',
    'plot_status_distribution',
]
