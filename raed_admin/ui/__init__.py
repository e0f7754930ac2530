"""
Streamlit views for the admin dashboard.
"""

from .charts import (
    plot_sales_trend,
    plot_top_products,
    plot_status_distribution,
)
from .auth import check_login, expire_session, get_current_session, get_current_user, logout
from .loading import confirm_delete, loading, render_error_banner, render_notice

__all__ = [
    # Charts
    'plot_sales_trend',
    'plot_top_products',
    'plot_status_distribution',
    # Auth
    'check_login',
    'expire_session',
    'get_current_session',
    'get_current_user',
    'logout',
    # Feedback
    'confirm_delete',
    'loading',
    'render_error_banner',
    'render_notice',
]
