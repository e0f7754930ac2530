"""
One render function per sidebar page.
"""

from .banners import render_banners_page
from .categories import render_categories_page
from .customers import render_customers_page
from .cutting_methods import render_cutting_methods_page
from .dashboard import render_dashboard_page
from .orders import render_orders_page
from .products import render_products_page
from .reports import render_reports_page
from .search import render_search_page
from .settings import render_settings_page

__all__ = [
    'render_banners_page',
    'render_categories_page',
    'render_customers_page',
    'render_cutting_methods_page',
    'render_dashboard_page',
    'render_orders_page',
    'render_products_page',
    'render_reports_page',
    'render_search_page',
    'render_settings_page',
]
