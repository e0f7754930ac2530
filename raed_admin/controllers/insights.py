"""
Read-only screens: home dashboard, reports and search.
"""

from datetime import date
from typing import Callable, Optional

from ..data import reports, repository
from .base import Controller


class DashboardController(Controller):
    def load(self) -> bool:
        def action():
            orders = repository.get_orders(self.session)
            products = repository.get_products(self.session)
            profiles = repository.get_profiles(self.session)
            return reports.dashboard_summary(orders, products, profiles)

        return self.fetch(action)


class ReportsController(Controller):
    """Sales series, top products, status mix and KPIs."""

    def __init__(self, session, today: Optional[Callable[[], date]] = None):
        super().__init__(session)
        self.today = today or date.today

    def load(self) -> bool:
        def action():
            orders = repository.get_orders(self.session)
            items = repository.get_all_order_items(self.session)
            return reports.build_report(orders, items, today=self.today())

        return self.fetch(action)


class SearchController(Controller):
    """Products, orders and customers matching one query."""

    def __init__(self, session):
        super().__init__(session)
        self.query = ""

    def search(self, query: str) -> bool:
        self.query = (query or "").strip()
        if not self.query:
            self.state.data = {'products': [], 'orders': [], 'customers': []}
            return True
        self.state.data = None

        def action():
            return {
                'products': repository.search_products(self.session, self.query),
                'orders': repository.search_orders(self.session, self.query),
                'customers': repository.search_customers(self.session, self.query),
            }

        return self.fetch(action)

    @property
    def total_results(self) -> int:
        data = self.state.data or {}
        return sum(len(rows) for rows in data.values())
