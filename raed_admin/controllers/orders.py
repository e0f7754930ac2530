"""
Controllers for orders and customers.
"""

from typing import Optional

from ..data import repository
from ..data.models import OrderStatus
from .base import DetailController, ListController

STATUS_UPDATED_NOTICE = "تم تحديث حالة الطلب بنجاح"


class OrderListController(ListController):
    delete_notice = "تم حذف الطلب"

    def __init__(self, session):
        super().__init__(session)
        self.status_filter: Optional[str] = None

    def load_items(self):
        return repository.get_orders(self.session, self.status_filter)

    def filter_by_status(self, status: Optional[str]) -> bool:
        self.status_filter = OrderStatus.normalize(status) if status else None
        return self.load()

    def delete_item(self, item_key):
        repository.delete_order(self.session, item_key)

    def change_status(self, order_id: str, status: str) -> bool:
        """Set a new status; the row is patched only after the store accepts it."""
        existing = self.find(order_id)
        ok, updated = self.run(lambda: repository.update_order_status(self.session, order_id, status))
        if not ok:
            return False
        if existing is not None:
            updated.profile = existing.profile
            updated.items = existing.items
        self.reconcile(updated)
        self.state.notice = STATUS_UPDATED_NOTICE
        return True


class OrderDetailController(DetailController):
    not_found_message = "الطلب غير موجود"

    def load_record(self):
        return repository.get_order_by_id(self.session, self.record_id)

    def change_status(self, status: str) -> bool:
        if self.record is None:
            return False
        ok, updated = self.run(lambda: repository.update_order_status(self.session, self.record_id, status))
        if not ok:
            return False
        self.record.status = updated.status
        self.state.notice = STATUS_UPDATED_NOTICE
        return True


class CustomerListController(ListController):
    def load_items(self):
        return repository.get_profiles(self.session)
