"""
Data access operations for every admin screen.

Each function takes the signed-in AdminSession first, issues its calls
against ``session.store`` / ``session.storage`` and returns typed records.
Lookups of a missing primary record return None; faulted remote calls
propagate as StoreError with the store's own code and message.
"""

from typing import Any, Dict, Iterable, List, Optional
import uuid

from ..core.config import SEARCH_LIMIT
from ..core.errors import NotFoundError
from ..core.utils import is_uuid
from .models import (
    AppSettings,
    Banner,
    Category,
    CuttingMethod,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    ProductCuttingMethod,
    Profile,
)

PROFILE_SUMMARY_COLUMNS = ["id", "full_name", "phone", "role"]


def _as_item(record: Any) -> Dict[str, Any]:
    if hasattr(record, 'to_item'):
        return record.to_item()
    return {k: v for k, v in dict(record).items() if v is not None}


def _new_id() -> str:
    return str(uuid.uuid4())


# ============ PRODUCTS ============

def _category_refs(session, category_ids: Optional[Iterable[str]] = None) -> Dict[str, Dict[str, Any]]:
    if category_ids is None:
        rows = session.store.select("categories")
    else:
        rows = session.store.select("categories", in_filter=("id", [c for c in category_ids if c]))
    return {
        row['id']: {'id': row['id'], 'name_ar': row.get('name_ar'), 'name_en': row.get('name_en')}
        for row in rows
    }


def _with_categories(session, rows: List[Dict[str, Any]]) -> List[Product]:
    refs = _category_refs(session, {row.get('category_id') for row in rows})
    products = []
    for row in rows:
        row['categories'] = refs.get(row.get('category_id'))
        products.append(Product.from_item(row))
    return products


def get_products(session, category_id: Optional[str] = None) -> List[Product]:
    session.require_active()
    filters = {'category_id': category_id} if category_id else None
    rows = session.store.select("products", filters=filters)
    return _with_categories(session, rows)


def get_product_by_id(session, product_id: str) -> Optional[Product]:
    session.require_active()
    row = session.store.get("products", product_id)
    if row is None:
        return None
    return _with_categories(session, [row])[0]


def create_product(session, product: Any) -> Product:
    session.require_active()
    item = _as_item(product)
    item.setdefault('id', _new_id())
    item.setdefault('rating', 5.0)
    item.setdefault('review_count', 0)
    return Product.from_item(session.store.insert("products", item))


def update_product(session, product_id: str, changes: Dict[str, Any]) -> Product:
    session.require_active()
    return Product.from_item(session.store.update("products", product_id, changes))


def delete_product(session, product_id: str) -> None:
    session.require_active()
    session.store.delete("products", product_id)


def search_products(session, query: str) -> List[Product]:
    session.require_active()
    rows = session.store.search(
        "products", ["name_ar", "name_en", "description_ar"], query, limit=SEARCH_LIMIT
    )
    return _with_categories(session, rows)


# ============ CATEGORIES ============

def get_categories(session) -> List[Category]:
    session.require_active()
    rows = session.store.select("categories", order_by="position")
    return [Category.from_item(row) for row in rows]


def get_category_by_id(session, category_id: str) -> Optional[Category]:
    session.require_active()
    row = session.store.get("categories", category_id)
    return Category.from_item(row) if row else None


def create_category(session, category: Any) -> Category:
    session.require_active()
    return Category.from_item(session.store.insert("categories", _as_item(category)))


def update_category(session, category_id: str, changes: Dict[str, Any]) -> Category:
    session.require_active()
    return Category.from_item(session.store.update("categories", category_id, changes))


def delete_category(session, category_id: str) -> None:
    session.require_active()
    session.store.delete("categories", category_id)


def get_categories_with_product_count(session) -> List[Category]:
    """Categories in display order, each with the number of its products."""
    session.require_active()
    counts = session.store.count_by("products", "category_id")
    categories = get_categories(session)
    for category in categories:
        category.product_count = counts.get(category.id, 0)
    return categories


# ============ ORDERS ============

def _profiles_by_id(session, user_ids: Iterable[str], columns=None) -> Dict[str, Dict[str, Any]]:
    user_ids = [u for u in dict.fromkeys(user_ids) if u]
    if not user_ids:
        return {}
    rows = session.store.select(
        "profiles", in_filter=("id", user_ids), projection=columns or PROFILE_SUMMARY_COLUMNS
    )
    return {row['id']: row for row in rows}


def _with_profiles(session, rows: List[Dict[str, Any]]) -> List[Order]:
    profiles = _profiles_by_id(session, (row.get('user_id') for row in rows))
    orders = []
    for row in rows:
        row['profiles'] = profiles.get(row.get('user_id'))
        orders.append(Order.from_item(row))
    return orders


def _product_names(session, product_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    product_ids = [p for p in dict.fromkeys(product_ids) if p]
    if not product_ids:
        return {}
    rows = session.store.select(
        "products", in_filter=("id", product_ids), projection=["id", "name_ar", "name_en"]
    )
    return {row['id']: {'name_ar': row.get('name_ar'), 'name_en': row.get('name_en')} for row in rows}


def _with_product_names(session, rows: List[Dict[str, Any]]) -> List[OrderItem]:
    names = _product_names(session, (row.get('product_id') for row in rows))
    items = []
    for row in rows:
        row['products'] = names.get(row.get('product_id'))
        items.append(OrderItem.from_item(row))
    return items


def get_orders(session, status: Optional[str] = None) -> List[Order]:
    """Orders newest first, each with the placing customer's profile."""
    session.require_active()
    filters = {'status': OrderStatus.normalize(status)} if status else None
    rows = session.store.select("orders", filters=filters, order_by="created_at", descending=True)
    if not rows:
        return []
    return _with_profiles(session, rows)


def get_order_by_id(session, order_id: str) -> Optional[Order]:
    """Order with its line items (product names attached) and profile."""
    session.require_active()
    row = session.store.get("orders", order_id)
    if row is None:
        return None

    order = Order.from_item(row)
    item_rows = session.store.select("order_items", filters={'order_id': order_id})
    order.items = _with_product_names(session, item_rows)

    if order.user_id:
        profile = session.store.get("profiles", order.user_id)
        order.profile = Profile.from_item(profile) if profile else None
    return order


def get_all_order_items(session) -> List[OrderItem]:
    session.require_active()
    return _with_product_names(session, session.store.select("order_items"))


def update_order_status(session, order_id: str, status: str) -> Order:
    """Set any status on an order; there is no transition graph."""
    session.require_active()
    row = session.store.update("orders", order_id, {'status': OrderStatus.normalize(status)})
    return Order.from_item(row)


def search_orders(session, query: str) -> List[Order]:
    """Exact id match for UUID queries, otherwise phone/address/city substring."""
    session.require_active()
    query = (query or "").strip()
    if is_uuid(query):
        row = session.store.get("orders", query)
        rows = [row] if row else []
    else:
        rows = session.store.search(
            "orders", ["phone", "address", "city"], query,
            limit=SEARCH_LIMIT, order_by="created_at", descending=True
        )
    if not rows:
        return []
    return _with_profiles(session, rows)


def delete_order(session, order_id: str) -> None:
    """Delete the order, then its line items. Not atomic."""
    session.require_active()
    session.store.delete("orders", order_id)
    session.store.delete_where("order_items", {'order_id': order_id})


# ============ USERS (PROFILES) ============

def get_profiles(session) -> List[Profile]:
    session.require_active()
    rows = session.store.select("profiles", order_by="created_at", descending=True)
    return [Profile.from_item(row) for row in rows]


def get_profile_by_id(session, profile_id: str) -> Optional[Profile]:
    session.require_active()
    row = session.store.get("profiles", profile_id)
    return Profile.from_item(row) if row else None


def update_profile(session, profile_id: str, changes: Dict[str, Any]) -> Profile:
    session.require_active()
    return Profile.from_item(session.store.update("profiles", profile_id, changes))


def search_customers(session, query: str) -> List[Profile]:
    session.require_active()
    rows = session.store.search("profiles", ["full_name", "phone", "email"], query, limit=SEARCH_LIMIT)
    return [Profile.from_item(row) for row in rows]


# ============ CUTTING METHODS ============

def get_cutting_methods(session) -> List[CuttingMethod]:
    session.require_active()
    rows = session.store.select("cutting_methods", order_by="id")
    return [CuttingMethod.from_item(row) for row in rows]


def get_cutting_method_by_id(session, method_id: int) -> Optional[CuttingMethod]:
    session.require_active()
    row = session.store.get("cutting_methods", int(method_id))
    return CuttingMethod.from_item(row) if row else None


def create_cutting_method(session, method: Any) -> CuttingMethod:
    """Insert a cutting method; ids are sequential integers."""
    session.require_active()
    item = _as_item(method)
    if item.get('id') is None:
        existing = session.store.select("cutting_methods", projection=["id"])
        item['id'] = max((int(row['id']) for row in existing), default=0) + 1
    return CuttingMethod.from_item(session.store.insert("cutting_methods", item))


def update_cutting_method(session, method_id: int, changes: Dict[str, Any]) -> CuttingMethod:
    session.require_active()
    return CuttingMethod.from_item(session.store.update("cutting_methods", int(method_id), changes))


def delete_cutting_method(session, method_id: int) -> None:
    session.require_active()
    session.store.delete("cutting_methods", int(method_id))
    session.store.delete_where("product_cutting_methods", {'cutting_method_id': int(method_id)})


# ============ PRODUCT CUTTING METHODS ============

def link_product_cutting_methods(session, product_id: str, method_ids: List[int]) -> None:
    session.require_active()
    if not method_ids:
        return
    records = [
        ProductCuttingMethod(product_id=product_id, cutting_method_id=int(m)).to_item()
        for m in method_ids
    ]
    session.store.insert_many("product_cutting_methods", records)


def get_product_cutting_methods(session, product_id: str) -> List[int]:
    session.require_active()
    rows = session.store.select("product_cutting_methods", filters={'product_id': product_id})
    return sorted(int(row['cutting_method_id']) for row in rows)


def set_product_cutting_methods(session, product_id: str, method_ids: List[int]) -> None:
    """Replace a product's cutting method links."""
    session.require_active()
    session.store.delete_where("product_cutting_methods", {'product_id': product_id})
    link_product_cutting_methods(session, product_id, method_ids)


# ============ APP SETTINGS ============

def get_app_settings(session) -> Optional[AppSettings]:
    """The singleton settings row, or None when it has not been created."""
    session.require_active()
    rows = session.store.select("app_settings")
    return AppSettings.from_item(rows[0]) if rows else None


def update_app_settings(session, settings: Dict[str, Any]) -> AppSettings:
    """Update the existing settings row, or insert one if none exists."""
    session.require_active()
    existing = session.store.select("app_settings", projection=["id"])
    changes = {k: v for k, v in dict(settings).items() if k != 'id'}
    if existing:
        row = session.store.update("app_settings", existing[0]['id'], changes)
    else:
        changes['id'] = _new_id()
        row = session.store.insert("app_settings", changes)
    return AppSettings.from_item(row)


def update_app_status(session, is_active: bool) -> AppSettings:
    session.require_active()
    existing = session.store.select("app_settings", projection=["id"])
    if not existing:
        raise NotFoundError("Settings not found")
    row = session.store.update("app_settings", existing[0]['id'], {'is_app_active': bool(is_active)})
    return AppSettings.from_item(row)


# ============ BANNERS ============

def get_banners(session) -> List[Banner]:
    session.require_active()
    rows = session.store.select("banners", order_by="display_order")
    return [Banner.from_item(row) for row in rows]


def get_banner_by_id(session, banner_id: str) -> Optional[Banner]:
    session.require_active()
    row = session.store.get("banners", banner_id)
    return Banner.from_item(row) if row else None


def create_banner(session, banner: Any) -> Banner:
    session.require_active()
    item = _as_item(banner)
    item.setdefault('id', _new_id())
    return Banner.from_item(session.store.insert("banners", item))


def update_banner(session, banner_id: str, changes: Dict[str, Any]) -> Banner:
    session.require_active()
    return Banner.from_item(session.store.update("banners", banner_id, changes))


def delete_banner(session, banner_id: str) -> None:
    session.require_active()
    session.store.delete("banners", banner_id)


# ============ STORAGE ============

def upload_image(session, file_obj, filename: str, bucket: Optional[str] = None) -> str:
    session.require_active()
    return session.storage.upload_image(file_obj, filename, bucket)

