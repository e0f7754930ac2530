"""
Typed records for the remote tables.

Each record converts to and from the plain dictionaries the store returns.
The store owns every entity's lifecycle; these classes only describe shape.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.config import UNKNOWN_PRODUCT_NAME


class OrderStatus(Enum):
    """Order status codes with their Arabic labels."""

    NEW = "new"
    PROCESSING = "processing"
    SHIPPING = "shipping"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def normalize(cls, value: Any) -> Any:
        """Map a code or an Arabic label to the status code.

        Unknown values are returned unchanged.
        """
        if isinstance(value, cls):
            return value.value
        for status in cls:
            if value == status.value or value == status.label:
                return status.value
        return value

    @classmethod
    def label_for(cls, value: Any) -> str:
        code = cls.normalize(value)
        for status in cls:
            if status.value == code:
                return status.label
        return str(value) if value else "غير معروفة"

    @classmethod
    def codes(cls) -> List[str]:
        return [status.value for status in cls]


STATUS_LABELS = {
    OrderStatus.NEW: "جديد",
    OrderStatus.PROCESSING: "تحت التجهيز",
    OrderStatus.SHIPPING: "في الطريق",
    OrderStatus.COMPLETED: "مكتمل",
    OrderStatus.CANCELLED: "ملغي",
}

ACTIVE_STATUSES = (OrderStatus.NEW, OrderStatus.PROCESSING, OrderStatus.SHIPPING)


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Category:
    id: str
    name_ar: str = ""
    name_en: str = ""
    image_url: Optional[str] = None
    position: int = 0
    product_count: Optional[int] = None

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Category':
        return cls(
            id=item['id'],
            name_ar=item.get('name_ar', ""),
            name_en=item.get('name_en', ""),
            image_url=item.get('image_url'),
            position=int(item.get('position') or 0),
            product_count=item.get('product_count'),
        )

    def to_item(self) -> Dict[str, Any]:
        item = asdict(self)
        item.pop('product_count')
        return _clean(item)


@dataclass
class Product:
    id: str
    category_id: Optional[str] = None
    name_ar: str = ""
    name_en: str = ""
    description_ar: str = ""
    price: float = 0.0
    old_price: Optional[float] = None
    image_url: Optional[str] = None
    stock: int = 0
    is_active: bool = True
    rating: float = 5.0
    review_count: int = 0
    category: Optional[Dict[str, Any]] = None

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Product':
        return cls(
            id=item['id'],
            category_id=item.get('category_id'),
            name_ar=item.get('name_ar', ""),
            name_en=item.get('name_en', ""),
            description_ar=item.get('description_ar', ""),
            price=float(item.get('price') or 0),
            old_price=float(item['old_price']) if item.get('old_price') is not None else None,
            image_url=item.get('image_url'),
            stock=max(int(item.get('stock') or 0), 0),
            is_active=bool(item.get('is_active', True)),
            rating=float(item.get('rating') or 0),
            review_count=int(item.get('review_count') or 0),
            category=item.get('categories'),
        )

    def to_item(self) -> Dict[str, Any]:
        item = asdict(self)
        item.pop('category')
        return _clean(item)


@dataclass
class CuttingMethod:
    id: int
    name_ar: str = ""

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'CuttingMethod':
        return cls(id=int(item['id']), name_ar=item.get('name_ar', ""))

    def to_item(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProductCuttingMethod:
    product_id: str
    cutting_method_id: int

    def to_item(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OrderItemMetadata:
    """Free-form order item extras, reduced to the known keys."""

    weight: Optional[str] = None
    cutting: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> 'OrderItemMetadata':
        raw = raw or {}
        return cls(
            weight=raw.get('weight'),
            cutting=raw.get('cutting'),
            notes=raw.get('notes'),
        )

    def to_item(self) -> Dict[str, Any]:
        return _clean(asdict(self))


@dataclass
class OrderItem:
    id: str
    order_id: str
    product_id: Optional[str] = None
    qty: int = 1
    unit_price: float = 0.0
    subtotal: float = 0.0
    metadata: OrderItemMetadata = field(default_factory=OrderItemMetadata)
    product_name_ar: Optional[str] = None
    product_name_en: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.product_name_ar or UNKNOWN_PRODUCT_NAME

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'OrderItem':
        product = item.get('products') or {}
        return cls(
            id=item['id'],
            order_id=item['order_id'],
            product_id=item.get('product_id'),
            qty=int(item.get('qty') or 0),
            unit_price=float(item.get('unit_price') or 0),
            subtotal=float(item.get('subtotal') or 0),
            metadata=OrderItemMetadata.from_raw(item.get('metadata')),
            product_name_ar=product.get('name_ar'),
            product_name_en=product.get('name_en'),
        )

    def to_item(self) -> Dict[str, Any]:
        item = {
            'id': self.id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'qty': self.qty,
            'unit_price': self.unit_price,
            'subtotal': self.subtotal,
            'metadata': self.metadata.to_item(),
        }
        return _clean(item)


@dataclass
class Profile:
    id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    role: str = "customer"
    is_admin: bool = False
    created_at: Optional[str] = None

    def is_admin_profile(self) -> bool:
        return self.role == "admin" or bool(self.is_admin)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Profile':
        return cls(
            id=item['id'],
            full_name=item.get('full_name'),
            phone=item.get('phone'),
            email=item.get('email'),
            role=item.get('role') or "customer",
            is_admin=bool(item.get('is_admin', False)),
            created_at=item.get('created_at'),
        )

    def to_item(self) -> Dict[str, Any]:
        return _clean(asdict(self))


@dataclass
class Order:
    id: str
    user_id: Optional[str] = None
    total_amount: float = 0.0
    status: str = OrderStatus.NEW.value
    payment_method: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[str] = None
    items: List[OrderItem] = field(default_factory=list)
    profile: Optional[Profile] = None

    @property
    def status_label(self) -> str:
        return OrderStatus.label_for(self.status)

    @property
    def payment_label(self) -> str:
        if self.payment_method == "cash":
            return "عند الاستلام"
        if self.payment_method == "online":
            return "إلكترونية"
        return self.payment_method or "غير محددة"

    @property
    def customer_name(self) -> str:
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return self.phone or "مجهول"

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Order':
        profile = item.get('profiles')
        return cls(
            id=item['id'],
            user_id=item.get('user_id'),
            total_amount=float(item.get('total_amount') or 0),
            status=OrderStatus.normalize(item.get('status') or OrderStatus.NEW.value),
            payment_method=item.get('payment_method'),
            phone=item.get('phone'),
            city=item.get('city'),
            address=item.get('address'),
            created_at=item.get('created_at'),
            items=[OrderItem.from_item(i) for i in item.get('order_items') or []],
            profile=Profile.from_item(profile) if profile else None,
        )

    def to_item(self) -> Dict[str, Any]:
        item = asdict(self)
        item.pop('items')
        item.pop('profile')
        return _clean(item)


@dataclass
class Banner:
    id: str
    title: str = ""
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Banner':
        return cls(
            id=item['id'],
            title=item.get('title', ""),
            image_url=item.get('image_url'),
            is_active=bool(item.get('is_active', True)),
            display_order=int(item.get('display_order') or 0),
        )

    def to_item(self) -> Dict[str, Any]:
        return _clean(asdict(self))


@dataclass
class AppSettings:
    id: Optional[str] = None
    delivery_fee: float = 0.0
    tax_percentage: float = 0.0
    contact_phone: str = ""
    is_app_active: bool = True

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'AppSettings':
        return cls(
            id=item.get('id'),
            delivery_fee=float(item.get('delivery_fee') or 0),
            tax_percentage=float(item.get('tax_percentage') or 0),
            contact_phone=item.get('contact_phone') or "",
            is_app_active=item.get('is_app_active', True) is not False,
        )

    def to_item(self) -> Dict[str, Any]:
        return _clean(asdict(self))
