"""
Controllers for the catalog screens: products, categories, cutting methods
and banners.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..core.errors import ValidationError
from ..core.utils import category_slug
from ..data import repository
from .base import ImageField, ListController
from .forms import FormController


# ============ PRODUCTS ============

class ProductListController(ListController):
    delete_notice = "تم حذف المنتج"

    def __init__(self, session):
        super().__init__(session)
        self.category_id: Optional[str] = None
        self.categories: List[Any] = []

    def load_items(self):
        self.categories = repository.get_categories(self.session)
        return repository.get_products(self.session, self.category_id)

    def filter_by_category(self, category_id: Optional[str]) -> bool:
        self.category_id = category_id or None
        return self.load()

    def delete_item(self, item_key):
        repository.delete_product(self.session, item_key)

    def reconcile(self, record) -> None:
        """Merge a saved product, keeping the list's category expansion."""
        if self.category_id and record.category_id != self.category_id:
            self.state.data = [r for r in self.items if r.id != record.id]
            return
        if record.category is None:
            record = replace(record, category=self.category_ref(record.category_id))
        super().reconcile(record)

    def category_ref(self, category_id: Optional[str]) -> Optional[Dict[str, Any]]:
        for category in self.categories:
            if category.id == category_id:
                return {'id': category.id, 'name_ar': category.name_ar, 'name_en': category.name_en}
        return None


class ProductFormController(FormController):
    created_notice = "تمت إضافة المنتج بنجاح!"
    updated_notice = "تم تحديث المنتج بنجاح!"

    def __init__(self, session, record_id: Optional[str] = None):
        super().__init__(session, record_id)
        self.image = ImageField(bucket="products")
        self.selected_methods: List[int] = []

    def default_form(self) -> Dict[str, Any]:
        return {
            'name_ar': "",
            'name_en': "",
            'category_id': "",
            'description_ar': "",
            'price': "",
            'old_price': "",
            'stock': "100",
            'is_active': True,
        }

    def load_options(self):
        categories = repository.get_categories(self.session)
        methods = repository.get_cutting_methods(self.session)
        if categories and not self.form.get('category_id'):
            self.form['category_id'] = categories[0].id
        return {'categories': categories, 'cutting_methods': methods}

    def load_record(self):
        product = repository.get_product_by_id(self.session, self.record_id)
        if product is not None:
            self.selected_methods = repository.get_product_cutting_methods(self.session, self.record_id)
        return product

    def fill(self, record) -> None:
        self.form.update({
            'name_ar': record.name_ar,
            'name_en': record.name_en,
            'category_id': record.category_id or "",
            'description_ar': record.description_ar,
            'price': str(record.price),
            'old_price': "" if record.old_price is None else str(record.old_price),
            'stock': str(record.stock),
            'is_active': record.is_active,
        })
        self.image.stored_url = record.image_url

    def toggle_method(self, method_id: int) -> None:
        if method_id in self.selected_methods:
            self.selected_methods = [m for m in self.selected_methods if m != method_id]
        else:
            self.selected_methods = self.selected_methods + [method_id]

    def validate(self) -> Dict[str, Any]:
        payload = {
            'name_ar': self.required_text('name_ar', "يرجى إدخال اسم المنتج"),
            'name_en': str(self.form.get('name_en') or "").strip(),
            'description_ar': str(self.form.get('description_ar') or "").strip(),
            'category_id': self.required_text('category_id', "يرجى اختيار القسم"),
            'price': self.required_number('price', "يرجى إدخال سعر صحيح"),
            'old_price': self.optional_number('old_price', "يرجى إدخال سعر قديم صحيح"),
            'stock': self.integer('stock'),
            'is_active': bool(self.form.get('is_active')),
        }
        return payload

    def create(self, payload):
        payload['image_url'] = self.image.resolve(self.session)
        product = repository.create_product(self.session, payload)
        if self.selected_methods:
            repository.link_product_cutting_methods(self.session, product.id, self.selected_methods)
        return product

    def update(self, payload):
        payload['image_url'] = self.image.resolve(self.session)
        product = repository.update_product(self.session, self.record_id, payload)
        repository.set_product_cutting_methods(self.session, self.record_id, self.selected_methods)
        return product


# ============ CATEGORIES ============

class CategoryListController(ListController):
    delete_notice = "تم حذف القسم"

    def load_items(self):
        return repository.get_categories_with_product_count(self.session)

    def delete_item(self, item_key):
        repository.delete_category(self.session, item_key)

    def reconcile(self, record) -> None:
        """Merge a saved category; a new one starts with no products."""
        if record.product_count is None:
            existing = self.find(record.id)
            count = existing.product_count if existing is not None else 0
            record = replace(record, product_count=count or 0)
        super().reconcile(record)


class CategoryFormController(FormController):
    created_notice = "تمت إضافة القسم بنجاح!"
    updated_notice = "تم تحديث القسم بنجاح!"

    def __init__(self, session, record_id: Optional[str] = None):
        super().__init__(session, record_id)
        self.image = ImageField(bucket="categories")

    def default_form(self) -> Dict[str, Any]:
        return {'id': "", 'name_ar': "", 'name_en': "", 'position': 0}

    def load_record(self):
        return repository.get_category_by_id(self.session, self.record_id)

    def fill(self, record) -> None:
        self.form.update({
            'id': record.id,
            'name_ar': record.name_ar,
            'name_en': record.name_en,
            'position': record.position,
        })
        self.image.stored_url = record.image_url

    def validate(self) -> Dict[str, Any]:
        payload = {
            'name_ar': self.required_text('name_ar', "يرجى إدخال اسم القسم"),
            'name_en': str(self.form.get('name_en') or "").strip(),
            'position': self.integer('position'),
        }
        if not self.is_edit:
            slug = category_slug(self.form.get('id'))
            if not slug:
                raise ValidationError("يجب إدخال معرف للقسم (مثلاً: sheep)", field='id')
            payload['id'] = slug
        return payload

    def create(self, payload):
        payload['image_url'] = self.image.resolve(self.session)
        return repository.create_category(self.session, payload)

    def update(self, payload):
        payload['image_url'] = self.image.resolve(self.session)
        return repository.update_category(self.session, self.record_id, payload)


# ============ CUTTING METHODS ============

class CuttingMethodListController(ListController):
    delete_notice = "تم حذف طريقة التقطيع"

    def load_items(self):
        return repository.get_cutting_methods(self.session)

    def delete_item(self, item_key):
        repository.delete_cutting_method(self.session, item_key)


class CuttingMethodFormController(FormController):
    created_notice = "تمت إضافة طريقة التقطيع بنجاح!"
    updated_notice = "تم تحديث طريقة التقطيع بنجاح!"

    def default_form(self) -> Dict[str, Any]:
        return {'name_ar': ""}

    def load_record(self):
        return repository.get_cutting_method_by_id(self.session, self.record_id)

    def fill(self, record) -> None:
        self.form['name_ar'] = record.name_ar

    def validate(self) -> Dict[str, Any]:
        return {'name_ar': self.required_text('name_ar', "يرجى إدخال اسم طريقة التقطيع")}

    def create(self, payload):
        return repository.create_cutting_method(self.session, payload)

    def update(self, payload):
        return repository.update_cutting_method(self.session, self.record_id, payload)


# ============ BANNERS ============

class BannerListController(ListController):
    delete_notice = "تم حذف العرض"

    def load_items(self):
        return repository.get_banners(self.session)

    def delete_item(self, item_key):
        repository.delete_banner(self.session, item_key)


class BannerFormController(FormController):
    created_notice = "تمت إضافة العرض بنجاح!"
    updated_notice = "تم تحديث العرض بنجاح!"

    def __init__(self, session, record_id: Optional[str] = None):
        super().__init__(session, record_id)
        self.image = ImageField(bucket="banners")

    def default_form(self) -> Dict[str, Any]:
        return {'title': "", 'is_active': True, 'display_order': 0}

    def load_record(self):
        return repository.get_banner_by_id(self.session, self.record_id)

    def fill(self, record) -> None:
        self.form.update({
            'title': record.title,
            'is_active': record.is_active,
            'display_order': record.display_order,
        })
        self.image.stored_url = record.image_url

    def validate(self) -> Dict[str, Any]:
        if not self.image.has_pending and not self.image.stored_url:
            raise ValidationError("يجب اختيار صورة للعرض", field='image')
        return {
            'title': str(self.form.get('title') or "").strip(),
            'is_active': bool(self.form.get('is_active')),
            'display_order': self.integer('display_order'),
        }

    def create(self, payload):
        payload['image_url'] = self.image.resolve(self.session)
        return repository.create_banner(self.session, payload)

    def update(self, payload):
        payload['image_url'] = self.image.resolve(self.session)
        return repository.update_banner(self.session, self.record_id, payload)
