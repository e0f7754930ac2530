"""
Tests for the page controllers: loading states, confirmed deletes,
reconciliation after writes and form validation.
"""

from datetime import date

import pytest

from raed_admin.controllers import (
    BannerFormController,
    CategoryFormController,
    CategoryListController,
    DashboardController,
    ImageField,
    LoginController,
    OrderDetailController,
    OrderListController,
    PageStatus,
    ProductFormController,
    ProductListController,
    ReportsController,
    SearchController,
    SettingsController,
)
from raed_admin.core.errors import AuthorizationError, SessionExpiredError, StoreError


@pytest.fixture
def seeded(store):
    store.seed(
        "categories",
        {'id': "sheep", 'name_ar': "غنم", 'position': 1},
        {'id': "beef", 'name_ar': "بقر", 'position': 2},
    )
    store.seed("products", {'id': "p1", 'category_id': "sheep", 'name_ar': "نعيمي", 'price': 1200})
    store.seed("cutting_methods", {'id': 1, 'name_ar': "أرباع"}, {'id': 2, 'name_ar': "مفروم"})
    store.seed("product_cutting_methods", {'product_id': "p1", 'cutting_method_id': 1})
    store.seed("profiles", {'id': "u1", 'full_name': "أحمد", 'role': "customer"})
    store.seed(
        "orders",
        {'id': "o1", 'user_id': "u1", 'status': "new", 'total_amount': 100,
         'created_at': "2024-05-15T09:00:00"},
        {'id': "o2", 'status': "completed", 'total_amount': 300,
         'created_at': "2024-05-14T09:00:00"},
    )
    store.seed(
        "order_items",
        {'id': "i1", 'order_id': "o1", 'product_id': "p1", 'qty': 2, 'unit_price': 50, 'subtotal': 100},
    )
    return store


class TestListController:
    def test_load_moves_to_loaded(self, session, seeded):
        controller = CategoryListController(session)
        assert controller.state.status == PageStatus.IDLE
        assert controller.load()
        assert controller.state.status == PageStatus.LOADED
        assert [c.id for c in controller.items] == ["sheep", "beef"]

    def test_load_failure_records_error_verbatim(self, session, seeded):
        seeded.fail("select", "categories", StoreError("Throughput exceeded", code="ThrottlingException"))
        controller = CategoryListController(session)
        assert not controller.load()
        assert controller.state.status == PageStatus.ERROR
        assert controller.state.error == "Throughput exceeded"
        assert controller.state.error_code == "ThrottlingException"

    def test_delete_requires_confirmation(self, session, seeded):
        controller = CategoryListController(session)
        controller.load()
        assert controller.remove("beef") is False
        assert ("delete", "categories") not in seeded.calls
        assert len(controller.items) == 2

    def test_confirmed_delete(self, session, seeded):
        controller = CategoryListController(session)
        controller.load()
        assert controller.remove("beef", confirmed=True)
        assert [c.id for c in controller.items] == ["sheep"]
        assert controller.state.notice == "تم حذف القسم"

    def test_failed_delete_keeps_items(self, session, seeded):
        controller = CategoryListController(session)
        controller.load()
        seeded.fail("delete", "categories")
        assert not controller.remove("beef", confirmed=True)
        assert len(controller.items) == 2
        assert controller.state.error == "boom"

    def test_expired_session_propagates(self, expired_session, seeded):
        controller = CategoryListController(expired_session)
        with pytest.raises(SessionExpiredError):
            controller.load()


class TestOrders:
    def test_status_change_reconciles_by_key(self, session, seeded):
        controller = OrderListController(session)
        controller.load()
        assert controller.change_status("o1", "shipping")

        order = controller.find("o1")
        assert order.status == "shipping"
        assert order.profile.full_name == "أحمد"
        assert [o.id for o in controller.items] == ["o1", "o2"]
        assert controller.state.notice

    def test_failed_status_change_leaves_state(self, session, seeded):
        controller = OrderListController(session)
        controller.load()
        seeded.fail("update", "orders")
        assert not controller.change_status("o1", "completed")
        assert controller.find("o1").status == "new"
        assert controller.state.error == "boom"

    def test_filter_by_label(self, session, seeded):
        controller = OrderListController(session)
        controller.filter_by_status("مكتمل")
        assert controller.status_filter == "completed"
        assert [o.id for o in controller.items] == ["o2"]

    def test_detail_not_found(self, session, seeded):
        detail = OrderDetailController(session, "missing")
        assert not detail.load()
        assert detail.state.status == PageStatus.NOT_FOUND
        assert detail.state.error == "الطلب غير موجود"

    def test_detail_status_change(self, session, seeded):
        detail = OrderDetailController(session, "o1")
        assert detail.load()
        assert detail.record.items[0].display_name == "نعيمي"
        assert detail.change_status("cancelled")
        assert detail.record.status == "cancelled"


class TestCategoryForm:
    def test_new_category_id_is_slugged(self, session, seeded):
        form = CategoryFormController(session)
        form.load()
        form.set('id', "Sheep Meat")
        form.set('name_ar', "لحم غنم")
        record = form.submit()
        assert record.id == "sheep_meat"
        assert form.state.notice == "تمت إضافة القسم بنجاح!"

    def test_blank_id_fails_before_any_write(self, session, seeded):
        form = CategoryFormController(session)
        form.set('id', "   ")
        form.set('name_ar', "لحم")
        assert form.submit() is None
        assert form.state.error == "يجب إدخال معرف للقسم (مثلاً: sheep)"
        assert ("insert", "categories") not in seeded.calls

    def test_edit_missing_category(self, session, seeded):
        form = CategoryFormController(session, "ghost")
        assert not form.load()
        assert form.state.status == PageStatus.NOT_FOUND


class TestSavedRecordsInLists:
    def test_edited_category_keeps_product_count(self, session, seeded):
        seeded.seed("products", {'id': "p2", 'category_id': "sheep", 'name_ar': "حري", 'price': 1100})
        listing = CategoryListController(session)
        listing.load()
        assert listing.find("sheep").product_count == 2

        form = CategoryFormController(session, "sheep")
        assert form.load()
        form.set('name_ar', "غنم بلدي")
        assert form.submit() is not None
        listing.reconcile(form.saved)

        sheep = listing.find("sheep")
        assert sheep.name_ar == "غنم بلدي"
        assert sheep.product_count == 2

    def test_new_category_counts_zero(self, session, seeded):
        listing = CategoryListController(session)
        listing.load()

        form = CategoryFormController(session)
        form.set('id', "camel")
        form.set('name_ar', "حاشي")
        listing.reconcile(form.submit())

        assert [c.id for c in listing.items] == ["sheep", "beef", "camel"]
        assert listing.find("camel").product_count == 0

    def test_edited_product_keeps_category_name(self, session, seeded):
        listing = ProductListController(session)
        listing.load()
        assert listing.find("p1").category['name_ar'] == "غنم"

        form = ProductFormController(session, "p1")
        form.load()
        form.set('category_id', "beef")
        listing.reconcile(form.submit())

        assert listing.find("p1").category['name_ar'] == "بقر"

    def test_product_moved_out_of_filter_leaves_list(self, session, seeded):
        listing = ProductListController(session)
        listing.filter_by_category("sheep")
        assert [p.id for p in listing.items] == ["p1"]

        form = ProductFormController(session, "p1")
        form.load()
        form.set('category_id', "beef")
        listing.reconcile(form.submit())

        assert listing.items == []


class TestProductForm:
    def test_defaults_to_first_category(self, session, seeded):
        form = ProductFormController(session)
        form.load()
        assert form.form['category_id'] == "sheep"
        assert form.form['stock'] == "100"
        assert [m.id for m in form.options['cutting_methods']] == [1, 2]

    def test_validation_happens_before_upload(self, session, seeded, storage):
        form = ProductFormController(session)
        form.load()
        form.image.select("lamb.png", b"png")
        form.set('name_ar', "")
        assert form.submit() is None
        assert storage.uploads == []
        assert form.image.has_pending

    def test_create_uploads_image_and_links_methods(self, session, seeded, storage):
        form = ProductFormController(session)
        form.load()
        form.set('name_ar', "تيس")
        form.set('price', "950")
        form.toggle_method(2)
        form.image.select("goat.JPG", b"jpg")

        product = form.submit()
        assert product.image_url.endswith("goat.JPG")
        assert storage.uploads[0][0] == "products"
        links = [r for r in seeded.tables["product_cutting_methods"] if r['product_id'] == product.id]
        assert [r['cutting_method_id'] for r in links] == [2]

    def test_edit_replaces_method_links(self, session, seeded, storage):
        form = ProductFormController(session, "p1")
        assert form.load()
        assert form.form['name_ar'] == "نعيمي"
        assert form.selected_methods == [1]

        form.toggle_method(1)
        form.toggle_method(2)
        product = form.submit()
        assert product.id == "p1"
        assert storage.uploads == []
        links = [r for r in seeded.tables["product_cutting_methods"] if r['product_id'] == "p1"]
        assert [r['cutting_method_id'] for r in links] == [2]

    def test_negative_price_rejected(self, session, seeded):
        form = ProductFormController(session)
        form.load()
        form.set('name_ar', "تيس")
        form.set('price', "-5")
        assert form.submit() is None
        assert form.state.error == "يرجى إدخال سعر صحيح"


class TestBannerForm:
    def test_image_is_required(self, session, seeded):
        form = BannerFormController(session)
        form.set('title', "عرض العيد")
        assert form.submit() is None
        assert form.state.error == "يجب اختيار صورة للعرض"

    def test_create_with_image(self, session, seeded, storage):
        form = BannerFormController(session)
        form.image.select("eid.png", b"png")
        banner = form.submit()
        assert banner.image_url.startswith("https://cdn.example.com/banners/")
        assert storage.uploads[0][0] == "banners"


class TestImageField:
    def test_preview_is_separate_from_stored_url(self):
        field = ImageField("products", stored_url="https://x/old.png")
        field.select("new.png", b"abc")
        assert field.preview == "data:image/png;base64,YWJj"
        assert field.stored_url == "https://x/old.png"
        assert field.display_url == field.preview

    def test_resolve_without_pending_keeps_url(self, session, storage):
        field = ImageField("products", stored_url="https://x/old.png")
        assert field.resolve(session) == "https://x/old.png"
        assert storage.uploads == []

    def test_resolve_uploads_once(self, session, storage):
        field = ImageField("categories")
        field.select("c.webp", b"data")
        url = field.resolve(session)
        assert url == field.stored_url
        assert not field.has_pending
        assert field.resolve(session) == url
        assert len(storage.uploads) == 1


class TestSettings:
    def test_defaults_when_no_row(self, session, store):
        controller = SettingsController(session)
        assert controller.load()
        assert controller.form['delivery_fee'] == "0"
        assert controller.form['is_app_active'] is True

    def test_invalid_fee(self, session, store):
        controller = SettingsController(session)
        controller.set('delivery_fee', "abc")
        assert not controller.save()
        assert controller.state.error == "يرجى إدخال رسوم توصيل صحيحة"
        assert ("insert", "app_settings") not in store.calls

    def test_invalid_tax(self, session, store):
        controller = SettingsController(session)
        controller.set('tax_percentage', "")
        assert not controller.save()
        assert controller.state.error == "يرجى إدخال نسبة ضريبة صحيحة"

    def test_save(self, session, store):
        controller = SettingsController(session)
        controller.set('delivery_fee', "25")
        controller.set('tax_percentage', "15")
        controller.set('contact_phone', " 0550000000 ")
        assert controller.save()
        assert controller.state.notice == "تم حفظ الإعدادات بنجاح"
        assert store.tables["app_settings"][0]['contact_phone'] == "0550000000"

    def test_toggle(self, session, store):
        store.seed("app_settings", {'id': "s1", 'is_app_active': True})
        controller = SettingsController(session)
        controller.load()
        assert controller.toggle_active(False)
        assert controller.form['is_app_active'] is False
        assert controller.state.notice == "تم إيقاف التطبيق"

    def test_failed_toggle_reverts(self, session, store):
        controller = SettingsController(session)
        controller.load()
        assert not controller.toggle_active(False)
        assert controller.form['is_app_active'] is True
        assert controller.state.error == "Settings not found"


class TestReadOnlyScreens:
    def test_reports(self, session, seeded):
        controller = ReportsController(session, today=lambda: date(2024, 5, 15))
        assert controller.load()
        report = controller.state.data
        assert report['sales'][-1]['sales'] == 100
        assert report['sales'][-2]['sales'] == 300
        assert report['top_products'][0]['name'] == "نعيمي"
        assert report['kpis']['completion_rate'] == 50

    def test_dashboard(self, session, seeded):
        controller = DashboardController(session)
        assert controller.load()
        summary = controller.state.data
        assert summary['total_sales'] == 300
        assert summary['active_orders'] == 1
        assert summary['products_count'] == 1
        assert summary['customers_count'] == 1

    def test_search(self, session, seeded):
        controller = SearchController(session)
        assert controller.search("نعيمي")
        assert [p.id for p in controller.state.data['products']] == ["p1"]
        assert controller.total_results == 1

    def test_failed_search_drops_previous_results(self, session, seeded):
        controller = SearchController(session)
        assert controller.search("نعيمي")
        assert controller.total_results == 1

        seeded.fail("search", "orders")
        assert not controller.search("الرياض")
        assert controller.query == "الرياض"
        assert controller.state.data is None
        assert controller.total_results == 0
        assert controller.state.error == "boom"

    def test_blank_search_makes_no_calls(self, session, seeded):
        controller = SearchController(session)
        assert controller.search("   ")
        assert controller.total_results == 0
        assert not any(method == "search" for method, _ in seeded.calls)


class FakeAuth:
    def __init__(self, error=None, session=None):
        self.error = error
        self.session = session
        self.signed_out = []

    def sign_in(self, email, password):
        if self.error:
            raise self.error
        return self.session

    def sign_out(self, session):
        self.signed_out.append(session)


class TestLogin:
    def test_rejected_login_keeps_no_session(self):
        controller = LoginController(FakeAuth(error=AuthorizationError("ليس مديراً")))
        assert controller.login("user@raed.sa", "pw") is None
        assert controller.session is None
        assert controller.state.error == "ليس مديراً"

    def test_missing_credentials(self):
        auth = FakeAuth()
        controller = LoginController(auth)
        assert controller.login("", "") is None
        assert controller.state.error == "يرجى إدخال البريد الإلكتروني وكلمة المرور"

    def test_login_and_logout(self, session):
        auth = FakeAuth(session=session)
        controller = LoginController(auth)
        assert controller.login(" admin@raed.sa ", "pw") is session
        controller.logout()
        assert controller.session is None
        assert auth.signed_out == [session]
