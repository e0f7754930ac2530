"""
Products page: list with category filter, add/edit form, delete.
"""

import streamlit as st

from ...controllers import PageStatus, ProductFormController, ProductListController
from ...core.utils import format_currency
from ..loading import confirm_delete, render_error_banner, render_notice
from ..state import (
    NEW, apply_upload, editing, ensure_loaded, form_record_id, get_controller,
    render_image_input, saved_to_list, start_editing, stop_editing,
)

PAGE = "products"
ALL_CATEGORIES = "__all__"


def render_products_page(session):
    """Render the products page."""
    st.header("🥩 المنتجات")

    if editing(PAGE) is not None:
        render_product_form(session)
        return

    controller = get_controller(PAGE, lambda: ProductListController(session))
    ensure_loaded(controller)
    render_notice(controller.state)
    render_error_banner(controller.state, PAGE)

    col1, col2 = st.columns([3, 1])
    with col1:
        names = {c.id: c.name_ar for c in controller.categories}
        options = [ALL_CATEGORIES] + list(names)
        current = controller.category_id or ALL_CATEGORIES
        selected = st.selectbox(
            "القسم",
            options,
            index=options.index(current) if current in options else 0,
            format_func=lambda cid: "كل الأقسام" if cid == ALL_CATEGORIES else names.get(cid, cid),
        )
        if selected != current:
            controller.filter_by_category(None if selected == ALL_CATEGORIES else selected)
            st.rerun()
    with col2:
        if st.button("➕ إضافة منتج", type="primary"):
            start_editing(PAGE, NEW)
            st.rerun()

    if controller.state.status == PageStatus.LOADED and not controller.items:
        st.info("لا توجد منتجات")
        return

    for product in controller.items:
        with st.container(border=True):
            col1, col2, col3, col4 = st.columns([1, 4, 2, 2])
            with col1:
                if product.image_url:
                    st.image(product.image_url, width=64)
            with col2:
                st.markdown(f"**{product.name_ar}**")
                category = (product.category or {}).get('name_ar') or product.category_id or "-"
                st.caption(f"{category} · المخزون: {product.stock}")
                if not product.is_active:
                    st.caption("🔴 غير نشط")
            with col3:
                st.markdown(format_currency(product.price))
                if product.old_price:
                    st.caption(f"~~{format_currency(product.old_price)}~~")
            with col4:
                if st.button("✏️ تعديل", key=f"edit_{product.id}"):
                    start_editing(PAGE, product.id)
                    st.rerun()
                if confirm_delete(f"product_{product.id}"):
                    controller.remove(product.id, confirmed=True)
                    st.rerun()


def render_product_form(session):
    form = get_controller(f"{PAGE}_form", lambda: ProductFormController(session, form_record_id(PAGE)))
    ensure_loaded(form)

    st.subheader("تعديل المنتج" if form.is_edit else "إضافة منتج جديد")
    if st.button("→ رجوع"):
        stop_editing(PAGE)
        st.rerun()

    if form.state.status == PageStatus.NOT_FOUND:
        st.error(form.state.error)
        return
    render_error_banner(form.state, f"{PAGE}_form")

    categories = form.options.get('categories', [])
    methods = form.options.get('cutting_methods', [])
    category_names = {c.id: c.name_ar for c in categories}
    method_names = {m.id: m.name_ar for m in methods}
    category_ids = list(category_names)

    upload = render_image_input(form.image, "صورة المنتج", key=f"{PAGE}_image")

    with st.form("product_form"):
        name_ar = st.text_input("اسم المنتج (عربي) *", value=form.form['name_ar'])
        name_en = st.text_input("اسم المنتج (إنجليزي)", value=form.form['name_en'])
        category_id = st.selectbox(
            "القسم *",
            category_ids,
            index=category_ids.index(form.form['category_id']) if form.form['category_id'] in category_ids else 0,
            format_func=lambda cid: category_names.get(cid, cid),
        )
        description = st.text_area("الوصف", value=form.form['description_ar'])

        col1, col2, col3 = st.columns(3)
        with col1:
            price = st.text_input("السعر *", value=form.form['price'])
        with col2:
            old_price = st.text_input("السعر القديم", value=form.form['old_price'])
        with col3:
            stock = st.text_input("المخزون", value=form.form['stock'])

        selected_methods = st.multiselect(
            "طرق التقطيع المتاحة",
            list(method_names),
            default=[m for m in form.selected_methods if m in method_names],
            format_func=lambda mid: method_names.get(mid, str(mid)),
        )
        is_active = st.checkbox("نشط", value=form.form['is_active'])
        submitted = st.form_submit_button("💾 حفظ", type="primary")

    if submitted:
        form.set('name_ar', name_ar)
        form.set('name_en', name_en)
        form.set('category_id', category_id or "")
        form.set('description_ar', description)
        form.set('price', price)
        form.set('old_price', old_price)
        form.set('stock', stock)
        form.set('is_active', is_active)
        form.selected_methods = list(selected_methods)
        apply_upload(form.image, upload)

        with st.spinner("جاري الحفظ..."):
            record = form.submit()
        if record is not None:
            saved_to_list(PAGE, form)
        st.rerun()
