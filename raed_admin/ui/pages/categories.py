"""
Categories page with product counts.
"""

import streamlit as st

from ...controllers import CategoryFormController, CategoryListController, PageStatus
from ..loading import confirm_delete, render_error_banner, render_notice
from ..state import (
    NEW, apply_upload, editing, ensure_loaded, form_record_id, get_controller,
    render_image_input, saved_to_list, start_editing, stop_editing,
)

PAGE = "categories"


def render_categories_page(session):
    st.header("📂 الأقسام")

    if editing(PAGE) is not None:
        render_category_form(session)
        return

    controller = get_controller(PAGE, lambda: CategoryListController(session))
    ensure_loaded(controller)
    render_notice(controller.state)
    render_error_banner(controller.state, PAGE)

    if st.button("➕ إضافة قسم", type="primary"):
        start_editing(PAGE, NEW)
        st.rerun()

    if controller.state.status == PageStatus.LOADED and not controller.items:
        st.info("لا توجد أقسام")
        return

    columns = st.columns(3)
    for index, category in enumerate(controller.items):
        with columns[index % 3]:
            with st.container(border=True):
                if category.image_url:
                    st.image(category.image_url, use_container_width=True)
                st.markdown(f"**{category.name_ar}**")
                st.caption(f"{category.name_en or category.id} · {category.product_count} منتج")
                if st.button("✏️ تعديل", key=f"edit_{category.id}"):
                    start_editing(PAGE, category.id)
                    st.rerun()
                if confirm_delete(f"category_{category.id}"):
                    controller.remove(category.id, confirmed=True)
                    st.rerun()


def render_category_form(session):
    form = get_controller(f"{PAGE}_form", lambda: CategoryFormController(session, form_record_id(PAGE)))
    ensure_loaded(form)

    st.subheader("تعديل القسم" if form.is_edit else "إضافة قسم جديد")
    if st.button("→ رجوع"):
        stop_editing(PAGE)
        st.rerun()

    if form.state.status == PageStatus.NOT_FOUND:
        st.error(form.state.error)
        return
    render_error_banner(form.state, f"{PAGE}_form")

    upload = render_image_input(form.image, "صورة القسم", key=f"{PAGE}_image")

    with st.form("category_form"):
        category_id = st.text_input(
            "معرف القسم (بالإنجليزية) *",
            value=form.form['id'],
            disabled=form.is_edit,
            help="مثلاً: sheep",
        )
        name_ar = st.text_input("اسم القسم (عربي) *", value=form.form['name_ar'])
        name_en = st.text_input("اسم القسم (إنجليزي)", value=form.form['name_en'])
        position = st.number_input("الترتيب", min_value=0, step=1, value=int(form.form['position'] or 0))
        submitted = st.form_submit_button("💾 حفظ", type="primary")

    if submitted:
        if not form.is_edit:
            form.set('id', category_id)
        form.set('name_ar', name_ar)
        form.set('name_en', name_en)
        form.set('position', position)
        apply_upload(form.image, upload)

        with st.spinner("جاري الحفظ..."):
            record = form.submit()
        if record is not None:
            saved_to_list(PAGE, form)
        st.rerun()
