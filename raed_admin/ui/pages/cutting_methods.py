"""
Cutting methods page.
"""

import streamlit as st

from ...controllers import CuttingMethodFormController, CuttingMethodListController, PageStatus
from ..loading import confirm_delete, render_error_banner, render_notice
from ..state import (
    NEW, editing, ensure_loaded, form_record_id, get_controller,
    saved_to_list, start_editing, stop_editing,
)

PAGE = "cutting_methods"


def render_cutting_methods_page(session):
    st.header("🔪 طرق التقطيع")

    if editing(PAGE) is not None:
        render_cutting_method_form(session)
        return

    controller = get_controller(PAGE, lambda: CuttingMethodListController(session))
    ensure_loaded(controller)
    render_notice(controller.state)
    render_error_banner(controller.state, PAGE)

    if st.button("➕ إضافة طريقة", type="primary"):
        start_editing(PAGE, NEW)
        st.rerun()

    if controller.state.status == PageStatus.LOADED and not controller.items:
        st.info("لا توجد طرق تقطيع")
        return

    for method in controller.items:
        col1, col2, col3 = st.columns([6, 1, 2])
        with col1:
            st.markdown(f"**{method.name_ar}**")
        with col2:
            if st.button("✏️", key=f"edit_{method.id}"):
                start_editing(PAGE, method.id)
                st.rerun()
        with col3:
            if confirm_delete(f"method_{method.id}"):
                controller.remove(method.id, confirmed=True)
                st.rerun()


def render_cutting_method_form(session):
    form = get_controller(f"{PAGE}_form", lambda: CuttingMethodFormController(session, form_record_id(PAGE)))
    ensure_loaded(form)

    st.subheader("تعديل طريقة التقطيع" if form.is_edit else "إضافة طريقة تقطيع")
    if st.button("→ رجوع"):
        stop_editing(PAGE)
        st.rerun()

    if form.state.status == PageStatus.NOT_FOUND:
        st.error(form.state.error)
        return
    render_error_banner(form.state, f"{PAGE}_form")

    with st.form("cutting_method_form"):
        name_ar = st.text_input("الاسم *", value=form.form['name_ar'])
        submitted = st.form_submit_button("💾 حفظ", type="primary")

    if submitted:
        form.set('name_ar', name_ar)
        with st.spinner("جاري الحفظ..."):
            record = form.submit()
        if record is not None:
            saved_to_list(PAGE, form)
        st.rerun()
