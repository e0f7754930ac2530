"""
Promotional banners page.
"""

import streamlit as st

from ...controllers import BannerFormController, BannerListController, PageStatus
from ..loading import confirm_delete, render_error_banner, render_notice
from ..state import (
    NEW, apply_upload, editing, ensure_loaded, form_record_id, get_controller,
    render_image_input, saved_to_list, start_editing, stop_editing,
)

PAGE = "banners"


def render_banners_page(session):
    st.header("🖼️ العروض")

    if editing(PAGE) is not None:
        render_banner_form(session)
        return

    controller = get_controller(PAGE, lambda: BannerListController(session))
    ensure_loaded(controller)
    render_notice(controller.state)
    render_error_banner(controller.state, PAGE)

    if st.button("➕ إضافة عرض", type="primary"):
        start_editing(PAGE, NEW)
        st.rerun()

    if controller.state.status == PageStatus.LOADED and not controller.items:
        st.info("لا توجد عروض")
        return

    for banner in controller.items:
        with st.container(border=True):
            col1, col2, col3 = st.columns([3, 3, 2])
            with col1:
                if banner.image_url:
                    st.image(banner.image_url, use_container_width=True)
            with col2:
                st.markdown(f"**{banner.title or 'بدون عنوان'}**")
                status = "🟢 نشط" if banner.is_active else "🔴 غير نشط"
                st.caption(f"{status} · الترتيب: {banner.display_order}")
            with col3:
                if st.button("✏️ تعديل", key=f"edit_{banner.id}"):
                    start_editing(PAGE, banner.id)
                    st.rerun()
                if confirm_delete(f"banner_{banner.id}"):
                    controller.remove(banner.id, confirmed=True)
                    st.rerun()


def render_banner_form(session):
    form = get_controller(f"{PAGE}_form", lambda: BannerFormController(session, form_record_id(PAGE)))
    ensure_loaded(form)

    st.subheader("تعديل العرض" if form.is_edit else "إضافة عرض جديد")
    if st.button("→ رجوع"):
        stop_editing(PAGE)
        st.rerun()

    if form.state.status == PageStatus.NOT_FOUND:
        st.error(form.state.error)
        return
    render_error_banner(form.state, f"{PAGE}_form")

    upload = render_image_input(form.image, "صورة العرض *", key=f"{PAGE}_image")

    with st.form("banner_form"):
        title = st.text_input("العنوان", value=form.form['title'])
        display_order = st.number_input(
            "ترتيب العرض", min_value=0, step=1, value=int(form.form['display_order'] or 0)
        )
        is_active = st.checkbox("نشط", value=form.form['is_active'])
        submitted = st.form_submit_button("💾 حفظ", type="primary")

    if submitted:
        form.set('title', title)
        form.set('display_order', display_order)
        form.set('is_active', is_active)
        apply_upload(form.image, upload)

        with st.spinner("جاري الحفظ..."):
            record = form.submit()
        if record is not None:
            saved_to_list(PAGE, form)
        st.rerun()
