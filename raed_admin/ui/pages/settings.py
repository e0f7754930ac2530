"""
App settings page.
"""

import streamlit as st

from ...controllers import SettingsController
from ..loading import render_error_banner, render_notice
from ..state import ensure_loaded, get_controller

PAGE = "settings"


def render_settings_page(session):
    st.header("⚙️ الإعدادات")

    controller = get_controller(PAGE, lambda: SettingsController(session))
    ensure_loaded(controller)
    render_notice(controller.state)
    render_error_banner(controller.state, PAGE)

    st.subheader("حالة التطبيق")
    is_active = st.toggle(
        "استقبال الطلبات",
        value=controller.form['is_app_active'],
        help="عند الإيقاف لن يتمكن العملاء من إرسال طلبات جديدة",
    )
    if is_active != controller.form['is_app_active']:
        controller.toggle_active(is_active)
        st.rerun()

    st.markdown("---")

    with st.form("settings_form"):
        delivery_fee = st.text_input("رسوم التوصيل (ر.س)", value=controller.form['delivery_fee'])
        tax_percentage = st.text_input("نسبة الضريبة (%)", value=controller.form['tax_percentage'])
        contact_phone = st.text_input("رقم التواصل", value=controller.form['contact_phone'])
        submitted = st.form_submit_button("💾 حفظ الإعدادات", type="primary")

    if submitted:
        controller.set('delivery_fee', delivery_fee)
        controller.set('tax_percentage', tax_percentage)
        controller.set('contact_phone', contact_phone)
        with st.spinner("جاري الحفظ..."):
            controller.save()
        st.rerun()
