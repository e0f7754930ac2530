"""
Customers page.
"""

import pandas as pd
import streamlit as st

from ...controllers import CustomerListController, PageStatus
from ..loading import render_error_banner
from ..state import ensure_loaded, get_controller

PAGE = "customers"


def render_customers_page(session):
    st.header("👥 العملاء")

    controller = get_controller(PAGE, lambda: CustomerListController(session))
    ensure_loaded(controller)
    render_error_banner(controller.state, PAGE)

    if controller.state.status == PageStatus.LOADED and not controller.items:
        st.info("لا يوجد عملاء")
        return

    df = pd.DataFrame([
        {
            'الاسم': p.full_name or "-",
            'الهاتف': p.phone or "-",
            'البريد الإلكتروني': p.email or "-",
            'الدور': "مدير" if p.is_admin_profile() else "عميل",
            'تاريخ التسجيل': (p.created_at or "")[:10],
        }
        for p in controller.items
    ])
    st.metric("عدد العملاء", len(df))
    st.dataframe(df, use_container_width=True, hide_index=True)

    csv = df.to_csv(index=False)
    st.download_button("📥 تحميل البيانات", csv, "customers.csv", "text/csv")
