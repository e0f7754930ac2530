"""
Home page: headline counters and latest orders.
"""

import pandas as pd
import streamlit as st

from ...controllers import DashboardController
from ...core.utils import format_currency, short_id
from ..loading import render_error_banner
from ..state import ensure_loaded, get_controller

PAGE = "dashboard"


def render_dashboard_page(session):
    """Render main dashboard overview."""
    st.header("لوحة التحكم")

    controller = get_controller(PAGE, lambda: DashboardController(session))
    ensure_loaded(controller)
    render_error_banner(controller.state, PAGE)

    col_refresh, _ = st.columns([1, 5])
    with col_refresh:
        if st.button("🔄 تحديث"):
            controller.load()
            st.rerun()

    summary = controller.state.data
    if not summary:
        return

    # KPI Cards
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("إجمالي المبيعات", format_currency(summary['total_sales']))
    with col2:
        st.metric("الطلبات النشطة", f"{summary['active_orders']:,}")
    with col3:
        st.metric("المنتجات", f"{summary['products_count']:,}")
    with col4:
        st.metric("العملاء", f"{summary['customers_count']:,}")

    st.markdown("---")
    st.subheader("أحدث الطلبات")

    latest = summary['latest_orders']
    if not latest:
        st.info("لا توجد طلبات بعد")
        return

    df = pd.DataFrame([
        {
            'رقم الطلب': f"#{short_id(o.id)}",
            'العميل': o.customer_name,
            'المبلغ': format_currency(o.total_amount),
            'الحالة': o.status_label,
            'التاريخ': (o.created_at or "")[:10],
        }
        for o in latest
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)
