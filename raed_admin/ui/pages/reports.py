"""
Reports page: KPIs, weekly sales, top products and status mix.
"""

import streamlit as st

from ...controllers import ReportsController
from ...core.utils import format_currency
from ...data.reports import to_frame
from ..charts import plot_sales_trend, plot_status_distribution, plot_top_products
from ..loading import render_error_banner
from ..state import ensure_loaded, get_controller

PAGE = "reports"


def render_reports_page(session):
    st.header("📈 التقارير")

    controller = get_controller(PAGE, lambda: ReportsController(session))
    ensure_loaded(controller)
    render_error_banner(controller.state, PAGE)

    if st.button("🔄 تحديث التقارير"):
        controller.load()
        st.rerun()

    report = controller.state.data
    if not report:
        return

    kpis = report['kpis']
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("إجمالي الإيرادات", format_currency(kpis['total_revenue']))
    with col2:
        st.metric("متوسط قيمة الطلب", format_currency(kpis['average_order_value']))
    with col3:
        st.metric("إجمالي الطلبات", f"{kpis['total_orders']:,}")
    with col4:
        st.metric("نسبة الإكمال", f"{kpis['completion_rate']}%")

    st.markdown("---")
    st.plotly_chart(plot_sales_trend(report['sales']), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(plot_top_products(report['top_products']), use_container_width=True)
    with col2:
        st.plotly_chart(plot_status_distribution(report['status_distribution']), use_container_width=True)

    with st.expander("🔍 البيانات"):
        sales = to_frame(report['sales'])
        st.dataframe(sales, use_container_width=True, hide_index=True)
        st.download_button("📥 تحميل المبيعات", sales.to_csv(index=False), "sales.csv", "text/csv")
