"""
Global search across products, orders and customers.
"""

import pandas as pd
import streamlit as st

from ...controllers import SearchController
from ...core.utils import format_currency, short_id
from ..loading import loading, render_error_banner
from ..state import get_controller

PAGE = "search"


def render_search_page(session):
    st.header("🔍 البحث")

    controller = get_controller(PAGE, lambda: SearchController(session))

    query = st.text_input(
        "ابحث عن منتج أو طلب أو عميل",
        value=controller.query,
        placeholder="الاسم، رقم الهاتف، المدينة أو رقم الطلب",
    )
    if query.strip() != controller.query:
        with loading("جاري البحث..."):
            controller.search(query)

    render_error_banner(controller.state, PAGE)

    results = controller.state.data
    if not controller.query or not results:
        return

    if controller.total_results == 0:
        st.info(f'لا توجد نتائج لـ "{controller.query}"')
        return

    tab1, tab2, tab3 = st.tabs([
        f"المنتجات ({len(results['products'])})",
        f"الطلبات ({len(results['orders'])})",
        f"العملاء ({len(results['customers'])})",
    ])

    with tab1:
        if results['products']:
            st.dataframe(pd.DataFrame([
                {
                    'المنتج': p.name_ar,
                    'القسم': (p.category or {}).get('name_ar') or p.category_id or "-",
                    'السعر': format_currency(p.price),
                    'المخزون': p.stock,
                }
                for p in results['products']
            ]), use_container_width=True, hide_index=True)

    with tab2:
        if results['orders']:
            st.dataframe(pd.DataFrame([
                {
                    'رقم الطلب': f"#{short_id(o.id)}",
                    'العميل': o.customer_name,
                    'المدينة': o.city or "-",
                    'المبلغ': format_currency(o.total_amount),
                    'الحالة': o.status_label,
                }
                for o in results['orders']
            ]), use_container_width=True, hide_index=True)

    with tab3:
        if results['customers']:
            st.dataframe(pd.DataFrame([
                {
                    'الاسم': c.full_name or "-",
                    'الهاتف': c.phone or "-",
                    'البريد الإلكتروني': c.email or "-",
                }
                for c in results['customers']
            ]), use_container_width=True, hide_index=True)
