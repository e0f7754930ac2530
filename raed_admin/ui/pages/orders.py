"""
Orders page: status filter, status changes, order detail and delete.
"""

import pandas as pd
import streamlit as st

from ...controllers import OrderDetailController, OrderListController, PageStatus
from ...core.utils import format_currency, short_id
from ...data.models import OrderStatus
from ..loading import confirm_delete, render_error_banner, render_notice
from ..state import drop_controller, ensure_loaded, get_controller

PAGE = "orders"
ALL_STATUSES = "__all__"
STATUS_ICONS = {
    "new": "🔵",
    "processing": "🟠",
    "shipping": "🟣",
    "completed": "🟢",
    "cancelled": "🔴",
}


def _status_select(label: str, current: str, key: str) -> str:
    codes = OrderStatus.codes()
    return st.selectbox(
        label,
        codes,
        index=codes.index(current) if current in codes else 0,
        format_func=OrderStatus.label_for,
        key=key,
    )


def render_orders_page(session):
    st.header("📦 الطلبات")

    order_id = st.session_state.get("order_detail")
    if order_id is not None:
        render_order_detail(session, order_id)
        return

    controller = get_controller(PAGE, lambda: OrderListController(session))
    ensure_loaded(controller)
    render_notice(controller.state)
    render_error_banner(controller.state, PAGE)

    options = [ALL_STATUSES] + OrderStatus.codes()
    current = controller.status_filter or ALL_STATUSES
    selected = st.selectbox(
        "تصفية حسب الحالة",
        options,
        index=options.index(current) if current in options else 0,
        format_func=lambda s: "كل الطلبات" if s == ALL_STATUSES else OrderStatus.label_for(s),
    )
    if selected != current:
        controller.filter_by_status(None if selected == ALL_STATUSES else selected)
        st.rerun()

    if controller.state.status == PageStatus.LOADED and not controller.items:
        st.info("لا توجد طلبات")
        return

    for order in controller.items:
        icon = STATUS_ICONS.get(order.status, "⚪")
        title = (
            f"{icon} #{short_id(order.id)} · {order.customer_name} · "
            f"{format_currency(order.total_amount)} · {order.status_label}"
        )
        with st.expander(title):
            col1, col2 = st.columns(2)
            with col1:
                st.markdown(f"**الهاتف:** {order.phone or '-'}")
                st.markdown(f"**المدينة:** {order.city or '-'}")
                st.markdown(f"**العنوان:** {order.address or '-'}")
                st.markdown(f"**الدفع:** {order.payment_label}")
                st.caption((order.created_at or "")[:16].replace("T", " "))
            with col2:
                new_status = _status_select("الحالة", order.status, key=f"status_{order.id}")
                if new_status != order.status:
                    if st.button("تحديث الحالة", key=f"apply_{order.id}", type="primary"):
                        controller.change_status(order.id, new_status)
                        st.rerun()
                if st.button("📄 التفاصيل", key=f"detail_{order.id}"):
                    drop_controller("order_detail_controller")
                    st.session_state["order_detail"] = order.id
                    st.rerun()
                if confirm_delete(f"order_{order.id}"):
                    controller.remove(order.id, confirmed=True)
                    st.rerun()


def render_order_detail(session, order_id):
    detail = get_controller("order_detail_controller", lambda: OrderDetailController(session, order_id))
    ensure_loaded(detail)

    if st.button("→ رجوع للطلبات"):
        st.session_state.pop("order_detail", None)
        drop_controller("order_detail_controller")
        st.rerun()

    if detail.state.status == PageStatus.NOT_FOUND:
        st.error(detail.state.error)
        return
    render_notice(detail.state)
    render_error_banner(detail.state, "order_detail")

    order = detail.record
    if order is None:
        return

    st.subheader(f"طلب #{short_id(order.id)}")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("الإجمالي", format_currency(order.total_amount))
    with col2:
        st.metric("الحالة", order.status_label)
    with col3:
        st.metric("طريقة الدفع", order.payment_label)

    st.markdown("#### العميل")
    st.markdown(f"**الاسم:** {order.customer_name}")
    st.markdown(f"**الهاتف:** {order.phone or '-'}")
    st.markdown(f"**العنوان:** {order.city or ''} {order.address or ''}")

    st.markdown("#### المنتجات")
    rows = [
        {
            'المنتج': item.display_name,
            'الكمية': item.qty,
            'سعر الوحدة': format_currency(item.unit_price),
            'المجموع': format_currency(item.subtotal),
            'الوزن': item.metadata.weight or "-",
            'التقطيع': item.metadata.cutting or "-",
            'ملاحظات': item.metadata.notes or "-",
        }
        for item in order.items
    ]
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        st.info("لا توجد منتجات في هذا الطلب")

    new_status = _status_select("تغيير الحالة", order.status, key="detail_status")
    if new_status != order.status and st.button("تحديث الحالة", type="primary"):
        if detail.change_status(new_status):
            list_controller = st.session_state.get(PAGE)
            if list_controller is not None and list_controller.find(order.id) is not None:
                list_controller.reconcile(detail.record)
        st.rerun()
