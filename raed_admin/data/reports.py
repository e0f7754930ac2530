"""
Reporting aggregations over orders and order items already in memory.

Pure functions: no I/O, no caching. Every call recomputes from its inputs.
"""

import math
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..core.config import SALES_WINDOW_DAYS, TOP_PRODUCTS_LIMIT, UNKNOWN_PRODUCT_NAME
from .models import ACTIVE_STATUSES, Order, OrderItem, OrderStatus, Product, Profile

ARABIC_WEEKDAYS = ["الإثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"]


def order_day(order: Order) -> str:
    """Creation date as the YYYY-MM-DD prefix of the stored timestamp."""
    return (order.created_at or "")[:10]


def day_label(day: date) -> str:
    return f"{ARABIC_WEEKDAYS[day.weekday()]} {day.day}"


def sales_series(
    orders: Sequence[Order],
    today: Optional[date] = None,
    days: int = SALES_WINDOW_DAYS,
) -> List[Dict]:
    """
    Non-cancelled sales per calendar day over the last ``days`` days.

    Args:
        orders: Orders to aggregate
        today: Last day of the window (defaults to the current date)
        days: Window length

    Returns:
        Exactly ``days`` entries, oldest first, each with date, label,
        sales and orders
    """
    today = today or date.today()
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    buckets = {d.isoformat(): {'sales': 0.0, 'orders': 0} for d in window}
    for order in orders:
        if order.status == OrderStatus.CANCELLED.value:
            continue
        bucket = buckets.get(order_day(order))
        if bucket is None:
            continue
        bucket['sales'] += order.total_amount or 0
        bucket['orders'] += 1

    return [
        {
            'date': d.isoformat(),
            'label': day_label(d),
            'sales': buckets[d.isoformat()]['sales'],
            'orders': buckets[d.isoformat()]['orders'],
        }
        for d in window
    ]


def top_products(items: Sequence[OrderItem], limit: int = TOP_PRODUCTS_LIMIT) -> List[Dict]:
    """Products ranked by quantity sold; ties keep first-seen order."""
    products: Dict[str, Dict] = {}
    for item in items:
        entry = products.get(item.product_id)
        if entry is None:
            entry = {
                'product_id': item.product_id,
                'name': item.product_name_ar or UNKNOWN_PRODUCT_NAME,
                'quantity': 0,
                'revenue': 0.0,
            }
            products[item.product_id] = entry
        entry['quantity'] += item.qty
        entry['revenue'] += item.unit_price * item.qty

    ranked = sorted(products.values(), key=lambda p: p['quantity'], reverse=True)
    return ranked[:limit]


def status_distribution(orders: Sequence[Order]) -> List[Dict]:
    """One bucket per status present in the data, in first-seen order."""
    counts: Dict[str, int] = {}
    for order in orders:
        counts[order.status] = counts.get(order.status, 0) + 1
    return [
        {'name': status, 'label': OrderStatus.label_for(status), 'value': count}
        for status, count in counts.items()
    ]


def half_up(value: float) -> int:
    """Nearest integer with halves rounded up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def summary_kpis(orders: Sequence[Order]) -> Dict:
    """Revenue, average order value and completion rate over completed orders."""
    completed = [o for o in orders if o.status == OrderStatus.COMPLETED.value]
    total_revenue = sum(o.total_amount or 0 for o in completed)
    total_orders = len(orders)

    return {
        'total_revenue': total_revenue,
        'average_order_value': total_revenue / len(completed) if completed else 0,
        'total_orders': total_orders,
        'completed_orders': len(completed),
        'completion_rate': half_up(len(completed) / total_orders * 100) if total_orders else 0,
    }


def dashboard_summary(
    orders: Sequence[Order],
    products: Sequence[Product],
    profiles: Sequence[Profile],
    latest: int = 5,
) -> Dict:
    """Home page counters and the most recent orders."""
    active = {status.value for status in ACTIVE_STATUSES}
    return {
        'total_sales': sum(
            o.total_amount or 0 for o in orders if o.status == OrderStatus.COMPLETED.value
        ),
        'active_orders': sum(1 for o in orders if o.status in active),
        'products_count': len(products),
        'customers_count': len(profiles),
        'latest_orders': list(orders[:latest]),
    }


def build_report(
    orders: Sequence[Order],
    items: Sequence[OrderItem],
    today: Optional[date] = None,
) -> Dict:
    """All report sections in one pass over the inputs."""
    return {
        'sales': sales_series(orders, today=today),
        'top_products': top_products(items),
        'status_distribution': status_distribution(orders),
        'kpis': summary_kpis(orders),
    }


def to_frame(rows: List[Dict]) -> pd.DataFrame:
    """Report rows as a DataFrame for charts and tables."""
    return pd.DataFrame(rows)
