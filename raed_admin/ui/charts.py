"""
Visualization components for the admin dashboard.
"""

from typing import Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..data.reports import to_frame

BRAND_COLOR = '#B91C1C'

STATUS_COLORS = {
    "new": '#3B82F6',
    "processing": '#F59E0B',
    "shipping": '#8B5CF6',
    "completed": '#10B981',
    "cancelled": '#EF4444',
}


def _empty_figure(message: str = "لا توجد بيانات") -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, showarrow=False)
    return fig


def plot_sales_trend(sales: List[Dict]) -> go.Figure:
    """
    Create the daily sales trend chart.

    Args:
        sales: Rows from reports.sales_series with label, sales, orders

    Returns:
        Plotly figure with sales and order count
    """
    df: pd.DataFrame = to_frame(sales)
    if df.empty:
        return _empty_figure()

    fig = make_subplots(specs=[[{"secondary_y": True}]])

    fig.add_trace(
        go.Bar(
            x=df['label'],
            y=df['sales'],
            name='المبيعات',
            marker_color=BRAND_COLOR,
            hovertemplate='<b>%{x}</b><br>%{y:,.2f} ر.س<extra></extra>'
        ),
        secondary_y=False
    )

    fig.add_trace(
        go.Scatter(
            x=df['label'],
            y=df['orders'],
            name='الطلبات',
            mode='lines+markers',
            marker=dict(color='#1F2937', size=8),
            hovertemplate='<b>%{x}</b><br>%{y} طلب<extra></extra>'
        ),
        secondary_y=True
    )

    fig.update_layout(
        title='المبيعات خلال آخر 7 أيام',
        height=400,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        hovermode='x unified'
    )
    fig.update_yaxes(title_text="ر.س", secondary_y=False)
    fig.update_yaxes(title_text="عدد الطلبات", rangemode='tozero', secondary_y=True)

    return fig


def plot_top_products(products: List[Dict]) -> go.Figure:
    """Horizontal bar chart of the best-selling products by quantity."""
    df = to_frame(products)
    if df.empty:
        return _empty_figure()

    df = df.iloc[::-1]
    fig = px.bar(
        df,
        x='quantity',
        y='name',
        orientation='h',
        title='المنتجات الأكثر مبيعاً',
        hover_data={'revenue': ':,.2f'},
        labels={'quantity': 'الكمية', 'name': 'المنتج', 'revenue': 'الإيرادات'}
    )
    fig.update_traces(marker_color=BRAND_COLOR)
    fig.update_layout(height=400)
    return fig


def plot_status_distribution(distribution: List[Dict]) -> go.Figure:
    """Donut chart of orders per status."""
    df = to_frame(distribution)
    if df.empty:
        return _empty_figure()

    fig = px.pie(
        df,
        values='value',
        names='label',
        color='name',
        color_discrete_map=STATUS_COLORS,
        title='توزيع حالات الطلبات',
        hole=0.4
    )
    fig.update_traces(textposition='inside', textinfo='percent+label')
    return fig
