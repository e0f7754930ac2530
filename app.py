"""
Al-Raed Admin Dashboard
Store management for the Al-Raed meat delivery app.
Features: admin-only sign-in, catalog management, orders, customers, reports.
"""

import logging

import streamlit as st

from raed_admin.core.config import STORE_NAME, AppConfig
from raed_admin.core.errors import ConfigurationError, SessionExpiredError
from raed_admin.data.storage import ObjectStorage
from raed_admin.data.store import DataStore
from raed_admin.services.auth import AuthService
from raed_admin.ui.auth import check_login, expire_session, get_current_session, get_current_user, logout
from raed_admin.ui.pages import (
    render_banners_page,
    render_categories_page,
    render_customers_page,
    render_cutting_methods_page,
    render_dashboard_page,
    render_orders_page,
    render_products_page,
    render_reports_page,
    render_search_page,
    render_settings_page,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIGURATION
# =============================================================================

st.set_page_config(
    page_title=f"{STORE_NAME} - لوحة التحكم",
    page_icon="🥩",
    layout="wide",
    initial_sidebar_state="expanded"
)

PAGES = {
    "🏠 الرئيسية": render_dashboard_page,
    "📦 الطلبات": render_orders_page,
    "🥩 المنتجات": render_products_page,
    "📂 الأقسام": render_categories_page,
    "🔪 طرق التقطيع": render_cutting_methods_page,
    "🖼️ العروض": render_banners_page,
    "👥 العملاء": render_customers_page,
    "📈 التقارير": render_reports_page,
    "🔍 البحث": render_search_page,
    "⚙️ الإعدادات": render_settings_page,
}


@st.cache_resource
def get_services(_config: AppConfig):
    """Build the store, storage and auth clients once per server process."""
    store = DataStore(_config)
    storage = ObjectStorage(_config)
    return store, storage, AuthService(_config, store, storage)


def main():
    """Main application entry point."""

    try:
        config = AppConfig.load().validate()
    except ConfigurationError as e:
        st.error(f"⚠️ {e.message}")
        st.stop()

    store, storage, auth_service = get_services(config)

    # Authentication check
    if not check_login(auth_service):
        st.stop()

    session = get_current_session()
    if session.is_expired():
        expire_session()

    # Sidebar
    with st.sidebar:
        st.markdown(f"### {STORE_NAME}")
        st.markdown(f"**المستخدم:** {get_current_user()}")
        st.markdown("---")

        page = st.radio("القائمة", list(PAGES))

        st.markdown("---")
        if st.button("🚪 تسجيل الخروج"):
            logout(auth_service)

    # Page routing
    try:
        PAGES[page](session)
    except SessionExpiredError:
        logger.info(f"Session expired for {session.email}")
        expire_session()


if __name__ == "__main__":
    main()
