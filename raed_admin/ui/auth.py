"""
Authentication views for the admin dashboard.

The AdminSession lives in Streamlit session state only; nothing about it is
persisted between browser sessions.
"""

from typing import Optional

import streamlit as st

from ..controllers.session import LoginController
from ..core.config import STORE_NAME
from ..services.auth import AdminSession, AuthService

SESSION_KEY = "admin_session"
EXPIRED_KEY = "session_expired"
EXPIRED_MESSAGE = "انتهت الجلسة، يرجى تسجيل الدخول مرة أخرى"


def get_current_session() -> Optional[AdminSession]:
    """The signed-in admin session, or None."""
    return st.session_state.get(SESSION_KEY)


def get_current_user() -> str:
    """Email of the signed-in admin."""
    session = get_current_session()
    return session.email if session else "Unknown"


def check_login(auth_service: AuthService) -> bool:
    """
    Returns True if an admin session is active.

    Otherwise renders the login form and stores the session on success.
    """
    if get_current_session() is not None:
        return True

    if "login_controller" not in st.session_state:
        st.session_state["login_controller"] = LoginController(auth_service)
    controller: LoginController = st.session_state["login_controller"]

    st.markdown(f"## {STORE_NAME}")
    st.markdown("#### تسجيل الدخول للوحة التحكم")

    if st.session_state.get(EXPIRED_KEY):
        st.warning(EXPIRED_MESSAGE)

    with st.form("login_form"):
        email = st.text_input("البريد الإلكتروني")
        password = st.text_input("كلمة المرور", type="password")
        submitted = st.form_submit_button("دخول", type="primary")

    if submitted:
        with st.spinner("جاري التحقق..."):
            session = controller.login(email, password)
        if session is not None:
            st.session_state[SESSION_KEY] = session
            del st.session_state["login_controller"]
            st.session_state.pop(EXPIRED_KEY, None)
            st.rerun()

    if controller.state.error:
        st.error(controller.state.error)

    return False


def logout(auth_service: AuthService) -> None:
    """Revoke the session and clear all session state."""
    auth_service.sign_out(get_current_session())
    st.session_state.clear()
    st.rerun()


def expire_session() -> None:
    """Drop local state after the session expired; the login form explains why."""
    st.session_state.clear()
    st.session_state[EXPIRED_KEY] = True
    st.rerun()
