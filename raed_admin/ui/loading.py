"""
Feedback components: loading spinner, error banner, notices and the
delete confirmation step.
"""

from contextlib import contextmanager

import streamlit as st

from ..controllers.base import ViewState

LOADING_MESSAGE = "جاري التحميل..."


@contextmanager
def loading(message: str = LOADING_MESSAGE):
    """Show a spinner while a controller fetches."""
    with st.spinner(message):
        yield


def render_error_banner(state: ViewState, key: str) -> None:
    """
    Show the controller's error verbatim with a dismiss button.

    Args:
        state: View state of the current screen
        key: Unique widget key for the dismiss button
    """
    if not state.error:
        return

    col1, col2 = st.columns([10, 1])
    with col1:
        st.error(state.error)
    with col2:
        if st.button("✕", key=f"dismiss_{key}"):
            state.dismiss_error()
            st.rerun()


def render_notice(state: ViewState) -> None:
    """Show a success notice once, then clear it."""
    if state.notice:
        st.toast(state.notice, icon="✅")
        state.dismiss_notice()


def confirm_delete(key: str, label: str = "حذف") -> bool:
    """
    Two-step delete button.

    The first click arms the confirmation; only the explicit confirm
    returns True. Cancel disarms it.
    """
    armed_key = f"confirm_{key}"

    if not st.session_state.get(armed_key):
        if st.button(f"🗑️ {label}", key=f"delete_{key}"):
            st.session_state[armed_key] = True
            st.rerun()
        return False

    st.warning("هل أنت متأكد من الحذف؟ لا يمكن التراجع عن هذا الإجراء.")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("تأكيد الحذف", key=f"yes_{key}", type="primary"):
            st.session_state[armed_key] = False
            return True
    with col2:
        if st.button("إلغاء", key=f"no_{key}"):
            st.session_state[armed_key] = False
            st.rerun()
    return False
