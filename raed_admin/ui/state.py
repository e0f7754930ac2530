"""
Controllers kept in Streamlit session state across reruns.
"""

from typing import Any, Callable, Optional

import streamlit as st

from ..controllers.base import ImageField, PageStatus
from .loading import loading

NEW = "new"


def get_controller(key: str, factory: Callable[[], Any]) -> Any:
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def drop_controller(key: str) -> None:
    st.session_state.pop(key, None)


def ensure_loaded(controller, loader: Optional[Callable[[], bool]] = None) -> None:
    """Load once per controller; later reruns reuse the view state."""
    if controller.state.status == PageStatus.IDLE:
        with loading():
            (loader or controller.load)()


def editing(page: str) -> Optional[Any]:
    """Record id being edited on ``page``, NEW for an add form, or None."""
    return st.session_state.get(f"{page}_editing")


def start_editing(page: str, record_id: Any = NEW) -> None:
    drop_controller(f"{page}_form")
    st.session_state[f"{page}_editing"] = record_id


def stop_editing(page: str) -> None:
    drop_controller(f"{page}_form")
    st.session_state.pop(f"{page}_editing", None)


def form_record_id(page: str) -> Optional[Any]:
    record_id = editing(page)
    return None if record_id == NEW else record_id


def render_image_input(field: ImageField, label: str, key: str):
    """Preview the current image and return the file uploader value."""
    if field.has_pending:
        st.image(field.pending_data, width=200)
    elif field.stored_url:
        st.image(field.stored_url, width=200)
    return st.file_uploader(label, type=["png", "jpg", "jpeg", "webp"], key=key)


def apply_upload(field: ImageField, upload) -> None:
    if upload is not None:
        field.select(upload.name, upload.getvalue())


def saved_to_list(page: str, form) -> None:
    """Merge a saved record into the page's list and leave the form."""
    list_controller = st.session_state.get(page)
    if list_controller is not None:
        list_controller.reconcile(form.saved)
        list_controller.state.notice = form.state.notice
    stop_editing(page)
