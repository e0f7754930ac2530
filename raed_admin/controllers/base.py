"""
Screen state shared by every page.

A screen moves IDLE -> LOADING -> LOADED / ERROR / NOT_FOUND. Mutations run
against the store first; only on success is the returned record merged
into the local collection, so a failure leaves prior state untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple
import base64
import logging
import mimetypes

from ..core.errors import DashboardError, SessionExpiredError, StoreError
from ..data import repository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "العنصر غير موجود"


class PageStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"
    NOT_FOUND = "not_found"


@dataclass
class ViewState:
    """What a screen shows right now."""

    status: PageStatus = PageStatus.IDLE
    data: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    notice: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == PageStatus.LOADING

    def fail(self, error: DashboardError) -> None:
        self.error = error.message
        self.error_code = getattr(error, 'code', None)

    def dismiss_error(self) -> None:
        self.error = None
        self.error_code = None

    def dismiss_notice(self) -> None:
        self.notice = None


class Controller:
    """Base for screen controllers: runs actions and records failures."""

    def __init__(self, session):
        self.session = session
        self.state = ViewState()

    def run(self, action: Callable[[], Any]) -> Tuple[bool, Any]:
        """
        Run one remote action.

        Session expiry propagates so the app shell can force a new sign-in;
        every other dashboard error is recorded verbatim on the view state.
        """
        self.state.dismiss_error()
        try:
            return True, action()
        except SessionExpiredError:
            raise
        except DashboardError as e:
            if isinstance(e, StoreError):
                logger.error(f"{type(self).__name__}: {e}")
            self.state.fail(e)
            return False, None

    def fetch(self, action: Callable[[], Any]) -> bool:
        """Load screen data through the LOADING state."""
        self.state.status = PageStatus.LOADING
        ok, data = self.run(action)
        if not ok:
            self.state.status = PageStatus.ERROR
            return False
        self.state.data = data
        self.state.status = PageStatus.LOADED
        return True


class ListController(Controller):
    """A keyed collection with confirmed deletes and local reconciliation."""

    key = "id"
    delete_notice = "تم الحذف بنجاح"

    def load_items(self) -> List[Any]:
        raise NotImplementedError

    def delete_item(self, item_key: Any) -> None:
        raise NotImplementedError

    def load(self) -> bool:
        return self.fetch(self.load_items)

    @property
    def items(self) -> List[Any]:
        return self.state.data or []

    def key_of(self, record: Any) -> Any:
        return getattr(record, self.key)

    def find(self, item_key: Any) -> Optional[Any]:
        for record in self.items:
            if self.key_of(record) == item_key:
                return record
        return None

    def reconcile(self, record: Any) -> None:
        """Merge a canonical record into the collection by key."""
        items = list(self.items)
        for index, existing in enumerate(items):
            if self.key_of(existing) == self.key_of(record):
                items[index] = record
                break
        else:
            items.append(record)
        self.state.data = items

    def remove(self, item_key: Any, confirmed: bool = False) -> bool:
        """
        Delete one record. Nothing is dispatched without confirmation.

        Returns:
            True when the record was deleted
        """
        if not confirmed:
            return False
        ok, _ = self.run(lambda: self.delete_item(item_key))
        if ok:
            self.state.data = [r for r in self.items if self.key_of(r) != item_key]
            self.state.notice = self.delete_notice
        return ok


class DetailController(Controller):
    """One record by key; a missing record is NOT_FOUND, not an error."""

    not_found_message = NOT_FOUND_MESSAGE

    def __init__(self, session, record_id: Any):
        super().__init__(session)
        self.record_id = record_id

    def load_record(self) -> Optional[Any]:
        raise NotImplementedError

    def load(self) -> bool:
        if not self.fetch(self.load_record):
            return False
        if self.state.data is None:
            self.state.status = PageStatus.NOT_FOUND
            self.state.error = self.not_found_message
            return False
        return True

    @property
    def record(self) -> Optional[Any]:
        return self.state.data


class ImageField:
    """
    Image input of a form.

    Holds a pending local file and its preview separately from the URL
    already stored remotely. Submitting uploads only a pending file.
    """

    def __init__(self, bucket: str, stored_url: Optional[str] = None):
        self.bucket = bucket
        self.stored_url = stored_url
        self.pending_name: Optional[str] = None
        self.pending_data: Optional[bytes] = None
        self.preview: Optional[str] = None

    @property
    def has_pending(self) -> bool:
        return self.pending_data is not None

    @property
    def display_url(self) -> Optional[str]:
        return self.preview or self.stored_url

    def select(self, filename: str, data: bytes) -> None:
        self.pending_name = filename
        self.pending_data = data
        mime = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.preview = f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"

    def clear(self) -> None:
        self.pending_name = None
        self.pending_data = None
        self.preview = None

    def resolve(self, session) -> Optional[str]:
        """Upload the pending file if any; otherwise keep the stored URL."""
        if not self.has_pending:
            return self.stored_url
        url = repository.upload_image(session, self.pending_data, self.pending_name, self.bucket)
        self.stored_url = url
        self.clear()
        return url
