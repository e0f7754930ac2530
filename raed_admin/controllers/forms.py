"""
Add/edit form flow shared by the catalog screens.
"""

from typing import Any, Dict, Optional

from ..core.errors import ValidationError
from ..core.utils import parse_float, parse_int
from .base import Controller, NOT_FOUND_MESSAGE, PageStatus


class FormController(Controller):
    """
    Form state for creating a record (no id) or editing one (with id).

    Validation runs before any remote call; a failed save keeps the form
    as the user left it.
    """

    created_notice = "تمت الإضافة بنجاح!"
    updated_notice = "تم التحديث بنجاح!"

    def __init__(self, session, record_id: Optional[Any] = None):
        super().__init__(session)
        self.record_id = record_id
        self.form: Dict[str, Any] = self.default_form()
        self.saved: Optional[Any] = None

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None

    def default_form(self) -> Dict[str, Any]:
        return {}

    def load_options(self) -> Dict[str, Any]:
        """Lookup data the form needs (select options and so on)."""
        return {}

    def load_record(self) -> Optional[Any]:
        return None

    def fill(self, record: Any) -> None:
        """Copy a loaded record into the form fields."""

    def validate(self) -> Dict[str, Any]:
        raise NotImplementedError

    def create(self, payload: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def update(self, payload: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def load(self) -> bool:
        def action():
            data = {'options': self.load_options(), 'record': None}
            if self.is_edit:
                data['record'] = self.load_record()
            return data

        if not self.fetch(action):
            return False
        if self.is_edit:
            record = self.state.data['record']
            if record is None:
                self.state.status = PageStatus.NOT_FOUND
                self.state.error = NOT_FOUND_MESSAGE
                return False
            self.fill(record)
        return True

    @property
    def options(self) -> Dict[str, Any]:
        return (self.state.data or {}).get('options', {})

    def set(self, field: str, value: Any) -> None:
        self.form[field] = value

    def submit(self) -> Optional[Any]:
        """Validate, then create or update. Returns the saved record or None."""
        def action():
            payload = self.validate()
            if self.is_edit:
                return self.update(payload)
            return self.create(payload)

        ok, record = self.run(action)
        if not ok:
            return None
        self.saved = record
        self.state.notice = self.updated_notice if self.is_edit else self.created_notice
        return record

    # -- validation helpers ---------------------------------------------------

    def required_text(self, field: str, message: str) -> str:
        value = str(self.form.get(field) or "").strip()
        if not value:
            raise ValidationError(message, field=field)
        return value

    def required_number(self, field: str, message: str) -> float:
        value = parse_float(self.form.get(field))
        if value is None or value < 0:
            raise ValidationError(message, field=field)
        return value

    def optional_number(self, field: str, message: str) -> Optional[float]:
        raw = self.form.get(field)
        if raw is None or str(raw).strip() == "":
            return None
        value = parse_float(raw)
        if value is None or value < 0:
            raise ValidationError(message, field=field)
        return value

    def integer(self, field: str, default: int = 0) -> int:
        return max(parse_int(self.form.get(field), default), 0)
