"""
Controller for the app settings screen.
"""

from typing import Any, Dict

from ..core.errors import ValidationError
from ..core.utils import parse_float
from ..data import repository
from .base import Controller

SAVED_NOTICE = "تم حفظ الإعدادات بنجاح"
ACTIVATED_NOTICE = "تم تفعيل التطبيق"
DEACTIVATED_NOTICE = "تم إيقاف التطبيق"


class SettingsController(Controller):
    """Delivery fee, tax, contact phone and the global ordering switch."""

    def __init__(self, session):
        super().__init__(session)
        self.form: Dict[str, Any] = {
            'delivery_fee': "0",
            'tax_percentage': "0",
            'contact_phone': "",
            'is_app_active': True,
        }

    def load(self) -> bool:
        if not self.fetch(lambda: repository.get_app_settings(self.session)):
            return False
        settings = self.state.data
        if settings is not None:
            self.form.update({
                'delivery_fee': str(settings.delivery_fee),
                'tax_percentage': str(settings.tax_percentage),
                'contact_phone': settings.contact_phone,
                'is_app_active': settings.is_app_active,
            })
        return True

    def set(self, field: str, value: Any) -> None:
        self.form[field] = value

    def validate(self) -> Dict[str, Any]:
        delivery_fee = parse_float(self.form.get('delivery_fee'))
        if delivery_fee is None:
            raise ValidationError("يرجى إدخال رسوم توصيل صحيحة", field='delivery_fee')
        tax_percentage = parse_float(self.form.get('tax_percentage'))
        if tax_percentage is None:
            raise ValidationError("يرجى إدخال نسبة ضريبة صحيحة", field='tax_percentage')
        return {
            'delivery_fee': delivery_fee,
            'tax_percentage': tax_percentage,
            'contact_phone': str(self.form.get('contact_phone') or "").strip(),
            'is_app_active': bool(self.form.get('is_app_active')),
        }

    def save(self) -> bool:
        """Validate and write the settings row (update or first insert)."""
        ok, settings = self.run(
            lambda: repository.update_app_settings(self.session, self.validate())
        )
        if ok:
            self.state.data = settings
            self.state.notice = SAVED_NOTICE
        return ok

    def toggle_active(self, is_active: bool) -> bool:
        """Flip the ordering switch immediately; revert if the store refuses."""
        previous = self.form['is_app_active']
        self.form['is_app_active'] = is_active
        ok, settings = self.run(lambda: repository.update_app_status(self.session, is_active))
        if not ok:
            self.form['is_app_active'] = previous
            return False
        self.state.data = settings
        self.state.notice = ACTIVATED_NOTICE if is_active else DEACTIVATED_NOTICE
        return True
