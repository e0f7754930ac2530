"""
Login screen controller.
"""

from ..core.errors import DashboardError, ValidationError
from .base import Controller

MISSING_CREDENTIALS_MESSAGE = "يرجى إدخال البريد الإلكتروني وكلمة المرور"


class LoginController(Controller):
    """Email/password form; yields an AdminSession only for admins."""

    def __init__(self, auth_service):
        super().__init__(session=None)
        self.auth = auth_service

    def login(self, email: str, password: str):
        """
        Sign in. Returns the AdminSession, or None with the reason on
        ``state.error``. Nothing is kept on failure.
        """
        self.state.dismiss_error()
        self.session = None
        email = (email or "").strip()

        try:
            if not email or not password:
                raise ValidationError(MISSING_CREDENTIALS_MESSAGE)
            session = self.auth.sign_in(email, password)
        except DashboardError as e:
            self.state.fail(e)
            return None

        self.session = session
        return session

    def logout(self) -> None:
        session, self.session = self.session, None
        self.auth.sign_out(session)
