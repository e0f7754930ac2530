"""
Admin sign-in against the Cognito user pool.

A successful sign-in yields an AdminSession: the context object handed to
every repository call. There is no module-level session state.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..core.config import AppConfig
from ..core.errors import AuthorizationError, SessionExpiredError, StoreError
from ..data.models import Profile

logger = logging.getLogger(__name__)

NOT_ADMIN_MESSAGE = "عذراً، هذا الحساب لا يملك صلاحيات الدخول للوحة التحكم."
LOGIN_FAILED_MESSAGE = "فشل تسجيل الدخول. تأكد من البيانات."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AdminSession:
    """Authenticated admin context passed into every data access call."""

    user_id: str
    email: str
    access_token: str
    expires_at: datetime
    store: object = field(repr=False)
    storage: object = field(repr=False, default=None)
    clock: Callable[[], datetime] = field(repr=False, default=_utcnow)

    def is_expired(self) -> bool:
        return self.clock() >= self.expires_at

    def require_active(self) -> None:
        """Raise SessionExpiredError once the token lifetime has passed."""
        if self.is_expired():
            raise SessionExpiredError("Session expired, please sign in again")


class AuthService:
    """Email/password sign-in gated on an admin profile."""

    def __init__(self, config: AppConfig, store, storage=None, cognito_client=None):
        self.config = config
        self.store = store
        self.storage = storage
        if cognito_client is None:
            boto_config = Config(
                connect_timeout=5,
                read_timeout=10,
                retries={'max_attempts': 1}
            )
            cognito_client = boto3.client('cognito-idp', config=boto_config, **config.boto_kwargs())
        self.cognito = cognito_client

    def _revoke(self, access_token: str) -> None:
        try:
            self.cognito.global_sign_out(AccessToken=access_token)
        except ClientError as e:
            logger.warning(f"Sign-out failed: {e.response.get('Error', {}).get('Code', 'Unknown')}")

    def _user_id(self, access_token: str) -> str:
        response = self.cognito.get_user(AccessToken=access_token)
        for attribute in response.get('UserAttributes', []):
            if attribute.get('Name') == 'sub':
                return attribute['Value']
        return response['Username']

    def sign_in(self, email: str, password: str) -> AdminSession:
        """
        Authenticate and verify the account is an admin.

        Non-admin accounts (or accounts without a profile) are signed out
        immediately and rejected; no session is returned.

        Args:
            email: Account email
            password: Account password

        Returns:
            AdminSession for the signed-in admin

        Raises:
            AuthorizationError: Bad credentials, failed profile lookup
                or non-admin account
        """
        try:
            response = self.cognito.initiate_auth(
                ClientId=self.config.cognito_client_id,
                AuthFlow='USER_PASSWORD_AUTH',
                AuthParameters={'USERNAME': email, 'PASSWORD': password},
            )
        except ClientError as e:
            message = e.response.get('Error', {}).get('Message') or LOGIN_FAILED_MESSAGE
            logger.warning(f"Sign-in rejected for {email}")
            raise AuthorizationError(message) from e

        result = response.get('AuthenticationResult')
        if not result or not result.get('AccessToken'):
            raise AuthorizationError(LOGIN_FAILED_MESSAGE)

        access_token = result['AccessToken']
        ttl = int(result.get('ExpiresIn') or self.config.session_ttl_seconds)

        try:
            user_id = self._user_id(access_token)
            row = self.store.get("profiles", user_id)
        except (ClientError, StoreError, SessionExpiredError):
            self._revoke(access_token)
            raise AuthorizationError(NOT_ADMIN_MESSAGE)

        if row is None or not Profile.from_item(row).is_admin_profile():
            logger.warning(f"Non-admin sign-in attempt for {email}")
            self._revoke(access_token)
            raise AuthorizationError(NOT_ADMIN_MESSAGE)

        logger.info(f"Admin signed in: {email}")
        return AdminSession(
            user_id=user_id,
            email=email,
            access_token=access_token,
            expires_at=_utcnow() + timedelta(seconds=ttl),
            store=self.store,
            storage=self.storage,
        )

    def sign_out(self, session: Optional[AdminSession]) -> None:
        """Revoke the session's tokens. Local state is cleared by the caller."""
        if session is not None:
            self._revoke(session.access_token)
            logger.info(f"Admin signed out: {session.email}")
