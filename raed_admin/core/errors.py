"""
Exception types surfaced by the data access layer and page controllers.
"""

from typing import Any, Dict, List, Optional


class DashboardError(Exception):
    """Base class for all dashboard errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(DashboardError):
    """Required configuration is missing at startup."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class NotFoundError(DashboardError):
    """The primary record of an operation does not exist."""


class ValidationError(DashboardError):
    """Client-side validation failed; nothing was sent to the store."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StoreError(DashboardError):
    """A remote call faulted. Carries the store's native error payload."""

    def __init__(self, message: str, code: str = "Unknown", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    @classmethod
    def from_client_error(cls, error) -> 'StoreError':
        """Build from a botocore ClientError without translating the code."""
        payload = error.response.get('Error', {})
        return cls(
            payload.get('Message', str(error)),
            code=payload.get('Code', 'Unknown'),
            details={
                'operation': getattr(error, 'operation_name', None),
                'status': error.response.get('ResponseMetadata', {}).get('HTTPStatusCode'),
            },
        )

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"


class AuthorizationError(DashboardError):
    """Sign-in rejected: bad credentials or a non-admin account."""


class SessionExpiredError(DashboardError):
    """Credentials are no longer valid; the user must sign in again."""
