"""
External service integrations.
"""

from .auth import AdminSession, AuthService

__all__ = ['AdminSession', 'AuthService']
