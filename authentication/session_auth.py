from typing import Optional

from django.conf import settings
from django.http import HttpRequest
from ninja.security import APIKeyCookie

from authentication.sessions import AdminSession, AdminSessionManager


class AdminSessionAuth(APIKeyCookie):
    """Admin authentication for Django Ninja backed by the Django session cookie"""

    param_name = settings.SESSION_COOKIE_NAME

    def authenticate(self, request: HttpRequest, key: Optional[str]) -> Optional[AdminSession]:
        """Return the persisted admin session, if any"""
        if not key:
            return None
        return AdminSessionManager(request.session).current()


# Global instance
admin_session_auth = AdminSessionAuth()
