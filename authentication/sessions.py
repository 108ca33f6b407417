import logging
import uuid
from datetime import datetime
from typing import MutableMapping, Optional

import jwt
from django.conf import settings
from ninja import Schema

from authentication.credentials import CredentialVerifier, get_credential_verifier

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "ilandspaces_admin_session_v3"


class AdminSession(Schema):
    email: str
    token: str


def create_session_token(email: str) -> str:
    """Create an opaque admin session token. No expiry; the session entry bounds its lifetime."""
    payload = {
        'sub': email,
        'jti': uuid.uuid4().hex,
        'iat': datetime.utcnow(),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


class AdminSessionManager:
    """Login, lookup and logout of the admin session kept in ``session``."""

    def __init__(self, session: MutableMapping, verifier: Optional[CredentialVerifier] = None):
        self.session = session
        self.verifier = verifier or get_credential_verifier()

    def login(self, email: str, password: str) -> Optional[AdminSession]:
        if not self.verifier.verify(email, password):
            logger.warning(f"Failed admin login for {email}")
            return None
        admin = AdminSession(email=email, token=create_session_token(email))
        self.session[ADMIN_SESSION_KEY] = admin.model_dump()
        logger.info(f"Admin {email} logged in")
        return admin

    def current(self) -> Optional[AdminSession]:
        stored = self.session.get(ADMIN_SESSION_KEY)
        if not stored:
            return None
        return AdminSession(**stored)

    def logout(self) -> None:
        admin = self.session.pop(ADMIN_SESSION_KEY, None)
        if admin:
            logger.info(f"Admin {admin.get('email')} logged out")
