import hmac
import logging

import bcrypt
from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Decides whether an email/password pair may open an admin session."""

    def verify(self, email: str, password: str) -> bool:
        raise NotImplementedError


class FixedCredentialVerifier(CredentialVerifier):
    """Single hardcoded admin account. Demo-grade only."""

    def __init__(self, email: str = None, password: str = None):
        self.email = email if email is not None else settings.ADMIN_EMAIL
        self.password = password if password is not None else settings.ADMIN_PASSWORD

    def verify(self, email: str, password: str) -> bool:
        if not email or not password:
            return False
        email_ok = hmac.compare_digest(email.encode("utf-8"), self.email.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8"))
        return email_ok and password_ok


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


class BcryptCredentialVerifier(CredentialVerifier):
    """Single admin account whose password is stored as a bcrypt hash."""

    def __init__(self, email: str = None, password_hash: str = None):
        self.email = email if email is not None else settings.ADMIN_EMAIL
        self.password_hash = password_hash if password_hash is not None else settings.ADMIN_PASSWORD_HASH

    def verify(self, email: str, password: str) -> bool:
        if not email or not password or not self.password_hash:
            return False
        if not hmac.compare_digest(email.encode("utf-8"), self.email.encode("utf-8")):
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
            return False


def get_credential_verifier() -> CredentialVerifier:
    return import_string(settings.ADMIN_CREDENTIAL_VERIFIER)()
