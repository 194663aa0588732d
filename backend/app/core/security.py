"""
Credential verification for machine-to-machine endpoints.
"""


import hmac
import logging
from typing import Protocol

from app.core.config import settings
from app.core.exceptions import AuthError


logger = logging.getLogger(__name__)


class CredentialVerifier(Protocol):
    """Checks a bearer token presented to a protected endpoint"""

    def verify(self, token: str) -> None:
        """Raise AuthError if the token is not acceptable"""


class StaticTokenVerifier:
    """Accepts exactly one shared secret"""

    def __init__(self, secret: str):
        self._secret = secret

    def verify(self, token: str) -> None:
        if not self._secret:
            logger.warning("⚠️ No ingestion secret configured, rejecting request")
            raise AuthError("Ingestion secret is not configured")
        if not token or not hmac.compare_digest(token.encode(), self._secret.encode()):
            raise AuthError("Invalid bearer token")


def get_credential_verifier() -> CredentialVerifier:
    """Verifier backed by the configured ingestion secret"""
    return StaticTokenVerifier(settings.ingestion_api_key)


def extract_bearer_token(authorization: str) -> str:
    """Return the token part of an Authorization header value"""
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip()
    return ""
