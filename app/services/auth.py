import hmac
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from app.core.config import Settings, settings
from app.core.exceptions import AuthenticationError, ConfigurationError

# Set up logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token of an ``Authorization: Bearer <token>`` header"""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Unauthorized", code="UNAUTHORIZED")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("Unauthorized", code="UNAUTHORIZED")
    return token


class AuthService:
    """Verifies access tokens against Supabase Auth"""

    def __init__(self, config: Settings = settings):
        self.config = config

    def get_user(self, token: str) -> AuthUser:
        if not self.config.SUPABASE_URL or not self.config.SUPABASE_ANON_KEY:
            raise ConfigurationError(
                "Supabase is not configured. "
                "Please set SUPABASE_URL and SUPABASE_ANON_KEY in your environment variables."
            )

        url = f"{self.config.SUPABASE_URL.rstrip('/')}/auth/v1/user"
        try:
            resp = requests.get(
                url,
                headers={
                    "apikey": self.config.SUPABASE_ANON_KEY,
                    "Authorization": f"Bearer {token}",
                },
                timeout=self.config.HTTP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f"❌ Supabase auth request failed: {e}")
            raise AuthenticationError("Invalid token", code="INVALID_TOKEN") from e

        if resp.status_code != 200:
            raise AuthenticationError("Invalid token", code="INVALID_TOKEN")

        data = resp.json()
        if not data.get("id"):
            raise AuthenticationError("Invalid token", code="INVALID_TOKEN")
        return AuthUser(id=data["id"], email=data.get("email"))

    def check_admin_password(self, password: Optional[str]) -> bool:
        if not password:
            return False
        return hmac.compare_digest(
            password.encode("utf-8"), self.config.ADMIN_PASSWORD.encode("utf-8")
        )
