import hashlib
import logging
import secrets
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import StorageError
from app.repositories.page_view_repository import PageViewRepository
from app.schemas.tracking import PageViewCreate

# Set up logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"
SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


def hash_ip(forwarded_for: Optional[str]) -> str:
    """First X-Forwarded-For address, SHA-256 hashed and cut to 16 hex chars"""
    ip = forwarded_for.split(",")[0].strip() if forwarded_for else "unknown"
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()[:16]


def new_session_id() -> str:
    return secrets.token_hex(16)


class TrackingService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = PageViewRepository(db)

    def record_page_view(
        self,
        page_view: PageViewCreate,
        user_agent: Optional[str],
        forwarded_for: Optional[str],
        session_id: Optional[str],
    ) -> str:
        """Store a page view and return the session id it was recorded under"""
        session_id = session_id or new_session_id()
        try:
            self.repository.create(
                {
                    "page_path": page_view.path,
                    "user_agent": user_agent or "",
                    "ip_hash": hash_ip(forwarded_for),
                    "referrer": page_view.referrer,
                    "session_id": session_id,
                }
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Error tracking page view: {e}")
            self.db.rollback()
            raise StorageError("Failed to track") from e
        return session_id
