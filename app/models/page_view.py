from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

from app.core.database import Base


class PageView(Base):
    __tablename__ = "page_views"

    id = Column(Integer, primary_key=True, index=True)
    page_path = Column(String(500), nullable=False, index=True)
    user_agent = Column(Text, nullable=True)
    ip_hash = Column(String(16), nullable=False)
    referrer = Column(String(500), nullable=True)
    session_id = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
