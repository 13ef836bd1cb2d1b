from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.deps import to_http_exception
from app.core.exceptions import AppError
from app.schemas.tracking import PageViewCreate
from app.services.tracking import (
    SESSION_COOKIE,
    SESSION_COOKIE_MAX_AGE,
    TrackingService,
)

router = APIRouter(tags=["tracking"], prefix="/api/track")


@router.post("")
def track_page_view(
    page_view: PageViewCreate,
    user_agent: Optional[str] = Header(None),
    x_forwarded_for: Optional[str] = Header(None),
    session_id: Optional[str] = Cookie(None),
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """Record a page view; sets the session cookie on first visit"""
    try:
        recorded_session = TrackingService(db).record_page_view(
            page_view,
            user_agent=user_agent,
            forwarded_for=x_forwarded_for,
            session_id=session_id,
        )
    except AppError as e:
        raise to_http_exception(e)

    response = JSONResponse({"success": True})
    if not session_id:
        response.set_cookie(
            SESSION_COOKIE,
            recorded_session,
            max_age=SESSION_COOKIE_MAX_AGE,
            httponly=True,
            secure=config.is_production,
            samesite="lax",
        )
    return response
