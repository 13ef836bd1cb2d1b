from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user, to_http_exception
from app.core.exceptions import AppError
from app.schemas.qna import (
    AnswerCreate,
    AnswerEnvelope,
    CategoryListResponse,
    QuestionCreate,
    QuestionEnvelope,
    QuestionListResponse,
    QuestionStatus,
)
from app.services.auth import AuthUser
from app.services.qna import QnaService

router = APIRouter(tags=["qna"], prefix="/api/qna")


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)):
    """List active question categories"""
    try:
        return CategoryListResponse(categories=QnaService(db).list_categories())
    except AppError as e:
        raise to_http_exception(e)


@router.get("", response_model=QuestionListResponse)
def list_questions(
    status_filter: Optional[QuestionStatus] = Query(None, alias="status"),
    category: Optional[str] = Query(None, description="Category slug"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    try:
        return QnaService(db).list_questions(
            status=status_filter, category=category, limit=limit, offset=offset
        )
    except AppError as e:
        raise to_http_exception(e)


@router.post(
    "", response_model=QuestionEnvelope, status_code=status.HTTP_201_CREATED
)
def create_question(
    payload: QuestionCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    """Ask a new question; it stays pending until an admin answers"""
    try:
        return QuestionEnvelope(question=QnaService(db).create_question(user.id, payload))
    except AppError as e:
        raise to_http_exception(e)


@router.get("/{question_id}", response_model=QuestionEnvelope)
def get_question(question_id: int, db: Session = Depends(get_db)):
    """Get a question with its answers and count the view"""
    try:
        return QuestionEnvelope(question=QnaService(db).get_question(question_id))
    except AppError as e:
        raise to_http_exception(e)


@router.post(
    "/{question_id}/answer",
    response_model=AnswerEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def answer_question(
    question_id: int,
    payload: AnswerCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    """Answer a question (admin users only)"""
    try:
        return AnswerEnvelope(
            answer=QnaService(db).answer_question(user.id, question_id, payload)
        )
    except AppError as e:
        raise to_http_exception(e)
