from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import (
    get_auth_service,
    internal_error,
    require_admin_password,
    to_http_exception,
)
from app.core.exceptions import AppError
from app.schemas.quiz import (
    AdminAuthRequest,
    AdminQuizDetailResponse,
    QuestionCreate,
    QuizResponse,
    QuizUpdate,
    QuizWithQuestionsCreate,
    SuccessResponse,
)
from app.services.auth import AuthService
from app.services.quiz import QuizService

router = APIRouter(tags=["admin"], prefix="/api/admin")


@router.post("/auth", response_model=SuccessResponse)
def admin_login(
    request: AdminAuthRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """Check the admin dashboard password"""
    if not auth_service.check_admin_password(request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "INVALID_ADMIN_PASSWORD", "message": "Invalid password"},
        )
    return SuccessResponse()


quiz_router = APIRouter(
    tags=["admin"],
    prefix="/api/admin/quiz",
    dependencies=[Depends(require_admin_password)],
)


@quiz_router.get("", response_model=List[QuizResponse])
def list_all_quizzes(db: Session = Depends(get_db)):
    """List all quizzes including drafts"""
    try:
        return QuizService(db).list_all()
    except AppError as e:
        raise to_http_exception(e)


@quiz_router.post(
    "", response_model=QuizResponse, status_code=status.HTTP_201_CREATED
)
def create_quiz(payload: QuizWithQuestionsCreate, db: Session = Depends(get_db)):
    """Create a quiz together with its questions"""
    try:
        return QuizService(db).create_quiz(payload)
    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@quiz_router.post("/csv", response_model=List[QuestionCreate])
async def parse_questions_csv(request: Request):
    """
    Parse an uploaded question sheet (raw text/csv body) into questions

    The parsed questions can be reviewed and then sent to ``POST /api/admin/quiz``.
    """
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "INVALID_CSV", "message": "CSV must be UTF-8 encoded"},
        )
    try:
        return QuizService.parse_questions_csv(text)
    except AppError as e:
        raise to_http_exception(e)


@quiz_router.get("/{quiz_id}", response_model=AdminQuizDetailResponse)
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    """Get a quiz with its questions and correct answers"""
    try:
        return QuizService(db).get_quiz_for_admin(quiz_id)
    except AppError as e:
        raise to_http_exception(e)


@quiz_router.put("/{quiz_id}", response_model=QuizResponse)
def update_quiz(quiz_id: int, update: QuizUpdate, db: Session = Depends(get_db)):
    try:
        return QuizService(db).update_quiz(quiz_id, update)
    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@quiz_router.delete("/{quiz_id}", response_model=SuccessResponse)
def delete_quiz(quiz_id: int, db: Session = Depends(get_db)):
    try:
        QuizService(db).delete_quiz(quiz_id)
        return SuccessResponse()
    except AppError as e:
        raise to_http_exception(e)
