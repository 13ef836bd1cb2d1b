from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_optional_user, internal_error, to_http_exception
from app.core.exceptions import AppError
from app.schemas.quiz import (
    PublicQuizDetailResponse,
    QuizResponse,
    QuizResultResponse,
    QuizSubmitRequest,
)
from app.services.auth import AuthUser
from app.services.quiz import QuizService

router = APIRouter(tags=["quiz"], prefix="/api/quiz")


@router.get("", response_model=List[QuizResponse])
def list_quizzes(db: Session = Depends(get_db)):
    """List published quizzes, newest first"""
    try:
        return QuizService(db).list_published()
    except AppError as e:
        raise to_http_exception(e)


@router.get("/{quiz_id}", response_model=PublicQuizDetailResponse)
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    """
    Get a published quiz with its questions.

    Correct answers and explanations are not included; they are only
    revealed in the response to a submission.
    """
    try:
        return QuizService(db).get_published_quiz(quiz_id)
    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.post(
    "/{quiz_id}/submit",
    response_model=QuizResultResponse,
    status_code=status.HTTP_200_OK,
)
def submit_quiz(
    quiz_id: int,
    submission: QuizSubmitRequest,
    db: Session = Depends(get_db),
    user: Optional[AuthUser] = Depends(get_optional_user),
):
    """
    Submit answers for grading

    Returns the stored attempt, the questions with correct answers and
    explanations, the score, the total number of questions and the
    percentage score.

    Raises:
        HTTPException: 404 (QUIZ_NOT_FOUND) if the quiz does not exist,
        500 (STORAGE_FAILURE) if the database fails
    """
    try:
        service = QuizService(db)
        return service.grade_submission(
            quiz_id,
            submission.answers,
            session_id=submission.session_id,
            user_id=user.id if user else None,
        )
    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)
