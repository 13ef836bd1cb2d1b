import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.domain.quiz_csv import parse_question_csv
from app.domain.quiz_domain import (
    QuizDomain,
    grade_answers,
    resolve_session,
    session_column_value,
)
from app.repositories.quiz_attempt_repository import QuizAttemptRepository
from app.repositories.quiz_repository import QuizRepository
from app.schemas.quiz import (
    AdminQuizDetailResponse,
    PublicQuizDetailResponse,
    QuestionCreate,
    QuizResponse,
    QuizResultResponse,
    QuizUpdate,
    QuizWithQuestionsCreate,
)

# Set up logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

QUIZ_NOT_FOUND = "QUIZ_NOT_FOUND"
NULLABLE_QUIZ_FIELDS = {"description_th", "description_en", "time_limit_minutes"}


class QuizService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = QuizRepository(db)
        self.attempt_repository = QuizAttemptRepository(db)

    def _quiz_not_found(self, quiz_id: int) -> NotFoundError:
        return NotFoundError(f"Quiz {quiz_id} not found", code=QUIZ_NOT_FOUND)

    def _storage_failure(self, action: str, error: Exception) -> StorageError:
        logger.error(f"❌ Storage failure while {action}: {error}")
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")
        return StorageError(f"Failed to {action}")

    # =====================================================
    # Grading
    # =====================================================
    def grade_submission(
        self,
        quiz_id: int,
        answers: Mapping[str, Any],
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> QuizResultResponse:
        """
        Grade a learner's answers and record the attempt.

        Only the quiz's own questions are graded; unanswered questions count
        as wrong and answers for unknown question ids are ignored. Exactly one
        attempt row is written. Storage failures are not retried.
        """
        try:
            quiz = self.repository.get_by_id(quiz_id)
            if quiz is None:
                raise self._quiz_not_found(quiz_id)
            questions = self.repository.get_questions(quiz_id)
        except SQLAlchemyError as e:
            raise self._storage_failure("load quiz questions", e) from e

        outcome = grade_answers(questions, answers)
        identity = resolve_session(session_id)

        try:
            attempt = self.attempt_repository.create(
                {
                    "quiz_id": quiz_id,
                    "user_id": user_id,
                    "session_id": session_column_value(identity),
                    "score": outcome.score,
                    "total_questions": outcome.total,
                    "answers": [record.to_dict() for record in outcome.records],
                    "completed_at": datetime.now(timezone.utc),
                }
            )
        except SQLAlchemyError as e:
            raise self._storage_failure("save quiz attempt", e) from e

        logger.info(
            f"✅ Quiz {quiz_id} graded: {outcome.score}/{outcome.total} "
            f"({outcome.percentage}%), attempt {attempt.id}"
        )
        return QuizResultResponse(
            attempt=QuizDomain.attempt_to_response(attempt),
            questions=QuizDomain.to_graded_questions(questions),
            score=outcome.score,
            total=outcome.total,
            percentage=outcome.percentage,
        )

    # =====================================================
    # Public catalogue
    # =====================================================
    def list_published(self) -> List[QuizResponse]:
        try:
            return QuizDomain.to_response_list(self.repository.get_published())
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch quizzes", e) from e

    def get_published_quiz(self, quiz_id: int) -> PublicQuizDetailResponse:
        """Published quiz with its questions, correct answers withheld"""
        try:
            quiz = self.repository.get_published_by_id(quiz_id)
            if quiz is None:
                raise self._quiz_not_found(quiz_id)
            questions = self.repository.get_questions(quiz_id)
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch quiz", e) from e
        return QuizDomain.to_public_detail(quiz, questions)

    # =====================================================
    # Admin
    # =====================================================
    def list_all(self) -> List[QuizResponse]:
        try:
            return QuizDomain.to_response_list(self.repository.get_all())
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch quizzes", e) from e

    def get_quiz_for_admin(self, quiz_id: int) -> AdminQuizDetailResponse:
        try:
            quiz = self.repository.get_by_id(quiz_id)
            if quiz is None:
                raise self._quiz_not_found(quiz_id)
            questions = self.repository.get_questions(quiz_id)
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch quiz", e) from e
        return QuizDomain.to_admin_detail(quiz, questions)

    def create_quiz(self, payload: QuizWithQuestionsCreate) -> QuizResponse:
        """Create a quiz; questions are numbered in submission order from 1"""
        quiz_data = payload.quiz.model_dump(mode="json")
        quiz_data["questions_count"] = len(payload.questions)
        questions_data = [
            QuizDomain.question_to_dict(index + 1, question)
            for index, question in enumerate(payload.questions)
        ]

        try:
            quiz = self.repository.create_with_questions(quiz_data, questions_data)
        except SQLAlchemyError as e:
            raise self._storage_failure("create quiz", e) from e

        logger.info(f"📝 Created quiz {quiz.id} with {len(questions_data)} questions")
        return QuizDomain.to_response(quiz)

    def update_quiz(self, quiz_id: int, update: QuizUpdate) -> QuizResponse:
        """Update quiz metadata; the question set is left untouched"""
        update_data = {
            field: value
            for field, value in update.model_dump(mode="json", exclude_unset=True).items()
            if value is not None or field in NULLABLE_QUIZ_FIELDS
        }
        try:
            quiz = self.repository.get_by_id(quiz_id)
            if quiz is None:
                raise self._quiz_not_found(quiz_id)
            quiz = self.repository.update(quiz, update_data)
        except SQLAlchemyError as e:
            raise self._storage_failure("update quiz", e) from e
        return QuizDomain.to_response(quiz)

    def delete_quiz(self, quiz_id: int) -> bool:
        try:
            quiz = self.repository.get_by_id(quiz_id)
            if quiz is None:
                raise self._quiz_not_found(quiz_id)
            self.repository.delete(quiz)
        except SQLAlchemyError as e:
            raise self._storage_failure("delete quiz", e) from e

        logger.info(f"🗑️ Deleted quiz {quiz_id}")
        return True

    @staticmethod
    def parse_questions_csv(text: str) -> List[QuestionCreate]:
        questions = parse_question_csv(text)
        if not questions:
            raise ValidationError(
                "No valid questions found in the CSV file", code="INVALID_CSV"
            )
        return questions
