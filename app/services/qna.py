import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, PermissionDeniedError, StorageError
from app.models.qna import ForumQuestion
from app.repositories.qna_repository import QnaRepository
from app.schemas.qna import (
    AnswerCreate,
    AnswerResponse,
    CategoryResponse,
    QuestionCreate,
    QuestionDetailResponse,
    QuestionListResponse,
    QuestionStatus,
    QuestionSummaryResponse,
)

# Set up logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _summary(question: ForumQuestion) -> QuestionSummaryResponse:
    return QuestionSummaryResponse(
        id=question.id,
        user_id=question.user_id,
        category_id=question.category_id,
        title=question.title,
        content=question.content,
        status=question.status,
        view_count=question.view_count or 0,
        created_at=question.created_at,
        updated_at=question.updated_at,
        category=(
            CategoryResponse.model_validate(question.category)
            if question.category
            else None
        ),
        answers_count=len(question.answers),
    )


def _answer(answer) -> AnswerResponse:
    return AnswerResponse.model_validate(answer)


def _detail(question: ForumQuestion) -> QuestionDetailResponse:
    return QuestionDetailResponse(
        **_summary(question).model_dump(),
        answers=[_answer(answer) for answer in question.answers],
    )


class QnaService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = QnaRepository(db)

    def _storage_failure(self, action: str, error: Exception) -> StorageError:
        logger.error(f"❌ Storage failure while {action}: {error}")
        self.db.rollback()
        return StorageError(f"Failed to {action}")

    def list_categories(self):
        try:
            categories = self.repository.get_active_categories()
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch categories", e) from e
        return [CategoryResponse.model_validate(c) for c in categories]

    def list_questions(
        self,
        status: Optional[QuestionStatus] = None,
        category: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> QuestionListResponse:
        try:
            questions, total = self.repository.list_questions(
                status=status.value if status else None,
                category_slug=category,
                limit=limit,
                offset=offset,
            )
            items = [_summary(q) for q in questions]
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch questions", e) from e
        return QuestionListResponse(
            questions=items, total=total, limit=limit, offset=offset
        )

    def get_question(self, question_id: int) -> QuestionDetailResponse:
        """Question with its answers; counts as one view"""
        try:
            question = self.repository.get_question_by_id(question_id)
            if question is None:
                raise NotFoundError(
                    "Question not found", code="QUESTION_NOT_FOUND"
                )
            question = self.repository.increment_view_count(question)
            return _detail(question)
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch question", e) from e

    def create_question(
        self, user_id: str, payload: QuestionCreate
    ) -> QuestionDetailResponse:
        try:
            if self.repository.get_category_by_id(payload.category_id) is None:
                raise NotFoundError("Category not found", code="CATEGORY_NOT_FOUND")
            question = self.repository.create_question(
                {
                    "user_id": user_id,
                    "category_id": payload.category_id,
                    "title": payload.title,
                    "content": payload.content,
                    "status": QuestionStatus.PENDING.value,
                }
            )
            response = _detail(question)
        except SQLAlchemyError as e:
            raise self._storage_failure("create question", e) from e

        logger.info(f"❓ Question {question.id} submitted by {user_id}")
        return response

    def answer_question(
        self, user_id: str, question_id: int, payload: AnswerCreate
    ) -> AnswerResponse:
        """Post an answer as an active admin user"""
        try:
            admin = self.repository.get_active_admin(user_id)
            if admin is None:
                raise PermissionDeniedError(
                    "Admin access required", code="ADMIN_REQUIRED"
                )
            question = self.repository.get_question_by_id(question_id)
            if question is None:
                raise NotFoundError("Question not found", code="QUESTION_NOT_FOUND")
            answer = self.repository.create_answer(
                question,
                {
                    "admin_id": admin.id,
                    "content": payload.content,
                    "sources": payload.sources,
                },
            )
            response = _answer(answer)
        except SQLAlchemyError as e:
            raise self._storage_failure("create answer", e) from e

        logger.info(f"💬 Question {question_id} answered by admin {admin.id}")
        return response
