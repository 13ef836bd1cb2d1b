from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from app.models.qna import AdminUser, ForumAnswer, ForumQuestion, QuestionCategory


class QnaRepository:
    """Repository for the Q&A forum: categories, questions and answers"""

    def __init__(self, db: Session):
        self.db = db

    def get_active_categories(self) -> List[QuestionCategory]:
        """Get active categories in display order"""
        return (
            self.db.query(QuestionCategory)
            .filter(QuestionCategory.is_active.is_(True))
            .order_by(QuestionCategory.sort_order.asc(), QuestionCategory.id.asc())
            .all()
        )

    def get_category_by_id(self, category_id: int) -> Optional[QuestionCategory]:
        return (
            self.db.query(QuestionCategory)
            .filter(QuestionCategory.id == category_id)
            .first()
        )

    def list_questions(
        self,
        status: Optional[str] = None,
        category_slug: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[ForumQuestion], int]:
        """
        Get a page of questions, newest first, plus the total matching count.
        """
        query = self.db.query(ForumQuestion)
        if status:
            query = query.filter(ForumQuestion.status == status)
        if category_slug:
            query = query.join(ForumQuestion.category).filter(
                QuestionCategory.slug == category_slug
            )

        total = query.count()
        questions = (
            query.options(
                selectinload(ForumQuestion.category),
                selectinload(ForumQuestion.answers),
            )
            .order_by(ForumQuestion.created_at.desc(), ForumQuestion.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return questions, total

    def get_question_by_id(self, question_id: int) -> Optional[ForumQuestion]:
        return (
            self.db.query(ForumQuestion)
            .options(
                selectinload(ForumQuestion.category),
                selectinload(ForumQuestion.answers).selectinload(ForumAnswer.admin),
            )
            .filter(ForumQuestion.id == question_id)
            .first()
        )

    def create_question(self, question_data: dict) -> ForumQuestion:
        db_question = ForumQuestion(**question_data)
        self.db.add(db_question)
        self.db.commit()
        self.db.refresh(db_question)
        return db_question

    def increment_view_count(self, question: ForumQuestion) -> ForumQuestion:
        question.view_count = (question.view_count or 0) + 1
        self.db.commit()
        self.db.refresh(question)
        return question

    def get_active_admin(self, user_id: str) -> Optional[AdminUser]:
        return (
            self.db.query(AdminUser)
            .filter(AdminUser.id == user_id, AdminUser.is_active.is_(True))
            .first()
        )

    def create_answer(self, question: ForumQuestion, answer_data: dict) -> ForumAnswer:
        """Add an answer and mark the question as answered"""
        db_answer = ForumAnswer(question_id=question.id, **answer_data)
        self.db.add(db_answer)
        question.status = "answered"
        self.db.commit()
        self.db.refresh(db_answer)
        return db_answer
