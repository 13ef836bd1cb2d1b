from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.quiz import Quiz, QuizQuestion


class QuizRepository:
    """Repository for Quiz and QuizQuestion database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, quiz_id: int) -> Optional[Quiz]:
        """Get a quiz by ID regardless of publication state"""
        return self.db.query(Quiz).filter(Quiz.id == quiz_id).first()

    def get_published_by_id(self, quiz_id: int) -> Optional[Quiz]:
        """Get a published quiz by ID"""
        return (
            self.db.query(Quiz)
            .filter(Quiz.id == quiz_id, Quiz.is_published.is_(True))
            .first()
        )

    def get_published(self) -> List[Quiz]:
        """Get all published quizzes, newest first"""
        return (
            self.db.query(Quiz)
            .filter(Quiz.is_published.is_(True))
            .order_by(Quiz.created_at.desc(), Quiz.id.desc())
            .all()
        )

    def get_all(self) -> List[Quiz]:
        """Get every quiz, newest first"""
        return self.db.query(Quiz).order_by(Quiz.created_at.desc(), Quiz.id.desc()).all()

    def get_questions(self, quiz_id: int) -> List[QuizQuestion]:
        """Get the questions of a quiz in display order"""
        return (
            self.db.query(QuizQuestion)
            .filter(QuizQuestion.quiz_id == quiz_id)
            .order_by(QuizQuestion.order_number.asc(), QuizQuestion.id.asc())
            .all()
        )

    def create_with_questions(
        self, quiz_data: dict, questions_data: List[dict]
    ) -> Quiz:
        """Create a quiz and its questions in one transaction"""
        db_quiz = Quiz(**quiz_data)
        db_quiz.questions = [QuizQuestion(**data) for data in questions_data]
        self.db.add(db_quiz)
        self.db.commit()
        self.db.refresh(db_quiz)
        return db_quiz

    def update(self, quiz: Quiz, update_data: dict) -> Quiz:
        """Update quiz metadata"""
        for field, value in update_data.items():
            setattr(quiz, field, value)
        self.db.commit()
        self.db.refresh(quiz)
        return quiz

    def delete(self, quiz: Quiz) -> bool:
        """Delete a quiz together with its questions"""
        self.db.delete(quiz)
        self.db.commit()
        return True
