from typing import List

from sqlalchemy.orm import Session

from app.models.quiz import QuizAttempt


class QuizAttemptRepository:
    """Append-only store of quiz attempts"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, attempt_data: dict) -> QuizAttempt:
        """Insert one attempt and return the stored row"""
        db_attempt = QuizAttempt(**attempt_data)
        self.db.add(db_attempt)
        self.db.commit()
        self.db.refresh(db_attempt)
        return db_attempt

    def get_by_quiz_id(self, quiz_id: int) -> List[QuizAttempt]:
        return (
            self.db.query(QuizAttempt)
            .filter(QuizAttempt.quiz_id == quiz_id)
            .order_by(QuizAttempt.id.asc())
            .all()
        )
