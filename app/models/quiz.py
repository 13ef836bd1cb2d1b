from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON, DateTime

from app.core.database import Base


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    title_th = Column(String(300), nullable=False)
    title_en = Column(String(300), nullable=False)
    description_th = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, default="general", index=True)
    difficulty = Column(String(10), nullable=False, default="medium")
    time_limit_minutes = Column(Integer, nullable=True)
    is_published = Column(Boolean, nullable=False, default=False, index=True)
    questions_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    questions = relationship(
        "QuizQuestion",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="QuizQuestion.order_number",
    )


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order_number = Column(Integer, nullable=False, default=0)
    question_th = Column(Text, nullable=False)
    question_en = Column(Text, nullable=False)
    option_1_th = Column(Text, nullable=False)
    option_1_en = Column(Text, nullable=False)
    option_2_th = Column(Text, nullable=False)
    option_2_en = Column(Text, nullable=False)
    option_3_th = Column(Text, nullable=False)
    option_3_en = Column(Text, nullable=False)
    option_4_th = Column(Text, nullable=False)
    option_4_en = Column(Text, nullable=False)
    correct_answer = Column(Integer, nullable=False)
    explanation_th = Column(Text, nullable=True)
    explanation_en = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    quiz = relationship("Quiz", back_populates="questions")

    __table_args__ = (
        CheckConstraint(
            "correct_answer BETWEEN 1 AND 4", name="ck_quiz_questions_correct_answer"
        ),
    )


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(36), nullable=True, index=True)
    # NULL for anonymous submissions
    session_id = Column(String(100), nullable=True, index=True)
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    answers = Column(JSON, nullable=False)
    started_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
