from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from app.models.quiz import Quiz, QuizAttempt, QuizQuestion
from app.schemas.quiz import (
    AdminQuizDetailResponse,
    GradedQuestionResponse,
    PublicQuestionResponse,
    PublicQuizDetailResponse,
    QuizAnswerRecordResponse,
    QuizAttemptResponse,
    QuizResponse,
)

VALID_OPTIONS = (1, 2, 3, 4)


@dataclass(frozen=True)
class Identified:
    """Submission made under a caller-supplied session id"""

    session_id: str


@dataclass(frozen=True)
class Anonymous:
    """Submission without any session id"""


SessionIdentity = Union[Identified, Anonymous]


def resolve_session(session_id: Optional[str]) -> SessionIdentity:
    if session_id is None or not session_id.strip():
        return Anonymous()
    return Identified(session_id.strip())


def session_column_value(identity: SessionIdentity) -> Optional[str]:
    """Anonymous attempts are stored with a NULL session id"""
    if isinstance(identity, Identified):
        return identity.session_id
    return None


@dataclass
class AnswerRecord:
    question_id: int
    selected_answer: Optional[int]
    is_correct: bool

    def to_dict(self) -> dict:
        return {
            "question_id": self.question_id,
            "selected_answer": self.selected_answer,
            "is_correct": self.is_correct,
        }


@dataclass
class GradingOutcome:
    score: int
    total: int
    records: List[AnswerRecord] = field(default_factory=list)

    @property
    def percentage(self) -> int:
        return percentage(self.score, self.total)


def normalize_selection(value: Any) -> Optional[int]:
    """
    Return the submitted option if it is one of the four option markers.

    Anything else (missing, null, strings, booleans, out-of-range numbers)
    becomes None, which never matches a correct answer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value not in VALID_OPTIONS:
        return None
    return value


def grade_answers(
    questions: Sequence[QuizQuestion], answers: Mapping[str, Any]
) -> GradingOutcome:
    """Grade submitted answers against the quiz's own questions, in order"""
    records = []
    score = 0
    for question in questions:
        selected = normalize_selection(answers.get(str(question.id)))
        is_correct = selected is not None and selected == question.correct_answer
        if is_correct:
            score += 1
        records.append(
            AnswerRecord(
                question_id=question.id,
                selected_answer=selected,
                is_correct=is_correct,
            )
        )
    return GradingOutcome(score=score, total=len(questions), records=records)


def percentage(score: int, total: int) -> int:
    """100 * score / total rounded half up; 0 for an empty quiz"""
    if total == 0:
        return 0
    return (200 * score + total) // (2 * total)


class QuizDomain:
    """Conversions between Quiz models and response schemas"""

    @staticmethod
    def to_response(quiz: Quiz) -> QuizResponse:
        return QuizResponse.model_validate(quiz)

    @staticmethod
    def to_response_list(quizzes: List[Quiz]) -> List[QuizResponse]:
        return [QuizDomain.to_response(quiz) for quiz in quizzes]

    @staticmethod
    def to_public_detail(
        quiz: Quiz, questions: List[QuizQuestion]
    ) -> PublicQuizDetailResponse:
        return PublicQuizDetailResponse(
            **QuizDomain.to_response(quiz).model_dump(),
            questions=[PublicQuestionResponse.model_validate(q) for q in questions],
        )

    @staticmethod
    def to_admin_detail(
        quiz: Quiz, questions: List[QuizQuestion]
    ) -> AdminQuizDetailResponse:
        return AdminQuizDetailResponse(
            **QuizDomain.to_response(quiz).model_dump(),
            questions=QuizDomain.to_graded_questions(questions),
        )

    @staticmethod
    def to_graded_questions(
        questions: List[QuizQuestion],
    ) -> List[GradedQuestionResponse]:
        return [GradedQuestionResponse.model_validate(q) for q in questions]

    @staticmethod
    def attempt_to_response(attempt: QuizAttempt) -> QuizAttemptResponse:
        return QuizAttemptResponse(
            id=attempt.id,
            quiz_id=attempt.quiz_id,
            user_id=attempt.user_id,
            session_id=attempt.session_id,
            is_anonymous=attempt.session_id is None,
            score=attempt.score,
            total_questions=attempt.total_questions,
            answers=[QuizAnswerRecordResponse(**record) for record in attempt.answers],
            started_at=attempt.started_at,
            completed_at=attempt.completed_at,
        )

    @staticmethod
    def question_to_dict(order_number: int, question) -> dict:
        """Convert a QuestionCreate schema into repository data"""
        return {
            "order_number": order_number,
            **question.model_dump(),
        }
