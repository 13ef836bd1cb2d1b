from .page_view_repository import PageViewRepository
from .qna_repository import QnaRepository
from .quiz_attempt_repository import QuizAttemptRepository
from .quiz_repository import QuizRepository

__all__ = [
    "QuizRepository",
    "QuizAttemptRepository",
    "QnaRepository",
    "PageViewRepository",
]
