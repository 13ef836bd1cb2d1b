from .page_view import PageView
from .qna import AdminUser, ForumAnswer, ForumQuestion, QuestionCategory
from .quiz import Quiz, QuizAttempt, QuizQuestion

__all__ = [
    "Quiz",
    "QuizQuestion",
    "QuizAttempt",
    "QuestionCategory",
    "ForumQuestion",
    "ForumAnswer",
    "AdminUser",
    "PageView",
]
