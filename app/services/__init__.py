from .auth import AuthService
from .donation import DonationService
from .qna import QnaService
from .quiz import QuizService
from .tracking import TrackingService

__all__ = ["AuthService", "DonationService", "QnaService", "QuizService", "TrackingService"]
