from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class QuizCategory(str, Enum):
    SALAH = "salah"
    WUDU = "wudu"
    UMRAH = "umrah"
    HAJJ = "hajj"
    ZAKAT = "zakat"
    SAWM = "sawm"
    ADHKAR = "adhkar"
    GENERAL = "general"


class QuizDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizBase(BaseModel):
    title_th: str = Field(..., min_length=1, max_length=300)
    title_en: str = Field(..., min_length=1, max_length=300)
    description_th: Optional[str] = None
    description_en: Optional[str] = None
    category: QuizCategory = QuizCategory.GENERAL
    difficulty: QuizDifficulty = QuizDifficulty.MEDIUM
    time_limit_minutes: Optional[int] = Field(None, gt=0)
    is_published: bool = False


class QuizCreate(QuizBase):
    pass


class QuizUpdate(BaseModel):
    title_th: Optional[str] = Field(None, min_length=1, max_length=300)
    title_en: Optional[str] = Field(None, min_length=1, max_length=300)
    description_th: Optional[str] = None
    description_en: Optional[str] = None
    category: Optional[QuizCategory] = None
    difficulty: Optional[QuizDifficulty] = None
    time_limit_minutes: Optional[int] = Field(None, gt=0)
    is_published: Optional[bool] = None


class QuizResponse(QuizBase):
    id: int
    questions_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuestionCreate(BaseModel):
    question_th: str = Field(..., min_length=1)
    question_en: str = Field(..., min_length=1)
    option_1_th: str = Field(..., min_length=1)
    option_1_en: str = Field(..., min_length=1)
    option_2_th: str = Field(..., min_length=1)
    option_2_en: str = Field(..., min_length=1)
    option_3_th: str = Field(..., min_length=1)
    option_3_en: str = Field(..., min_length=1)
    option_4_th: str = Field(..., min_length=1)
    option_4_en: str = Field(..., min_length=1)
    correct_answer: int = Field(..., ge=1, le=4)
    explanation_th: Optional[str] = None
    explanation_en: Optional[str] = None


class QuizWithQuestionsCreate(BaseModel):
    quiz: QuizCreate
    questions: List[QuestionCreate] = []


class PublicQuestionResponse(BaseModel):
    """Question as shown while the quiz is being taken (answers hidden)"""

    id: int
    quiz_id: int
    order_number: int
    question_th: str
    question_en: str
    option_1_th: str
    option_1_en: str
    option_2_th: str
    option_2_en: str
    option_3_th: str
    option_3_en: str
    option_4_th: str
    option_4_en: str

    class Config:
        from_attributes = True


class GradedQuestionResponse(PublicQuestionResponse):
    """Question with its correct answer revealed, only after submission"""

    correct_answer: int
    explanation_th: Optional[str] = None
    explanation_en: Optional[str] = None


class PublicQuizDetailResponse(QuizResponse):
    questions: List[PublicQuestionResponse] = []


class AdminQuizDetailResponse(QuizResponse):
    questions: List[GradedQuestionResponse] = []


class QuizSubmitRequest(BaseModel):
    # Any JSON object is accepted; unknown or malformed entries are ignored
    answers: Dict[str, Any] = Field(
        default_factory=dict,
        description="Mapping of question id to the selected option (1-4)",
    )
    session_id: Optional[str] = Field(None, max_length=100)


class QuizAnswerRecordResponse(BaseModel):
    question_id: int
    selected_answer: Optional[int] = None
    is_correct: bool


class QuizAttemptResponse(BaseModel):
    id: int
    quiz_id: int
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    is_anonymous: bool
    score: int
    total_questions: int
    answers: List[QuizAnswerRecordResponse]
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class QuizResultResponse(BaseModel):
    attempt: QuizAttemptResponse
    questions: List[GradedQuestionResponse]
    score: int
    total: int
    percentage: int


class AdminAuthRequest(BaseModel):
    password: str


class SuccessResponse(BaseModel):
    success: bool = True
