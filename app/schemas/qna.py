from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class QuestionStatus(str, Enum):
    PENDING = "pending"
    ANSWERED = "answered"
    CLOSED = "closed"


class CategoryResponse(BaseModel):
    id: int
    slug: str
    name_th: str
    name_en: str
    icon: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True


class CategoryListResponse(BaseModel):
    categories: List[CategoryResponse]


class AdminSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: str

    class Config:
        from_attributes = True


class AnswerCreate(BaseModel):
    content: str = Field(..., min_length=1)
    sources: List[str] = []


class AnswerResponse(BaseModel):
    id: int
    question_id: int
    admin_id: str
    content: str
    sources: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    admin: Optional[AdminSummary] = None

    @field_validator("sources", mode="before")
    @classmethod
    def default_sources(cls, v):
        return v or []

    class Config:
        from_attributes = True


class QuestionCreate(BaseModel):
    category_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)


class QuestionSummaryResponse(BaseModel):
    id: int
    user_id: Optional[str] = None
    category_id: int
    title: str
    content: str
    status: QuestionStatus
    view_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[CategoryResponse] = None
    answers_count: int = 0


class QuestionDetailResponse(QuestionSummaryResponse):
    answers: List[AnswerResponse] = []


class QuestionListResponse(BaseModel):
    questions: List[QuestionSummaryResponse]
    total: int
    limit: int
    offset: int


class QuestionEnvelope(BaseModel):
    question: QuestionDetailResponse


class AnswerEnvelope(BaseModel):
    answer: AnswerResponse
