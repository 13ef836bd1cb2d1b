from typing import Optional

from pydantic import BaseModel, Field


class PageViewCreate(BaseModel):
    path: str = Field(..., min_length=1, max_length=500)
    referrer: Optional[str] = Field(None, max_length=500)
