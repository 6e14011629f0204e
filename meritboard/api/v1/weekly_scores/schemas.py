from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WeeklyScoreUpdate(BaseModel):
    """Only the fields present in the request body are changed."""

    study: Optional[int] = Field(None, ge=0)
    discipline: Optional[int] = Field(None, ge=0)
    hygiene: Optional[int] = Field(None, ge=0)
    comment: Optional[str] = Field(None, max_length=2000)


class WeeklyScoreResponse(BaseModel):
    id: str
    week_id: str
    term_year: int
    week: int
    class_id: str
    study: Optional[int] = None
    discipline: Optional[int] = None
    hygiene: Optional[int] = None
    comment: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: datetime

    class Config:
        from_attributes = True
