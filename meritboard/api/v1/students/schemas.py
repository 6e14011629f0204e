from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    school_id: str = Field(..., min_length=1, max_length=50)
    class_id: str = Field(..., min_length=1, max_length=50)


class StudentUpdate(BaseModel):
    """Counters are not editable; they only move with records."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    school_id: Optional[str] = Field(None, min_length=1, max_length=50)
    class_id: Optional[str] = Field(None, min_length=1, max_length=50)


class StudentResponse(BaseModel):
    id: str
    school_id: str
    full_name: str
    class_id: str
    total_merit_points: int
    total_demerit_points: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudentRecordItem(BaseModel):
    id: str
    rule_code: str
    rule_type: str
    points_applied: int
    quantity: int
    class_id: str
    record_date: date
    week: Optional[int] = None
    created_by: str
    reverses_id: Optional[str] = None


class StudentDetailResponse(StudentResponse):
    records: List[StudentRecordItem] = Field(default_factory=list)
