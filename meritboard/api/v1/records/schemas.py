from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from meritboard.core.enums import RuleType


class RecordCreate(BaseModel):
    rule_code: str = Field(..., min_length=1, max_length=20)
    student_id: str = Field(..., min_length=1, max_length=26)
    quantity: int = Field(1, ge=1)
    # Date picker value or full timestamp; stored as the school-local calendar day
    record_date: Union[datetime, date]


class RecordBatchCreate(BaseModel):
    items: List[RecordCreate] = Field(..., min_length=1, max_length=500)


class RecordResponse(BaseModel):
    id: str
    rule_code: str
    rule_type: RuleType
    points_applied: int
    quantity: int
    student_id: str
    class_id: str
    record_date: date
    week: Optional[int] = None
    created_by: str
    created_at: datetime
    reverses_id: Optional[str] = None

    class Config:
        from_attributes = True
