from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ReportClass(BaseModel):
    class_id: str
    grade: int
    class_name: str


class ReportWeekRow(BaseModel):
    week: int
    week_id: str
    label: str
    start: date
    end: date
    # class_id -> grand total
    scores: Dict[str, int] = Field(default_factory=dict)


class WeeklyReportResponse(BaseModel):
    term_year: int
    grade: Optional[int] = None
    classes: List[ReportClass] = Field(default_factory=list)
    weeks: List[ReportWeekRow] = Field(default_factory=list)
