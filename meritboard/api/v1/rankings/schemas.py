from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from meritboard.api.v1.records.schemas import RecordResponse


class WeekInfo(BaseModel):
    term_year: int
    week: int
    week_id: str
    label: str
    start: date
    end: date


class StandingResponse(BaseModel):
    class_id: str
    grade: int
    class_name: str
    merit: int
    demerit: int
    total: int
    rank: int
    record_count: int = 0
    manual_total: Optional[int] = None
    grand_total: Optional[int] = None


class GradeRankingResponse(BaseModel):
    grade: int
    standings: List[StandingResponse] = Field(default_factory=list)


class RankingResponse(WeekInfo):
    finalized: bool
    locked_at: Optional[datetime] = None
    include_manual: bool = False
    grades: List[GradeRankingResponse] = Field(default_factory=list)


class ClassWeekSummaryResponse(WeekInfo):
    class_id: str
    grade: int
    class_name: str
    merit: int
    demerit: int
    total: int
    records: List[RecordResponse] = Field(default_factory=list)


class FinalizeRequest(BaseModel):
    week: int = Field(..., ge=1)
    term_year: Optional[int] = Field(None, ge=2000)


class FinalizeResponse(WeekInfo):
    locked_at: datetime
    class_count: int
