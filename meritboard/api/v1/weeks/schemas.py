from datetime import date
from typing import List

from pydantic import BaseModel


class WeekResponse(BaseModel):
    week: int
    week_id: str
    label: str
    start: date
    end: date


class WeekListResponse(BaseModel):
    term_year: int
    current: WeekResponse
    weeks: List[WeekResponse]
