import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

_CLASS_NAME_RE = re.compile(r"^(\d+)/(\d+)$")


class ClassCreate(BaseModel):
    grade: int = Field(..., ge=1)
    class_name: str = Field(..., max_length=50, description='Display name "<grade>/<index>", e.g. "8/3"')

    @model_validator(mode="after")
    def validate_name_matches_grade(self) -> "ClassCreate":
        self.class_name = self.class_name.strip()
        match = _CLASS_NAME_RE.match(self.class_name)
        if not match:
            raise ValueError('class_name must look like "<grade>/<index>", e.g. "8/3"')
        if int(match.group(1)) != self.grade:
            raise ValueError("class_name does not belong to the given grade")
        return self


class ClassUpdate(BaseModel):
    class_name: Optional[str] = Field(None, max_length=50)


class ClassResponse(BaseModel):
    id: str
    grade: int
    class_name: str
    total_merit_points: int
    total_demerit_points: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
