from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from meritboard.core.enums import RuleType


class RuleCreate(BaseModel):
    """New rule. Points are entered as a positive number; the sign follows the type."""

    type: RuleType
    points: int = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    code: Optional[str] = Field(None, max_length=20, description="Assigned automatically when omitted")


class RuleResponse(BaseModel):
    code: str
    category: str
    description: str
    type: RuleType
    points: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RuleSyncResponse(BaseModel):
    ok: bool = True
    count: int
