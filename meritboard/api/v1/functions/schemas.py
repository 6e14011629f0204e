from typing import List

from pydantic import BaseModel, Field


class SetUserClaimsBody(BaseModel):
    """Callable payload: ``{"uid": ..., "role": ..., "assignedClasses": [...]}``."""

    uid: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    assigned_classes: List[str] = Field(default_factory=list, alias="assignedClasses")

    class Config:
        populate_by_name = True
