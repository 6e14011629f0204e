from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field

from meritboard.core.enums import Role, UserStatus


class UserCreate(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    # When given, the claims are set too (same path as POST /users/{id}/claims)
    role: Optional[Role] = None
    assigned_classes: List[str] = Field(default_factory=list)


class UserUpdate(BaseModel):
    """Profile fields only; authorization comes from claims."""

    display_name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    assigned_classes: Optional[List[str]] = None
    status: Optional[UserStatus] = None


class UserResponse(BaseModel):
    id: str
    display_name: str
    email: EmailStr
    role: Optional[str] = None
    assigned_classes: List[str] = Field(default_factory=list)
    claims: Dict[str, Any] = Field(default_factory=dict)
    status: str
    created_at: datetime
    updated_at: datetime
