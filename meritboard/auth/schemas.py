from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from meritboard.core.enums import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class UserInfo(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: Optional[str] = None
    assigned_classes: List[str] = Field(default_factory=list)


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserInfo
    issued_at: datetime


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    issued_at: datetime


class SessionResponse(BaseModel):
    """Resolved session: role and scope from the token, plus derived flags."""

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[Role] = None
    assigned_classes: List[str]
    is_super_admin: bool
    is_viewer_admin: bool
    is_homeroom_teacher: bool
    is_proctor: bool
    capabilities: List[str]


class SetClaimsRequest(BaseModel):
    role: Role
    assigned_classes: List[str] = Field(default_factory=list)


class SetClaimsResponse(BaseModel):
    ok: bool = True
