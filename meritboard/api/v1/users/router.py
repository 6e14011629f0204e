from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import require_capability
from meritboard.auth.schemas import SetClaimsRequest, SetClaimsResponse
from meritboard.auth.services import set_user_claims
from meritboard.auth.session import AuthSession
from meritboard.core.enums import UserStatus
from meritboard.core.exceptions import ServiceError
from meritboard.db.session import get_db

from .schemas import UserCreate, UserResponse, UserUpdate
from . import service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def list_users(
    status_filter: Optional[UserStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, min_length=1),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.USERS_READ)),
) -> List[UserResponse]:
    return await service.list_users(db, status_filter=status_filter, search=search)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.USERS_MANAGE)),
) -> UserResponse:
    try:
        return await service.create_user(db, session, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.USERS_READ)),
) -> UserResponse:
    obj = await service.get_user(db, user_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return obj


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.USERS_MANAGE)),
) -> UserResponse:
    """Update profile fields. Role and classes here are display copies; use /claims to change access."""
    obj = await service.update_user(db, user_id, payload)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return obj


@router.post("/{user_id}/claims", response_model=SetClaimsResponse)
async def set_claims(
    user_id: str,
    payload: SetClaimsRequest,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLAIMS_MANAGE)),
) -> SetClaimsResponse:
    """Replace the user's role and class assignment; takes effect on their next token refresh."""
    try:
        await set_user_claims(db, session, user_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return SetClaimsResponse()
