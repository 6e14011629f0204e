from typing import List, Optional

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.app_logger import get_logger
from meritboard.auth import services as auth_service
from meritboard.auth.models import User
from meritboard.auth.schemas import SetClaimsRequest
from meritboard.auth.security import hash_password
from meritboard.auth.session import AuthSession
from meritboard.core.enums import UserStatus
from meritboard.core.exceptions import ServiceError

from .schemas import UserCreate, UserResponse, UserUpdate

logger = get_logger("users")


def _user_to_response(u: User) -> UserResponse:
    return UserResponse(
        id=u.id,
        display_name=u.display_name,
        email=u.email,
        role=u.role,
        assigned_classes=list(u.assigned_classes or []),
        claims=dict(u.claims or {}),
        status=u.status,
        created_at=u.created_at,
        updated_at=u.updated_at,
    )


async def list_users(
    db: AsyncSession,
    status_filter: Optional[UserStatus] = None,
    search: Optional[str] = None,
) -> List[UserResponse]:
    stmt = select(User)
    if status_filter is not None:
        stmt = stmt.where(User.status == status_filter.value)
    if search:
        pattern = f"%{search.strip().lower()}%"
        stmt = stmt.where(
            func.lower(User.display_name).like(pattern) | func.lower(User.email).like(pattern)
        )
    result = await db.execute(stmt.order_by(User.display_name, User.id))
    return [_user_to_response(u) for u in result.scalars().all()]


async def get_user(db: AsyncSession, user_id: str) -> Optional[UserResponse]:
    obj = await db.get(User, user_id)
    return _user_to_response(obj) if obj else None


async def create_user(db: AsyncSession, session: AuthSession, payload: UserCreate) -> UserResponse:
    email = payload.email.strip().lower()
    existing = await db.execute(select(User.id).where(func.lower(User.email) == email))
    if existing.scalar_one_or_none() is not None:
        raise ServiceError("Email already registered", status.HTTP_409_CONFLICT)
    if payload.role is not None:
        await auth_service.validate_class_ids(db, payload.assigned_classes)

    obj = User(
        display_name=payload.display_name.strip(),
        email=email,
        password_hash=hash_password(payload.password),
        assigned_classes=[],
        claims={},
        status=UserStatus.ACTIVE.value,
    )
    try:
        db.add(obj)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError("Email already registered", status.HTTP_409_CONFLICT)
    logger.info("User %s (%s) created by %s", obj.id, email, session.user_id)

    if payload.role is not None:
        await auth_service.set_user_claims(
            db,
            session,
            obj.id,
            SetClaimsRequest(role=payload.role, assigned_classes=payload.assigned_classes),
        )
    await db.refresh(obj)
    return _user_to_response(obj)


async def update_user(db: AsyncSession, user_id: str, payload: UserUpdate) -> Optional[UserResponse]:
    obj = await db.get(User, user_id)
    if not obj:
        return None
    data = payload.model_dump(exclude_unset=True)
    if data.get("display_name") is not None:
        obj.display_name = data["display_name"].strip()
    if "role" in data:
        obj.role = data["role"].value if data["role"] is not None else None
    if data.get("assigned_classes") is not None:
        obj.assigned_classes = list(data["assigned_classes"])
    if data.get("status") is not None:
        obj.status = data["status"].value
    await db.commit()
    await db.refresh(obj)
    return _user_to_response(obj)
