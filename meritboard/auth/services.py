from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.app_logger import get_logger
from meritboard.auth.capabilities import Capability
from meritboard.auth.models import RefreshToken, User
from meritboard.auth.schemas import (
    AccessTokenResponse,
    LoginRequest,
    LoginResponse,
    SetClaimsRequest,
    UserInfo,
)
from meritboard.auth.security import (
    create_access_token,
    create_refresh_token,
    verify_password,
)
from meritboard.auth.session import AuthSession
from meritboard.core.enums import UserStatus
from meritboard.core.exceptions import ServiceError
from meritboard.core.models import SchoolClass

logger = get_logger("auth")


def build_access_claims(user: User, issued_at: datetime) -> Dict:
    """Token payload; role and assigned classes come from the user's claims, not the profile."""
    claims = user.claims or {}
    return {
        "sub": user.id,
        "type": "access",
        "email": user.email,
        "name": user.display_name,
        "role": claims.get("role"),
        "assigned_classes": list(claims.get("assigned_classes") or []),
        "iat": int(issued_at.timestamp()),
    }


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


async def login_user(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    # 1. Find user by email (case-insensitive)
    user_stmt = select(User).where(func.lower(User.email) == func.lower(payload.email))
    user_result = await db.execute(user_stmt)
    user: Optional[User] = user_result.scalar_one_or_none()
    if not user:
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    # 2. Verify password hash
    if not verify_password(payload.password, user.password_hash):
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    # 3. Check user status
    if user.status != UserStatus.ACTIVE.value:
        raise ServiceError("User is inactive", status.HTTP_403_FORBIDDEN)

    issued_at = datetime.now(timezone.utc)
    access_token = create_access_token(subject=build_access_claims(user, issued_at))

    refresh_token_str, refresh_expires_at = create_refresh_token()
    db.add(
        RefreshToken(
            user_id=user.id,
            token=refresh_token_str,
            expires_at=refresh_expires_at,
        )
    )
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        raise ServiceError(
            "Failed to persist authentication state",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        ) from e

    claims = user.claims or {}
    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token_str,
        user=UserInfo(
            id=user.id,
            name=user.display_name,
            email=user.email,
            role=claims.get("role"),
            assigned_classes=list(claims.get("assigned_classes") or []),
        ),
        issued_at=issued_at,
    )


async def refresh_access_token(db: AsyncSession, refresh_token: str) -> AccessTokenResponse:
    """Issue a new access token carrying the user's current claims."""
    result = await db.execute(select(RefreshToken).where(RefreshToken.token == refresh_token))
    stored = result.scalar_one_or_none()
    now = datetime.now(timezone.utc)
    if not stored or _as_aware(stored.expires_at) <= now:
        raise ServiceError("Invalid or expired refresh token", status.HTTP_401_UNAUTHORIZED)

    user = await db.get(User, stored.user_id)
    if not user or user.status != UserStatus.ACTIVE.value:
        raise ServiceError("User is inactive", status.HTTP_403_FORBIDDEN)

    return AccessTokenResponse(
        access_token=create_access_token(subject=build_access_claims(user, now)),
        issued_at=now,
    )


async def logout(db: AsyncSession, refresh_token: str) -> None:
    await db.execute(delete(RefreshToken).where(RefreshToken.token == refresh_token))
    await db.commit()


async def validate_class_ids(db: AsyncSession, class_ids: List[str]) -> List[str]:
    """De-duplicated class ids, all of which must exist."""
    assigned: List[str] = list(dict.fromkeys(c.strip() for c in class_ids if c.strip()))
    if assigned:
        found = await db.execute(select(SchoolClass.id).where(SchoolClass.id.in_(assigned)))
        missing = set(assigned) - {row[0] for row in found.all()}
        if missing:
            raise ServiceError(
                f"Unknown class id(s): {', '.join(sorted(missing))}",
                status.HTTP_400_BAD_REQUEST,
            )
    return assigned


async def set_user_claims(
    db: AsyncSession,
    caller: AuthSession,
    target_user_id: str,
    payload: SetClaimsRequest,
) -> None:
    """Replace a user's role/assignment claims. Requires the claims:manage capability, which only admin holds."""
    if not caller.has(Capability.CLAIMS_MANAGE):
        logger.warning("User %s attempted to set claims for %s without claims:manage", caller.user_id, target_user_id)
        raise ServiceError("Permission denied", status.HTTP_403_FORBIDDEN)

    user = await db.get(User, target_user_id)
    if not user:
        raise ServiceError("User not found", status.HTTP_404_NOT_FOUND)

    assigned = await validate_class_ids(db, payload.assigned_classes)

    user.claims = {"role": payload.role.value, "assigned_classes": assigned}
    # Profile copies for display only
    user.role = payload.role.value
    user.assigned_classes = assigned
    await db.commit()
    logger.info("Claims for user %s set to role=%s classes=%s by %s", user.id, payload.role.value, assigned, caller.user_id)
