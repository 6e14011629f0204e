from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.dependencies import get_current_session
from meritboard.auth.schemas import (
    AccessTokenResponse,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    SessionResponse,
)
from meritboard.auth.services import ServiceError, login_user, logout, refresh_access_token
from meritboard.auth.session import AuthSession
from meritboard.db.session import get_db

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    try:
        return await login_user(db, payload)
    except ServiceError as e:
        if e.status_code == http_status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise HTTPException(status_code=e.status_code, detail="Internal server error")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login-oauth")
async def login_oauth(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    payload = LoginRequest(
        email=form_data.username.strip(),
        password=form_data.password,
    )
    try:
        result = await login_user(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {
        "access_token": result.access_token,
        "token_type": "bearer",
    }


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh(
    payload: RefreshRequest,
    db: AsyncSession = Depends(get_db),
) -> AccessTokenResponse:
    """Re-read the user's claims and issue a fresh access token."""
    try:
        return await refresh_access_token(db, payload.refresh_token)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/logout", status_code=http_status.HTTP_204_NO_CONTENT)
async def sign_out(
    payload: RefreshRequest,
    db: AsyncSession = Depends(get_db),
) -> None:
    await logout(db, payload.refresh_token)


@router.get("/session", response_model=SessionResponse)
async def current_session(
    session: AuthSession = Depends(get_current_session),
) -> SessionResponse:
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        display_name=session.display_name,
        role=session.role,
        assigned_classes=sorted(session.assigned_classes),
        is_super_admin=session.is_super_admin,
        is_viewer_admin=session.is_viewer_admin,
        is_homeroom_teacher=session.is_homeroom_teacher,
        is_proctor=session.is_proctor,
        capabilities=sorted(c.value for c in session.capabilities),
    )
