"""
HTTP handlers with the same contracts as the school's original cloud functions.

Errors are plain-text bodies, successes are JSON. ``addRecord`` only echoes its
payload; records are persisted through ``POST /api/v1/records``.
"""
import json
from typing import Tuple, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.api.v1.rules.service import sync_rules as sync_rule_catalog
from meritboard.app_logger import get_logger
from meritboard.auth.capabilities import Capability
from meritboard.auth.dependencies import session_from_token
from meritboard.auth.schemas import SetClaimsRequest
from meritboard.auth.services import set_user_claims as set_claims_for_user
from meritboard.auth.session import AuthSession
from meritboard.core.enums import Role
from meritboard.core.exceptions import ServiceError
from meritboard.db.session import get_db

from .schemas import SetUserClaimsBody

logger = get_logger("functions")

router = APIRouter(prefix="/functions", tags=["functions"])


def _bearer_session(request: Request) -> Union[AuthSession, PlainTextResponse]:
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return PlainTextResponse("Missing ID token", status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return session_from_token(token.strip())
    except (JWTError, ValueError):
        return PlainTextResponse("Invalid ID token", status_code=status.HTTP_401_UNAUTHORIZED)


async def _json_body(request: Request) -> Tuple[object, bool]:
    raw = await request.body()
    if not raw:
        return None, True
    try:
        return json.loads(raw), True
    except ValueError:
        return None, False


@router.api_route(
    "/addRecord",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
)
async def add_record(request: Request):
    try:
        if request.method != "POST":
            return PlainTextResponse("Method Not Allowed", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)

        session = _bearer_session(request)
        if isinstance(session, PlainTextResponse):
            return session

        data, ok = await _json_body(request)
        if not ok:
            return PlainTextResponse("Invalid JSON body", status_code=status.HTTP_400_BAD_REQUEST)
        return JSONResponse({"ok": True, "received": data})
    except Exception as e:
        logger.exception("addRecord error")
        return PlainTextResponse(str(e) or "Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/setUserClaims")
async def set_user_claims(request: Request, db: AsyncSession = Depends(get_db)):
    session = _bearer_session(request)
    if isinstance(session, PlainTextResponse):
        return session
    # Checked before the body is read: a caller without claims:manage never touches the store
    if not session.has(Capability.CLAIMS_MANAGE):
        logger.warning("User %s called setUserClaims without claims:manage", session.user_id)
        return PlainTextResponse("Permission denied", status_code=status.HTTP_403_FORBIDDEN)

    data, ok = await _json_body(request)
    try:
        if not ok or not isinstance(data, dict):
            raise ValueError("body must be a JSON object")
        body = SetUserClaimsBody.model_validate(data)
        role = Role.parse(body.role)
        if role is None:
            raise ValueError(f"unknown role {body.role!r}")
    except (ValueError, ValidationError) as e:
        return PlainTextResponse(f"Invalid request: {e}", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        await set_claims_for_user(
            db,
            session,
            body.uid,
            SetClaimsRequest(role=role, assigned_classes=body.assigned_classes),
        )
    except ServiceError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    return JSONResponse({"ok": True})


@router.post("/syncRules")
async def sync_rules(request: Request, db: AsyncSession = Depends(get_db)):
    session = _bearer_session(request)
    if isinstance(session, PlainTextResponse):
        return session
    if not session.has(Capability.RULES_MANAGE):
        return PlainTextResponse("Permission denied", status_code=status.HTTP_403_FORBIDDEN)

    try:
        count = await sync_rule_catalog(db)
    except ServiceError:
        return PlainTextResponse("Error syncing rules.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return PlainTextResponse(f"Rules have been successfully reset and synced ({count} rules).")
