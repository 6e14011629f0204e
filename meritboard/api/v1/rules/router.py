from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.enums import RuleType
from meritboard.core.exceptions import ServiceError
from meritboard.db.session import get_db

from .schemas import RuleCreate, RuleResponse, RuleSyncResponse
from . import service

router = APIRouter(prefix="/api/v1/rules", tags=["rules"])


@router.get("", response_model=List[RuleResponse])
async def list_rules(
    type: Optional[RuleType] = Query(None),
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RULES_READ)),
) -> List[RuleResponse]:
    return await service.list_rules(db, rule_type=type, category=category)


@router.post(
    "",
    response_model=RuleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_rule(
    payload: RuleCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RULES_MANAGE)),
) -> RuleResponse:
    try:
        return await service.create_rule(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/sync", response_model=RuleSyncResponse)
async def sync_rules(
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RULES_MANAGE)),
) -> RuleSyncResponse:
    """Destructive: replace every rule with the built-in catalog."""
    try:
        count = await service.sync_rules(db)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return RuleSyncResponse(count=count)


@router.get("/{code}", response_model=RuleResponse)
async def get_rule(
    code: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RULES_READ)),
) -> RuleResponse:
    obj = await service.get_rule(db, code)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rule not found")
    return obj
