import re
from typing import Iterable, List, Optional

from fastapi import status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.app_logger import get_logger
from meritboard.core.enums import RuleType
from meritboard.core.exceptions import ServiceError
from meritboard.core.models import Rule

from .catalog import RULE_CATALOG
from .schemas import RuleCreate, RuleResponse

logger = get_logger("rules")

CODE_PREFIXES = {RuleType.MERIT: "KT", RuleType.DEMERIT: "VP"}
_DEFAULT_CODE_DIGITS = 3


def signed_points(rule_type: RuleType, points: int) -> int:
    return abs(points) if rule_type == RuleType.MERIT else -abs(points)


def next_rule_code(existing_codes: Iterable[str], rule_type: RuleType) -> str:
    """Next code in the type's series: highest existing number + 1, keeping its zero padding.

    KT001..KT007 -> KT008; no VP codes yet -> VP001.
    """
    prefix = CODE_PREFIXES[rule_type]
    pattern = re.compile(rf"^{prefix}(\d+)$")
    highest = 0
    width = _DEFAULT_CODE_DIGITS
    for code in existing_codes:
        match = pattern.match(code or "")
        if match and int(match.group(1)) >= highest:
            highest = int(match.group(1))
            width = max(width, len(match.group(1)))
    return prefix + str(highest + 1).zfill(width)


def _rule_to_response(r: Rule) -> RuleResponse:
    return RuleResponse(
        code=r.code,
        category=r.category,
        description=r.description,
        type=RuleType(r.type),
        points=r.points,
        is_active=r.is_active,
        created_at=r.created_at,
        updated_at=r.updated_at,
    )


async def list_rules(
    db: AsyncSession,
    rule_type: Optional[RuleType] = None,
    category: Optional[str] = None,
    active_only: bool = True,
) -> List[RuleResponse]:
    stmt = select(Rule)
    if rule_type is not None:
        stmt = stmt.where(Rule.type == rule_type.value)
    if category:
        stmt = stmt.where(Rule.category == category)
    if active_only:
        stmt = stmt.where(Rule.is_active.is_(True))
    stmt = stmt.order_by(Rule.code)
    result = await db.execute(stmt)
    return [_rule_to_response(r) for r in result.scalars().all()]


async def get_rule(db: AsyncSession, code: str) -> Optional[RuleResponse]:
    obj = await db.get(Rule, code)
    return _rule_to_response(obj) if obj else None


async def create_rule(db: AsyncSession, payload: RuleCreate) -> RuleResponse:
    code = payload.code.strip().upper() if payload.code and payload.code.strip() else None
    if code is None:
        result = await db.execute(select(Rule.code))
        code = next_rule_code((row[0] for row in result.all()), payload.type)
    try:
        obj = Rule(
            code=code,
            category=payload.category.strip(),
            description=payload.description.strip(),
            type=payload.type.value,
            points=signed_points(payload.type, payload.points),
            is_active=True,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ServiceError(f"Rule code {code} already exists", status.HTTP_409_CONFLICT)
    logger.info("Rule %s created (%s, %s points)", obj.code, obj.type, obj.points)
    return _rule_to_response(obj)


async def sync_rules(db: AsyncSession) -> int:
    """Replace the whole rules table with the catalog in one transaction."""
    try:
        await db.execute(delete(Rule))
        db.add_all(
            Rule(
                code=item.code,
                category=item.category,
                description=item.description,
                type=item.type.value,
                points=item.points,
                is_active=True,
            )
            for item in RULE_CATALOG
        )
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.exception("Rule sync failed")
        raise ServiceError("Error syncing rules.", status.HTTP_500_INTERNAL_SERVER_ERROR) from e
    logger.info("Rules resynced: %d rules", len(RULE_CATALOG))
    return len(RULE_CATALOG)
