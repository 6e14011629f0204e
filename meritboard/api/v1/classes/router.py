from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import ensure_class_access, require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.db.session import get_db

from .schemas import ClassCreate, ClassResponse, ClassUpdate
from . import service

router = APIRouter(prefix="/api/v1/classes", tags=["classes"])


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_class(
    payload: ClassCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_MANAGE)),
) -> ClassResponse:
    try:
        return await service.create_class(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/bulk",
    response_model=List[ClassResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_classes_bulk(
    payload: List[ClassCreate],
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_MANAGE)),
) -> List[ClassResponse]:
    """Create multiple classes in one request. Payload: [{ "grade": 6, "class_name": "6/1" }, ...]"""
    try:
        return await service.create_classes_bulk(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[ClassResponse])
async def list_classes(
    grade: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_READ)),
) -> List[ClassResponse]:
    return await service.list_classes(db, grade=grade)


@router.get("/mine", response_model=List[ClassResponse])
async def list_my_classes(
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_READ)),
) -> List[ClassResponse]:
    """Classes assigned to the caller in their token claims."""
    return await service.list_classes(db, class_ids=sorted(session.assigned_classes))


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(
    class_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_READ)),
) -> ClassResponse:
    ensure_class_access(session, class_id)
    obj = await service.get_class(db, class_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return obj


@router.put("/{class_id}", response_model=ClassResponse)
async def update_class(
    class_id: str,
    payload: ClassUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_MANAGE)),
) -> ClassResponse:
    try:
        obj = await service.update_class(db, class_id, payload)
        if not obj:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
        return obj
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(
    class_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.CLASSES_MANAGE)),
) -> None:
    try:
        deleted = await service.delete_class(db, class_id)
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
