from fastapi import Depends, HTTPException, status

from meritboard.auth.capabilities import Capability
from meritboard.auth.dependencies import get_current_session
from meritboard.auth.session import AuthSession


def require_capability(capability: Capability):
    """
    Dependency factory to enforce a capability from the role table.

    Example:
        Depends(require_capability(Capability.RECORDS_CREATE))
    """

    async def _checker(session: AuthSession = Depends(get_current_session)) -> AuthSession:
        if not session.has(capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return session

    return _checker


def ensure_class_access(session: AuthSession, class_id: str) -> None:
    if not session.can_access_class(class_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Class is outside your assignment",
        )
