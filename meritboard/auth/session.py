"""
Per-request authenticated session.

Built from the verified access token's claims only; the stored user profile is
never consulted for authorization. Handlers receive the object through the
``get_current_session`` dependency.
"""
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Mapping, Optional

from meritboard.app_logger import get_logger
from meritboard.auth.capabilities import (
    CLASS_SCOPED_ROLES,
    SUPER_ADMIN_ROLES,
    VIEWER_ADMIN_ROLES,
    Capability,
    capabilities_for,
)
from meritboard.core.enums import Role

logger = get_logger("auth.session")


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[Role] = None
    assigned_classes: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_claims(cls, payload: Mapping[str, Any]) -> "AuthSession":
        user_id = str(payload.get("sub") or "")
        raw_role = payload.get("role")
        role = Role.parse(raw_role)
        if role is None:
            # Session continues without elevated capability; operator sets claims
            logger.warning(
                "No usable role claim for user %s (role=%r); granting no capabilities",
                user_id,
                raw_role,
            )
        assigned = payload.get("assigned_classes") or []
        if not isinstance(assigned, (list, tuple)):
            assigned = []
        return cls(
            user_id=user_id,
            email=payload.get("email"),
            display_name=payload.get("name"),
            role=role,
            assigned_classes=frozenset(str(c) for c in assigned),
        )

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return capabilities_for(self.role)

    @property
    def is_super_admin(self) -> bool:
        return self.role in SUPER_ADMIN_ROLES

    @property
    def is_viewer_admin(self) -> bool:
        return self.role in VIEWER_ADMIN_ROLES

    @property
    def is_homeroom_teacher(self) -> bool:
        return self.role == Role.HOMEROOM_TEACHER

    @property
    def is_proctor(self) -> bool:
        return self.role == Role.PROCTOR

    @property
    def is_class_scoped(self) -> bool:
        return self.role in CLASS_SCOPED_ROLES

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def can_access_class(self, class_id: str) -> bool:
        if self.is_class_scoped:
            return class_id in self.assigned_classes
        return True

    def visible_class_ids(self) -> Optional[List[str]]:
        """Class ids this session is limited to, or None when unrestricted."""
        if self.is_class_scoped:
            return sorted(self.assigned_classes)
        return None
