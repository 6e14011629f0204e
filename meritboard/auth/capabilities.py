"""Role -> capability table. Every permission check goes through this table."""
from enum import Enum
from typing import Dict, FrozenSet, Optional

from meritboard.core.enums import Role


class Capability(str, Enum):
    CLASSES_READ = "classes:read"
    CLASSES_MANAGE = "classes:manage"
    STUDENTS_READ = "students:read"
    STUDENTS_MANAGE = "students:manage"
    RULES_READ = "rules:read"
    RULES_MANAGE = "rules:manage"
    RECORDS_READ = "records:read"
    RECORDS_CREATE = "records:create"
    RECORDS_REVERSE = "records:reverse"
    RANKINGS_READ = "rankings:read"
    RANKINGS_FINALIZE = "rankings:finalize"
    WEEKLY_SCORES_EDIT = "weekly_scores:edit"
    REPORTS_READ = "reports:read"
    USERS_READ = "users:read"
    USERS_MANAGE = "users:manage"
    CLAIMS_MANAGE = "claims:manage"


_READ_ALL = frozenset(
    {
        Capability.CLASSES_READ,
        Capability.STUDENTS_READ,
        Capability.RULES_READ,
        Capability.RECORDS_READ,
        Capability.RANKINGS_READ,
        Capability.REPORTS_READ,
        Capability.USERS_READ,
    }
)

ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.PRINCIPAL: _READ_ALL,
    Role.VICE_PRINCIPAL: _READ_ALL,
    Role.IT_STAFF: frozenset(
        {
            Capability.CLASSES_READ,
            Capability.RULES_READ,
            Capability.RANKINGS_READ,
            Capability.USERS_READ,
        }
    ),
    Role.PROCTOR: frozenset(
        {
            Capability.CLASSES_READ,
            Capability.STUDENTS_READ,
            Capability.RULES_READ,
            Capability.RECORDS_READ,
            Capability.RECORDS_CREATE,
            Capability.RECORDS_REVERSE,
            Capability.RANKINGS_READ,
            Capability.WEEKLY_SCORES_EDIT,
        }
    ),
    # limited to assigned classes, see AuthSession.can_access_class
    Role.HOMEROOM_TEACHER: frozenset(
        {
            Capability.CLASSES_READ,
            Capability.STUDENTS_READ,
            Capability.RULES_READ,
            Capability.RECORDS_READ,
            Capability.RECORDS_CREATE,
            Capability.RANKINGS_READ,
        }
    ),
    Role.STUDENT: frozenset({Capability.RULES_READ, Capability.RANKINGS_READ}),
}

SUPER_ADMIN_ROLES = frozenset({Role.ADMIN})
VIEWER_ADMIN_ROLES = frozenset({Role.PRINCIPAL, Role.VICE_PRINCIPAL, Role.IT_STAFF})
CLASS_SCOPED_ROLES = frozenset({Role.HOMEROOM_TEACHER})


def capabilities_for(role: Optional[Role]) -> FrozenSet[Capability]:
    if role is None:
        return frozenset()
    return ROLE_CAPABILITIES.get(role, frozenset())
