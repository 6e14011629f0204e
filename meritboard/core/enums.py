from enum import Enum
from typing import Optional


class RuleType(str, Enum):
    MERIT = "merit"
    DEMERIT = "demerit"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Role(str, Enum):
    ADMIN = "admin"
    PRINCIPAL = "principal"
    VICE_PRINCIPAL = "vice_principal"
    IT_STAFF = "it_staff"
    HOMEROOM_TEACHER = "homeroom_teacher"
    PROCTOR = "proctor"
    STUDENT = "student"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        """Resolve a claim value (current or legacy spelling) to a Role; None when unknown."""
        if not value:
            return None
        key = str(value).strip().lower()
        try:
            return cls(key)
        except ValueError:
            return ROLE_ALIASES.get(key)


# Role names issued by the previous deployment, still present in older tokens/profiles
ROLE_ALIASES = {
    "hieu_truong": Role.PRINCIPAL,
    "pho_hieu_truong": Role.VICE_PRINCIPAL,
    "nhan_vien_cntt": Role.IT_STAFF,
    "giao_vien_chu_nhiem": Role.HOMEROOM_TEACHER,
    "giam_thi": Role.PROCTOR,
    "supervisor": Role.PROCTOR,
    "inspector": Role.PROCTOR,
}
