"""Identifier helpers: sortable ids for new entities and readable class ids."""
import re
from typing import Optional, Tuple

from ulid import ULID

_CLASS_ID_RE = re.compile(r"^class_(\d+)_(\d+)$")


def generate_id() -> str:
    """Return a new ULID string; lexicographic order follows creation time."""
    return str(ULID())


def generate_class_id(grade: int, index: int) -> str:
    """class_<grade>_<index>, e.g. (8, 3) -> "class_8_3"."""
    return f"class_{grade}_{index}"


def class_id_from_name(class_name: str) -> str:
    """Display name "8/3" -> "class_8_3"."""
    return "class_" + class_name.strip().replace("/", "_")


def grade_from_class_id(class_id: str) -> Optional[int]:
    match = _CLASS_ID_RE.match(class_id or "")
    return int(match.group(1)) if match else None


def class_name_from_id(class_id: str) -> str:
    """"class_8_3" -> "8/3"; ids that do not follow the pattern are returned unchanged."""
    if not class_id or not class_id.startswith("class_"):
        return class_id
    return class_id[len("class_"):].replace("_", "/")


def natural_sort_key(text: str) -> Tuple:
    """Sort key that orders embedded numbers numerically ("6/2" before "6/10")."""
    return tuple(int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", text or "") if part)
