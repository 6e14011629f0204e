"""
Weekly class standings.

Pure, in-memory aggregation: the caller fetches one academic week of records and
the class roster, and gets back per-class merit/demerit/total with ranks.

Ordering: ranking key descending (``total``, or ``grand_total`` when manual
scores are included), then grade ascending, then class display name in natural
order ("6/2" before "6/10"), then class id. Ranks are competition ranks: classes
with the same key share a rank and the next key takes its 1-based position.
"""
from dataclasses import dataclass, field
from itertools import groupby
from typing import Dict, Iterable, List, Mapping, Optional, Protocol

from meritboard.core.enums import RuleType
from meritboard.core.ids import natural_sort_key


class RecordLike(Protocol):
    class_id: str
    rule_type: str
    points_applied: int


class ClassLike(Protocol):
    id: str
    grade: int
    class_name: str


@dataclass
class ManualScore:
    study: Optional[int] = None
    discipline: Optional[int] = None
    hygiene: Optional[int] = None
    comment: Optional[str] = None

    def total(self, default: int = 0) -> int:
        return sum(default if v is None else v for v in (self.study, self.discipline, self.hygiene))


@dataclass
class ClassStanding:
    class_id: str
    grade: int
    class_name: str
    merit: int = 0
    demerit: int = 0
    record_count: int = 0
    manual: Optional[ManualScore] = None
    rank: int = 0

    @property
    def total(self) -> int:
        return self.merit - self.demerit

    @property
    def manual_total(self) -> int:
        return self.manual.total() if self.manual else 0

    @property
    def grand_total(self) -> int:
        return self.manual_total + self.total


@dataclass
class GradeRanking:
    grade: int
    standings: List[ClassStanding] = field(default_factory=list)


def tally_week(
    records: Iterable[RecordLike],
    classes: Iterable[ClassLike],
    manual_scores: Optional[Mapping[str, ManualScore]] = None,
) -> List[ClassStanding]:
    """Sum one week of records per class; every roster class appears, unknown classes are dropped."""
    standings: Dict[str, ClassStanding] = {}
    for c in classes:
        standings[c.id] = ClassStanding(
            class_id=c.id,
            grade=c.grade,
            class_name=c.class_name,
            manual=(manual_scores or {}).get(c.id),
        )

    for rec in records:
        standing = standings.get(rec.class_id)
        if standing is None:
            continue
        points = int(rec.points_applied or 0)
        rule_type = getattr(rec.rule_type, "value", rec.rule_type)
        if rule_type == RuleType.MERIT.value:
            standing.merit += points
        elif rule_type == RuleType.DEMERIT.value:
            # demerits are stored negative; offsetting entries are positive and reduce the sum
            standing.demerit -= points
        else:
            continue
        standing.record_count += 1

    return list(standings.values())


def assign_ranks(standings: List[ClassStanding], include_manual: bool = False) -> List[ClassStanding]:
    """Return the standings in rank order with ``rank`` set on each one."""

    def score(s: ClassStanding) -> int:
        return s.grand_total if include_manual else s.total

    ordered = sorted(
        standings,
        key=lambda s: (-score(s), s.grade, natural_sort_key(s.class_name), s.class_id),
    )
    rank = 0
    last_score: Optional[int] = None
    for index, standing in enumerate(ordered):
        if last_score is None or score(standing) < last_score:
            rank = index + 1
        standing.rank = rank
        last_score = score(standing)
    return ordered


def rank_by_grade(
    records: Iterable[RecordLike],
    classes: Iterable[ClassLike],
    manual_scores: Optional[Mapping[str, ManualScore]] = None,
    include_manual: bool = False,
) -> List[GradeRanking]:
    standings = tally_week(records, classes, manual_scores)
    standings.sort(key=lambda s: s.grade)
    return [
        GradeRanking(grade=grade, standings=assign_ranks(list(group), include_manual=include_manual))
        for grade, group in groupby(standings, key=lambda s: s.grade)
    ]
