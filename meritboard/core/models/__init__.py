from meritboard.core.models.school_class import SchoolClass
from meritboard.core.models.student import Student
from meritboard.core.models.rule import Rule
from meritboard.core.models.record import Record
from meritboard.core.models.weekly_ranking import WeeklyRanking
from meritboard.core.models.weekly_score import WeeklyScore

__all__ = [
    "SchoolClass",
    "Student",
    "Rule",
    "Record",
    "WeeklyRanking",
    "WeeklyScore",
]
