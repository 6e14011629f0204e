from types import SimpleNamespace

from meritboard.core.ranking import ManualScore, assign_ranks, rank_by_grade, tally_week


def _class(class_id: str, grade: int, name: str) -> SimpleNamespace:
    return SimpleNamespace(id=class_id, grade=grade, class_name=name)


def _record(class_id: str, rule_type: str, points: int) -> SimpleNamespace:
    return SimpleNamespace(class_id=class_id, rule_type=rule_type, points_applied=points)


CLASSES = [
    _class("class_6_1", 6, "6/1"),
    _class("class_6_2", 6, "6/2"),
    _class("class_6_10", 6, "6/10"),
    _class("class_7_1", 7, "7/1"),
]


def test_merit_quantity_times_points() -> None:
    # rule worth 5 applied with quantity 2
    standings = tally_week([_record("class_6_1", "merit", 10)], CLASSES[:1])
    s = standings[0]
    assert (s.merit, s.demerit, s.total) == (10, 0, 10)
    assert s.record_count == 1


def test_classes_without_records_have_zeros() -> None:
    standings = {s.class_id: s for s in tally_week([_record("class_6_1", "merit", 5)], CLASSES)}
    assert set(standings) == {c.id for c in CLASSES}
    empty = standings["class_7_1"]
    assert (empty.merit, empty.demerit, empty.total, empty.record_count) == (0, 0, 0, 0)


def test_demerits_counted_as_magnitude_and_offsets_subtract() -> None:
    records = [
        _record("class_6_1", "demerit", -5),
        _record("class_6_1", "demerit", -10),
        _record("class_6_1", "demerit", 10),  # offsetting entry for the -10
    ]
    s = tally_week(records, CLASSES[:1])[0]
    assert s.demerit == 5
    assert s.total == -5


def test_records_for_unknown_classes_are_ignored() -> None:
    standings = tally_week([_record("class_9_9", "merit", 50)], CLASSES)
    assert sum(s.merit for s in standings) == 0


def test_total_is_merit_minus_demerit_overall() -> None:
    records = [
        _record("class_6_1", "merit", 5),
        _record("class_6_2", "demerit", -15),
        _record("class_6_10", "merit", 20),
        _record("class_6_10", "demerit", -5),
    ]
    standings = tally_week(records, CLASSES)
    assert sum(s.total for s in standings) == sum(s.merit for s in standings) - sum(s.demerit for s in standings)


def test_tie_break_uses_natural_class_name_order() -> None:
    ordered = assign_ranks(tally_week([], CLASSES[:3]))
    assert [s.class_name for s in ordered] == ["6/1", "6/2", "6/10"]
    assert [s.rank for s in ordered] == [1, 1, 1]


def test_competition_ranking() -> None:
    records = [
        _record("class_6_10", "merit", 10),
        _record("class_6_2", "merit", 10),
        _record("class_6_1", "merit", 5),
    ]
    ordered = assign_ranks(tally_week(records, CLASSES[:3]))
    assert [(s.class_name, s.rank) for s in ordered] == [("6/2", 1), ("6/10", 1), ("6/1", 3)]


def test_manual_scores_change_ranking_key() -> None:
    records = [_record("class_6_1", "merit", 10)]
    manual = {"class_6_2": ManualScore(study=20, discipline=None, hygiene=5)}
    plain = assign_ranks(tally_week(records, CLASSES[:2], manual))
    assert plain[0].class_id == "class_6_1"

    with_manual = assign_ranks(tally_week(records, CLASSES[:2], manual), include_manual=True)
    assert with_manual[0].class_id == "class_6_2"
    assert with_manual[0].manual_total == 25
    assert with_manual[0].grand_total == 25
    assert with_manual[1].grand_total == 10


def test_manual_score_default_fills_missing_categories() -> None:
    assert ManualScore(study=300).total(default=340) == 300 + 340 + 340
    assert ManualScore().total() == 0


def test_rank_by_grade_ranks_each_grade_separately() -> None:
    records = [_record("class_7_1", "merit", 50), _record("class_6_2", "merit", 5)]
    grades = rank_by_grade(records, CLASSES)
    assert [g.grade for g in grades] == [6, 7]
    assert grades[0].standings[0].class_id == "class_6_2"
    assert grades[0].standings[0].rank == 1
    assert grades[1].standings[0].rank == 1
