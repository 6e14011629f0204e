from meritboard.core.ids import (
    class_id_from_name,
    class_name_from_id,
    generate_class_id,
    generate_id,
    grade_from_class_id,
    natural_sort_key,
)


def test_generate_id_is_unique_and_sortable() -> None:
    ids = [generate_id() for _ in range(50)]
    assert len(set(ids)) == 50
    assert all(len(i) == 26 for i in ids)


def test_class_ids() -> None:
    assert generate_class_id(8, 3) == "class_8_3"
    assert class_id_from_name(" 8/3 ") == "class_8_3"
    assert class_name_from_id("class_8_3") == "8/3"
    assert grade_from_class_id("class_8_3") == 8
    assert grade_from_class_id("8A") is None
    assert class_name_from_id("8A") == "8A"


def test_natural_sort_key() -> None:
    names = ["6/10", "6/2", "6/1", "7/1"]
    assert sorted(names, key=natural_sort_key) == ["6/1", "6/2", "6/10", "7/1"]
