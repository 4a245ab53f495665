from domain.membership.merge import MergeEngine
from domain.membership.table import MembershipTable


def _table(mapping: dict[str, list[str]], label: str) -> MembershipTable:
    return MembershipTable.from_mapping(mapping, label=label)


def test_merge_selects_and_concatenates_previous_first() -> None:
    target = _table({"A": ["c1", "c2"], "B": ["c3"]}, "T")
    previous = _table({"B": ["c4"], "C": ["c5"]}, "P")

    merged = target.merge(previous)

    assert merged.as_dict() == {"A": ["c1", "c2"], "B": ["c4", "c3"]}
    assert "C" not in merged
    b = merged.get("B")
    assert b is not None and b.owner == "c4"
    assert merged.label == "Merged(T,P)"


def test_merge_without_previous_keeps_only_multi_collection_items() -> None:
    target = _table({"A": ["c1", "c2"], "B": ["c3"], "D": ["c6", "c7", "c8"]}, "T")

    merged = target.merge(None)

    assert merged.as_dict() == {"A": ["c1", "c2"], "D": ["c6", "c7", "c8"]}
    assert merged.label == "Merged(T,nil)"


def test_single_item_absent_from_previous_is_not_selected() -> None:
    target = _table({"B": ["c3"]}, "T")
    previous = _table({"X": ["c4"]}, "P")
    assert len(target.merge(previous)) == 0


def test_multi_item_also_in_previous_gets_all_collections() -> None:
    target = _table({"A": ["c1", "c2"]}, "T")
    previous = _table({"A": ["c0", "c9"]}, "P")
    assert target.merge(previous).as_dict() == {"A": ["c0", "c9", "c1", "c2"]}


def test_collections_repeated_across_periods_are_not_deduplicated() -> None:
    target = _table({"A": ["c1"]}, "T")
    previous = _table({"A": ["c1"]}, "P")

    merged = target.merge(previous)

    assert merged.as_dict() == {"A": ["c1", "c1"]}
    assert merged.repeated_collections() == {"A": ["c1"]}


def test_select_items_is_sorted_and_inputs_untouched() -> None:
    target = _table({"Z": ["c1", "c2"], "A": ["c3"]}, "T")
    previous = _table({"A": ["c4"]}, "P")
    engine = MergeEngine()

    assert engine.select_items(target, previous) == ["A", "Z"]
    engine.merge_tables(target, previous)
    assert target.as_dict() == {"A": ["c3"], "Z": ["c1", "c2"]}
    assert previous.as_dict() == {"A": ["c4"]}


def test_exclude_merged_gives_single_collection_items() -> None:
    target = _table({"A": ["c1", "c2"], "B": ["c3"], "E": ["c5"]}, "T")
    previous = _table({"B": ["c4"]}, "P")
    merged = target.merge(previous)
    assert target.exclude(merged).as_dict() == {"E": ["c5"]}
