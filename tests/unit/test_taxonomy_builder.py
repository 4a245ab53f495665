import pytest

from domain.errors import InvalidAttributeError, UnknownClassificationError
from domain.rows import SourceRow
from domain.taxonomy.builder import (
    TaxonomyBuilder,
    cluster_group_key,
    code_title_leaf_key,
    skip_codes_of_length,
)
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.node import NodeKind

CLASSIFICATION = ClassificationTable()


def _rows(*triples: tuple[str, str, str]) -> list[SourceRow]:
    return [
        SourceRow(line_num=i + 2, values={"cluster_abbrev": c, "for_code": code, "for_title": title})
        for i, (c, code, title) in enumerate(triples)
    ]


def _build(rows, group_template=None, leaf_template=None, skip_length=2):
    builder = TaxonomyBuilder(CLASSIFICATION, group_code_col="cluster_abbrev")
    return builder.build(
        rows,
        skip=skip_codes_of_length("for_code", skip_length),
        group_key=cluster_group_key(CLASSIFICATION, "cluster_abbrev"),
        leaf_key=code_title_leaf_key("for_code", "for_title"),
        group_template=group_template,
        leaf_template=leaf_template,
        root_name="ERA TEST",
    )


def test_duplicate_rows_collapse_into_one_leaf() -> None:
    tree = _build(
        _rows(
            ("MIC", "0101", "Pure Mathematics"),
            ("MIC", "0101", "Pure Mathematics"),
        )
    )
    (group,) = tree.children(tree.root)
    leaves = tree.children(group)
    assert [leaf.name for leaf in leaves] == ["0101 - Pure Mathematics"]
    assert tree.leaf_count == 1


def test_children_keep_first_seen_order() -> None:
    tree = _build(
        _rows(
            ("PCE", "0202", "Atomic Physics"),
            ("MIC", "0102", "Applied Mathematics"),
            ("PCE", "0201", "Astronomical and Space Sciences"),
            ("MIC", "0101", "Pure Mathematics"),
        )
    )
    groups = tree.children(tree.root)
    assert [g.name for g in groups] == [
        "Cluster 1. Physical, Chemical and Earth Sciences",
        "Cluster 6. Mathematical, Information and Computing Sciences",
    ]
    assert [c.name for c in tree.children(groups[0])] == [
        "0202 - Atomic Physics",
        "0201 - Astronomical and Space Sciences",
    ]
    assert [c.name for c in tree.children(groups[1])] == [
        "0102 - Applied Mathematics",
        "0101 - Pure Mathematics",
    ]


def test_two_digit_codes_are_skipped() -> None:
    tree = _build(_rows(("MIC", "01", "Mathematical Sciences"), ("MIC", "0101", "Pure Mathematics")))
    (group,) = tree.children(tree.root)
    assert [c.name for c in tree.children(group)] == ["0101 - Pure Mathematics"]


def test_skip_can_be_disabled() -> None:
    tree = _build(_rows(("MIC", "01", "Mathematical Sciences")), skip_length=None)
    assert tree.leaf_count == 1


def test_unknown_cluster_fails_with_line_number() -> None:
    rows = _rows(("MIC", "0101", "Pure Mathematics"), ("ZZZ", "9999", "Mystery"))
    with pytest.raises(UnknownClassificationError) as exc:
        _build(rows)
    assert exc.value.code == "ZZZ"
    assert exc.value.line_num == 3
    assert "9999" in str(exc.value)


def test_unknown_cluster_on_skipped_row_is_ignored() -> None:
    tree = _build(_rows(("ZZZ", "99", "Skipped anyway"), ("MIC", "0101", "Pure Mathematics")))
    assert tree.leaf_count == 1


def test_attributes_rendered_from_creating_row_only() -> None:
    rows = [
        SourceRow(2, {"cluster_abbrev": "MIC", "for_code": "0101", "for_title": "Pure Mathematics", "note": "first"}),
        SourceRow(3, {"cluster_abbrev": "MIC", "for_code": "0101", "for_title": "Pure Mathematics", "note": "second"}),
    ]
    tree = _build(
        rows,
        group_template={"description": "{{LOOKUP_CLUSTER_NAME}} / {{CSV_FIELD_note}}"},
        leaf_template={"intro": "{{CSV_FIELD_note}}"},
    )
    (group,) = tree.children(tree.root)
    (leaf,) = tree.children(group)
    assert group.attributes["description"] == (
        "Cluster 6. Mathematical, Information and Computing Sciences / first"
    )
    assert leaf.attributes == {"intro": "first"}
    assert leaf.kind is NodeKind.LEAF


def test_disallowed_group_attribute_is_fatal() -> None:
    with pytest.raises(InvalidAttributeError):
        _build(_rows(("MIC", "0101", "Pure Mathematics")), group_template={"license": "CC-BY"})


def test_license_is_allowed_on_collections() -> None:
    tree = _build(_rows(("MIC", "0101", "Pure Mathematics")), leaf_template={"license": "CC-BY"})
    (group,) = tree.children(tree.root)
    (leaf,) = tree.children(group)
    assert leaf.attributes["license"] == "CC-BY"


def test_build_is_deterministic() -> None:
    rows = _rows(
        ("PCE", "0201", "Astronomical and Space Sciences"),
        ("MIC", "0101", "Pure Mathematics"),
        ("PCE", "0201", "Astronomical and Space Sciences"),
    )
    template = {"description": "{{CSV_FIELD_for_title}}"}
    assert _build(rows, leaf_template=template).to_dict() == _build(rows, leaf_template=template).to_dict()


def test_lookup_is_case_sensitive() -> None:
    tree = _build(_rows(("MIC", "0101", "Pure Mathematics"), ("MIC", "0101", "pure mathematics")))
    assert tree.leaf_count == 2


def test_lookup_tokens_use_the_builders_classification() -> None:
    custom = ClassificationTable(descriptions={"MIC": "Maths"}, ordinals={"MIC": 1})
    builder = TaxonomyBuilder(custom, group_code_col="cluster_abbrev")
    tree = builder.build(
        _rows(("MIC", "0101", "Pure Mathematics")),
        skip=skip_codes_of_length("for_code", None),
        group_key=lambda row: row.text("cluster_abbrev"),
        leaf_key=code_title_leaf_key("for_code", "for_title"),
        group_template={"description": "{{LOOKUP_CLUSTER_NAME}}"},
        root_name="ERA TEST",
    )
    (group,) = tree.children(tree.root)
    assert group.name == "MIC"
    assert group.attributes["description"] == "Maths"
