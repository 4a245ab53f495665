import pytest

from domain.errors import UnknownClassificationError
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.templates import TemplateContext, render_template, substitute

CTX = TemplateContext(classification=ClassificationTable(), group_code_col="cluster_abbrev")


def test_csv_field_resolves_exactly() -> None:
    assert substitute("{{CSV_FIELD_title}}", {"title": "Physics"}, CTX) == "Physics"


def test_missing_csv_field_resolves_to_empty() -> None:
    assert substitute("[{{CSV_FIELD_nope}}]", {"title": "Physics"}, CTX) == "[]"


def test_cluster_name_lookup() -> None:
    row = {"cluster_abbrev": "MIC"}
    out = substitute("In {{LOOKUP_CLUSTER_NAME}}.", row, CTX)
    assert out == "In Cluster 6. Mathematical, Information and Computing Sciences."


def test_cluster_name_lookup_unknown_code_fails() -> None:
    with pytest.raises(UnknownClassificationError):
        substitute("{{LOOKUP_CLUSTER_NAME}}", {"cluster_abbrev": "XYZ"}, CTX)


def test_unknown_lookup_name_passes_through_consistently() -> None:
    text = "a {{LOOKUP_NOT_A_THING}} b"
    first = substitute(text, {"cluster_abbrev": "MIC"}, CTX)
    second = substitute(text, {"cluster_abbrev": "PCE"}, CTX)
    assert first == text
    assert second == text


def test_substitution_is_not_recursive() -> None:
    row = {"a": "{{CSV_FIELD_b}}", "b": "nested"}
    assert substitute("{{CSV_FIELD_a}}", row, CTX) == "{{CSV_FIELD_b}}"


def test_replacement_text_with_backslashes_is_literal() -> None:
    assert substitute("{{CSV_FIELD_p}}", {"p": r"C:\dir\1"}, CTX) == r"C:\dir\1"


def test_render_template_keeps_key_order_and_inputs() -> None:
    template = {"intro": "{{CSV_FIELD_t}}", "description": "fixed"}
    row = {"t": "Title"}
    out = render_template(template, row, CTX)
    assert list(out) == ["intro", "description"]
    assert out == {"intro": "Title", "description": "fixed"}
    assert template["intro"] == "{{CSV_FIELD_t}}"
