from pathlib import Path

import pytest
from pydantic import ValidationError

from domain.errors import ConfigError
from domain.taxonomy.loader import parse_classification_config
from infrastructure.config.loader import load_membership_config, load_structure_config
from infrastructure.config.models import MembershipColumnsConfig, StructureConfig, TemplatesConfig


def test_template_with_disallowed_attribute_is_rejected() -> None:
    with pytest.raises(ValidationError):
        TemplatesConfig(group={"provenance": "x"})


def test_collection_template_accepts_license() -> None:
    cfg = TemplatesConfig(leaf={"license": "{{CSV_FIELD_for_title}}"})
    assert cfg.leaf == {"license": "{{CSV_FIELD_for_title}}"}


def test_structure_config_defaults() -> None:
    cfg = StructureConfig(root_name="ERA 2012")
    assert cfg.columns.group_code_col == "cluster_abbrev"
    assert cfg.skip_code_length == 2
    assert cfg.classification.describe("EC") == "Cluster 5. Economics and Commerce"


def test_structure_config_rejects_blank_root_name() -> None:
    with pytest.raises(ValidationError):
        StructureConfig(root_name="   ")


def test_column_names_are_normalized() -> None:
    cfg = StructureConfig(root_name="x", columns={"leaf_title_col": " FOR_Title "})
    assert cfg.columns.leaf_title_col == "for_title"


def test_membership_column_renames_only_differences() -> None:
    cols = MembershipColumnsConfig(item_col="Item_Handle")
    assert cols.renames() == {"item_handle": "item_hdl"}


def test_configured_headers_are_symbolized_like_file_headers() -> None:
    cols = MembershipColumnsConfig(item_col="Item Handle", owner_col="Owner (Hdl)")
    assert cols.renames() == {"item_handle": "item_hdl", "owner_hdl": "c_owner_hdl"}
    cfg = StructureConfig(root_name="x", columns={"leaf_title_col": "FOR Title"})
    assert cfg.columns.leaf_title_col == "for_title"


def test_parse_classification_config_accepts_strings_and_mappings() -> None:
    table = parse_classification_config(
        {"clusters": {"AA": "First", "BB": {"description": "Second", "ordinal": 7}}}
    )
    assert table.describe("AA") == "First"
    assert table.ordinal("AA") == 1
    assert table.ordinal("BB") == 7
    assert table.ordinal("ZZ") == 3
    assert table.codes() == ["AA", "BB"]


def test_parse_classification_config_requires_clusters() -> None:
    with pytest.raises(ValueError):
        parse_classification_config({})


def test_load_structure_config_resolves_classification_next_to_file(tmp_path: Path) -> None:
    (tmp_path / "clusters.yaml").write_text("clusters:\n  XX: Cluster X\n", encoding="utf-8")
    cfg_path = tmp_path / "structure.yaml"
    cfg_path.write_text(
        "root_name: Top\n"
        "classification_file: clusters.yaml\n"
        "templates:\n"
        "  collection:\n"
        "    intro: '{{CSV_FIELD_for_title}}'\n",
        encoding="utf-8",
    )

    cfg = load_structure_config(cfg_path)

    assert cfg.root_name == "Top"
    assert cfg.classification.descriptions == {"XX": "Cluster X"}
    assert cfg.templates.leaf == {"intro": "{{CSV_FIELD_for_title}}"}


def test_load_structure_config_requires_root_name(tmp_path: Path) -> None:
    cfg_path = tmp_path / "structure.yaml"
    cfg_path.write_text("skip_code_length: 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_structure_config(cfg_path)


def test_invalid_config_value_is_a_config_error(tmp_path: Path) -> None:
    cfg_path = tmp_path / "structure.yaml"
    cfg_path.write_text("root_name: Top\nskip_code_length: -1\n", encoding="utf-8")
    with pytest.raises(ConfigError) as exc:
        load_structure_config(cfg_path)
    assert exc.value.exit_code == 3


def test_malformed_yaml_is_a_config_error(tmp_path: Path) -> None:
    cfg_path = tmp_path / "membership.yaml"
    cfg_path.write_text("columns: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_membership_config(cfg_path)


def test_missing_membership_config_gives_defaults(tmp_path: Path) -> None:
    cfg = load_membership_config(tmp_path / "absent.yaml")
    assert cfg.value_delimiter == "||"
    assert cfg.lookup_csv is None
