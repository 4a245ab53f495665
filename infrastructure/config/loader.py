"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from domain.errors import ConfigError
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.loader import parse_classification_config
from infrastructure.config.models import (
    MembershipColumnsConfig,
    MembershipConfig,
    StructureConfig,
    TaxonomyColumnsConfig,
    TemplatesConfig,
)
from infrastructure.constants import CLASSIFICATION_FILE


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(path, f"not valid YAML ({e})") from e

    if not isinstance(data, dict):
        raise ConfigError(path, f"expected a YAML mapping, got {type(data).__name__}")

    return data


def load_classification_config(path: Path) -> ClassificationTable:
    """
    Load the classification lookup tables from YAML.

    This function handles file I/O, then delegates parsing to domain layer.
    """
    data = _load_yaml(path)
    try:
        return parse_classification_config(data)
    except ValueError as e:
        raise ConfigError(path, str(e)) from e


def _resolve(base_dir: Path, value: Any) -> Path:
    p = Path(str(value))
    return p if p.is_absolute() or p.exists() else base_dir / p


def load_structure_config(path: Path) -> StructureConfig:
    """
    Load structure.yaml and construct a fully-resolved StructureConfig.

    Relative classification_file paths are tried as given first, then
    relative to the directory holding structure.yaml. When no
    classification_file is given and the default file does not exist, the
    built-in ERA cluster table is used.

    Raises:
        ConfigError: If a key is missing or a value has the wrong shape
    """
    data = _load_yaml(path)

    if "root_name" not in data or not str(data.get("root_name") or "").strip():
        raise ConfigError(path, "missing required key: root_name")

    templates_raw = data.get("templates") or {}
    if not isinstance(templates_raw, dict):
        raise ConfigError(path, "templates must be a mapping")

    if data.get("classification_file"):
        classification_file = _resolve(path.parent, data["classification_file"])
        classification = load_classification_config(classification_file)
    else:
        classification_file = CLASSIFICATION_FILE
        classification = (
            load_classification_config(classification_file)
            if classification_file.exists()
            else ClassificationTable()
        )

    try:
        return StructureConfig(
            root_name=str(data["root_name"]).strip(),
            root_attributes=dict(data.get("root_attributes") or {}),
            columns=TaxonomyColumnsConfig(**(data.get("columns") or {})),
            skip_code_length=data.get("skip_code_length", 2),
            templates=TemplatesConfig(
                group=dict(templates_raw.get("group") or {}),
                leaf=dict(templates_raw.get("collection") or templates_raw.get("leaf") or {}),
            ),
            classification_file=classification_file,
            classification=classification,
        )
    except (ValueError, TypeError) as e:
        raise ConfigError(path, str(e)) from e


def load_membership_config(path: Path | None) -> MembershipConfig:
    """Load membership.yaml; a missing path yields the defaults."""
    if path is None or not path.exists():
        return MembershipConfig()

    data = _load_yaml(path)
    lookup_csv = data.get("lookup_csv")
    try:
        return MembershipConfig(
            columns=MembershipColumnsConfig(**(data.get("columns") or {})),
            value_delimiter=str(data.get("value_delimiter", MembershipConfig().value_delimiter)),
            lookup_csv=_resolve(path.parent, lookup_csv) if lookup_csv else None,
        )
    except (ValueError, TypeError) as e:
        raise ConfigError(path, str(e)) from e
