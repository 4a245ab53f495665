"""Parse classification configuration from YAML dict."""

from typing import Any

from domain.taxonomy.classification import ClassificationTable


def parse_classification_config(data: dict[str, Any]) -> ClassificationTable:
    """
    Parse pre-loaded YAML dict into a ClassificationTable.

    This is a pure function - it does NOT perform file I/O.
    The YAML loading happens in infrastructure.config.loader.

    Expected shape:
        clusters:
          PCE:
            description: "Cluster 1. Physical, Chemical and Earth Sciences"
            ordinal: 1
          ...

    An entry may also be a plain string (the description); its ordinal then
    follows its position in the mapping.

    Raises:
        ValueError: If required keys are missing or have wrong types
    """
    clusters = data.get("clusters")
    if clusters is None:
        raise ValueError("classification config missing required key: clusters")
    if not isinstance(clusters, dict) or not clusters:
        raise ValueError("clusters must be a non-empty mapping")

    descriptions: dict[str, str] = {}
    ordinals: dict[str, int] = {}
    for position, (code, entry) in enumerate(clusters.items(), start=1):
        code = str(code).strip()
        if isinstance(entry, str):
            descriptions[code] = entry.strip()
            ordinals[code] = position
            continue
        if not isinstance(entry, dict) or "description" not in entry:
            raise ValueError(f"cluster '{code}' must be a string or a mapping with a description")
        descriptions[code] = str(entry["description"]).strip()
        try:
            ordinals[code] = int(entry.get("ordinal", position))
        except (TypeError, ValueError) as e:
            raise ValueError(f"cluster '{code}' has a non-integer ordinal: {entry.get('ordinal')!r}") from e

    return ClassificationTable(descriptions=descriptions, ordinals=ordinals)
