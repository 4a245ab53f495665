"""
Configuration management: models, loading, and validation.

Handles:
- StructureConfig: root community, CSV columns, attribute templates
- MembershipConfig: handle-CSV columns, multi-value delimiter, lookup export
- Classification lookup tables from YAML

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import (
    load_classification_config,
    load_membership_config,
    load_structure_config,
)
from infrastructure.config.models import (
    MembershipColumnsConfig,
    MembershipConfig,
    StructureConfig,
    TaxonomyColumnsConfig,
    TemplatesConfig,
)

__all__ = [
    # Main configs
    "StructureConfig",
    "MembershipConfig",
    # Sections
    "TaxonomyColumnsConfig",
    "TemplatesConfig",
    "MembershipColumnsConfig",
    # Loaders
    "load_structure_config",
    "load_membership_config",
    "load_classification_config",
]
