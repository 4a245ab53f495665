"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Configuration loading (YAML, environment)
- Dataset reading (CSV/Excel) and output serializers (XML, CSV)
- Handle lookups for report columns
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    MembershipConfig,
    StructureConfig,
    load_membership_config,
    load_structure_config,
)
from infrastructure.io import read_rows

__all__ = [
    "read_rows",
    "load_structure_config",
    "load_membership_config",
    "StructureConfig",
    "MembershipConfig",
]
