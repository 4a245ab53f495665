"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- rows: the SourceRow record read from CSV files
- taxonomy: classification lookups and the group -> collection tree builder
- membership: per-item collection lists and the cross-period merge
- errors: fatal error categories
"""

from domain.errors import InputShapeError, InvariantError, ReferentialError, TaxonomyError
from domain.rows import VALUE_DELIMITER, SourceRow

__all__ = [
    "SourceRow",
    "VALUE_DELIMITER",
    "TaxonomyError",
    "InputShapeError",
    "ReferentialError",
    "InvariantError",
]
