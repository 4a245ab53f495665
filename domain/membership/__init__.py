"""
Collection memberships per item and the cross-period merge.

All functions in this module are pure (no file I/O).
"""

from domain.membership.merge import MergeEngine
from domain.membership.resolver import EXTRA_OUT_COLUMNS, HandleResolver, extra_fields
from domain.membership.table import (
    IN_COLUMNS,
    ITEM_COL,
    MANDATORY_IN_COLUMNS,
    OTHERS_COL,
    OWNER_COL,
    CollectionList,
    MembershipTable,
)

__all__ = [
    "MembershipTable",
    "CollectionList",
    "MergeEngine",
    "HandleResolver",
    "extra_fields",
    "EXTRA_OUT_COLUMNS",
    "ITEM_COL",
    "OWNER_COL",
    "OTHERS_COL",
    "MANDATORY_IN_COLUMNS",
    "IN_COLUMNS",
]
