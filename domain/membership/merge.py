"""
Select target-period items that need a multi-collection mapping and merge their
collection lists with those of the previous period(s).

An item in the target table T is selected when
  - T[i] holds more than one collection, or
  - T[i] holds exactly one collection and the previous table P lists the item.

A selected item's collections are P[i] followed by T[i]. Both tables are
expected to list the owning collection first, and P must represent the older
periods, so the original owner stays first. Collections present in both
periods are not deduplicated.
"""

import logging

from domain.membership.table import CollectionList, MembershipTable

logger = logging.getLogger(__name__)


class MergeEngine:
    """Pure, single-pass transformation over two fully loaded tables."""

    def select_items(self, target: MembershipTable, previous: MembershipTable | None) -> list[str]:
        selected: list[str] = []
        for item_id, cols in target:
            if len(cols) > 1:
                selected.append(item_id)
            elif previous is not None and item_id in previous:
                selected.append(item_id)
        return selected

    def merged_collections(
        self,
        item_id: str,
        target: MembershipTable,
        previous: MembershipTable | None,
    ) -> CollectionList:
        target_cols = target.get(item_id)
        if target_cols is None:
            raise KeyError(f"Item {item_id} is not in target table {target.label}")
        prev_cols = previous.get(item_id) if previous is not None else None
        return target_cols if prev_cols is None else prev_cols + target_cols

    def merge_tables(self, target: MembershipTable, previous: MembershipTable | None) -> MembershipTable:
        selected = self.select_items(target, previous)
        merged = {item_id: self.merged_collections(item_id, target, previous) for item_id in selected}

        label = f"Merged({target.label},{previous.label if previous is not None else 'nil'})"
        result = MembershipTable.from_mapping(merged, label=label, verify=False)

        logger.info(
            "Merged %s: %d of %d target item(s) need multi-collection mapping",
            label,
            len(result),
            len(target),
        )
        repeated = result.repeated_collections()
        if repeated:
            logger.warning(
                "%d merged item(s) list the same collection in more than one period: %s",
                len(repeated),
                ", ".join(sorted(repeated)),
            )
        return result
