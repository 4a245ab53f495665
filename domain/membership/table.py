"""Per-item collection memberships for one reporting period (or a merge of several)."""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from domain.errors import DuplicateCollectionError, DuplicateItemError, MissingFieldError
from domain.rows import VALUE_DELIMITER, SourceRow, split_multi_value

if TYPE_CHECKING:
    from domain.membership.merge import MergeEngine

logger = logging.getLogger(__name__)

# Input columns (header names of the handle CSV, lower-cased)
ITEM_COL = "item_hdl"
OWNER_COL = "c_owner_hdl"
OTHERS_COL = "c_others_hdl"
MANDATORY_IN_COLUMNS = (ITEM_COL, OWNER_COL)
IN_COLUMNS = MANDATORY_IN_COLUMNS + (OTHERS_COL,)


@dataclass(frozen=True)
class CollectionList:
    """The owning collection plus any additional (mapped) collections, in order."""

    owner: str
    additional: tuple[str, ...] = ()

    @classmethod
    def from_sequence(cls, collection_ids: Sequence[str]) -> "CollectionList":
        if not collection_ids:
            raise ValueError("A collection list needs at least an owning collection")
        return cls(owner=collection_ids[0], additional=tuple(collection_ids[1:]))

    def as_list(self) -> list[str]:
        return [self.owner, *self.additional]

    def repeated(self) -> list[str]:
        """Collection ids that occur more than once, in first-repeat order."""
        seen: set[str] = set()
        repeats: list[str] = []
        for c in self.as_list():
            if c in seen and c not in repeats:
                repeats.append(c)
            seen.add(c)
        return repeats

    def __add__(self, other: "CollectionList") -> "CollectionList":
        # Left owner stays the owner
        return CollectionList(self.owner, self.additional + (other.owner,) + other.additional)

    def __len__(self) -> int:
        return 1 + len(self.additional)

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_list())


class MembershipTable:
    """
    Mapping from item id to its CollectionList. Built once (from CSV rows or
    as the result of a merge) and not modified afterwards.
    """

    def __init__(
        self,
        label: str | None = None,
        source: Path | str | None = None,
        entries: Mapping[str, CollectionList] | None = None,
    ):
        self.source = Path(source) if source is not None else None
        self.label = label or (self.source.name if self.source is not None else "unnamed")
        self._entries: dict[str, CollectionList] = dict(entries or {})

    # ---- Construction ----

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[SourceRow],
        label: str | None = None,
        source: Path | str | None = None,
        delimiter: str = VALUE_DELIMITER,
    ) -> "MembershipTable":
        """
        Load items and their collections from handle-CSV rows.

        Raises:
            MissingFieldError: If item_hdl or c_owner_hdl is empty
            DuplicateItemError: If an item id is repeated
            DuplicateCollectionError: If an item lists a collection twice
        """
        entries: dict[str, CollectionList] = {}
        for row in rows:
            for col in MANDATORY_IN_COLUMNS:
                if not row.text(col):
                    raise MissingFieldError(col, source, row.line_num, row.raw)

            item_id = row.text(ITEM_COL)
            if item_id in entries:
                raise DuplicateItemError(item_id, source)

            others = split_multi_value(row.get(OTHERS_COL), delimiter)
            entries[item_id] = CollectionList(owner=row.text(OWNER_COL), additional=tuple(others))

        table = cls(label=label, source=source, entries=entries)
        table.verify()
        logger.info("Loaded %d item(s) from %s", len(table), table.label)
        return table

    @classmethod
    def from_mapping(
        cls,
        collections_by_item: Mapping[str, Sequence[str] | CollectionList],
        label: str | None = None,
        *,
        verify: bool = True,
    ) -> "MembershipTable":
        entries = {
            item_id: cols if isinstance(cols, CollectionList) else CollectionList.from_sequence(list(cols))
            for item_id, cols in collections_by_item.items()
        }
        table = cls(label=label, entries=entries)
        if verify:
            table.verify()
        return table

    def verify(self) -> None:
        """Raise DuplicateCollectionError for the first item (by id) listing a collection twice."""
        for item_id, cols in self:
            if cols.repeated():
                raise DuplicateCollectionError(item_id, cols.as_list())

    # ---- Access ----

    def get(self, item_id: str) -> CollectionList | None:
        return self._entries.get(item_id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, CollectionList]]:
        """(item id, collections) pairs sorted by item id."""
        for item_id in sorted(self._entries):
            yield item_id, self._entries[item_id]

    @property
    def item_ids(self) -> list[str]:
        return sorted(self._entries)

    def as_dict(self) -> dict[str, list[str]]:
        return {item_id: cols.as_list() for item_id, cols in self}

    def repeated_collections(self) -> dict[str, list[str]]:
        """Items whose list repeats a collection id (possible only in merged tables)."""
        return {item_id: cols.repeated() for item_id, cols in self if cols.repeated()}

    # ---- Derived tables ----

    def merge(self, previous: "MembershipTable | None", engine: "MergeEngine | None" = None) -> "MembershipTable":
        """Merge this (target) table with the table of all previous periods."""
        from domain.membership.merge import MergeEngine

        return (engine or MergeEngine()).merge_tables(self, previous)

    def exclude(self, other: "MembershipTable") -> "MembershipTable":
        """Items in this table whose id is absent from `other`."""
        entries = {item_id: cols for item_id, cols in self if item_id not in other}
        return MembershipTable(label=f"ExcludeFrom({self.label},{other.label})", entries=entries)

    # ---- Representation ----

    def summary(self) -> str:
        sep = "\n  "
        elems = [f"{item_id}({len(cols)})" for item_id, cols in self]
        return f"{self.__class__.__name__} label: {self.label};  CSV file: {self.source}{sep}{sep.join(elems)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(label={self.label!r}, items={len(self)})"
