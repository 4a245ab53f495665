"""Extra, human-oriented fields for membership reports (item rmid/title, collection names)."""

from typing import Protocol

from domain.membership.table import CollectionList
from domain.rows import VALUE_DELIMITER

EXTRA_OUT_COLUMNS = ("rmid", "item_name", "col_names")


class HandleResolver(Protocol):
    """Resolves opaque handles to the record details shown in debugging reports."""

    def item_info(self, handle: str) -> tuple[str, str]:
        """Return (rmid, title) for an item handle."""
        ...

    def collection_name(self, handle: str) -> str:
        """Return a display name for a collection handle."""
        ...


def extra_fields(
    resolver: HandleResolver,
    item_id: str,
    collections: CollectionList,
    delimiter: str = VALUE_DELIMITER,
) -> dict[str, str]:
    rmid, item_name = resolver.item_info(item_id)
    col_names = [resolver.collection_name(c) for c in collections]
    return {
        "rmid": rmid,
        "item_name": item_name,
        "col_names": delimiter.join(col_names),
    }
