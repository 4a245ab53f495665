"""
Handle lookups for the extra (debugging) columns of the mapping CSV.

Resolves handles from a local export with the columns:
    handle,kind,name,rmid,parent_name
where kind is 'item' or 'collection'. For a collection, parent_name is the
name of the community two levels up (the reporting-year community), which
tells apart same-named collections from different years.
"""

import logging
from pathlib import Path

from domain.errors import MissingColumnError, UnknownHandleError
from infrastructure.io.datasets import read_table, symbolize_header

logger = logging.getLogger(__name__)

LOOKUP_COLUMNS = ("handle", "kind", "name", "rmid", "parent_name")
ITEM_KIND = "item"
COLLECTION_KIND = "collection"


class CsvHandleResolver:
    """Resolves item and collection handles; results are cached per handle on first access."""

    def __init__(self, path: Path):
        self.path = path
        df = read_table(path)
        df.columns = [symbolize_header(c) for c in df.columns]
        for col in ("handle", "kind", "name"):
            if col not in df.columns:
                raise MissingColumnError(col, path, list(df.columns))
        for col in ("rmid", "parent_name"):
            if col not in df.columns:
                df[col] = ""

        df["kind"] = df["kind"].str.strip().str.lower()
        df["handle"] = df["handle"].str.strip()
        self._df = df
        self._item_cache: dict[str, tuple[str, str]] = {}
        self._collection_cache: dict[str, str] = {}
        logger.info("Handle lookup loaded from %s (%d records)", path, len(df))

    def _lookup(self, handle: str, kind: str) -> dict[str, str]:
        matches = self._df[(self._df["handle"] == handle) & (self._df["kind"] == kind)]
        if len(matches) != 1:
            raise UnknownHandleError(handle, kind, len(matches))
        return matches.iloc[0].to_dict()

    def item_info(self, handle: str) -> tuple[str, str]:
        if handle not in self._item_cache:
            rec = self._lookup(handle, ITEM_KIND)
            self._item_cache[handle] = (str(rec.get("rmid", "")), str(rec.get("name", "")))
        return self._item_cache[handle]

    def collection_name(self, handle: str) -> str:
        if handle not in self._collection_cache:
            rec = self._lookup(handle, COLLECTION_KIND)
            self._collection_cache[handle] = f"{rec.get('name', '')} {{{rec.get('parent_name', '')}}}"
        return self._collection_cache[handle]
