"""
Exceptions raised while building taxonomies and membership tables.

Every error is terminal for a run. The CLI maps each category to its own exit code:
- InputShapeError: malformed or missing CSV columns (file name + line number),
  empty or unreadable input files, invalid config values
- ReferentialError: a code or handle with no entry in its lookup table
- InvariantError: duplicate items, collections, siblings or disallowed attributes
"""

from pathlib import Path
from typing import Any


class TaxonomyError(Exception):
    """Base class for all fatal build/merge errors."""

    exit_code: int = 1

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ---- Input-shape errors ----


class InputShapeError(TaxonomyError, ValueError):
    exit_code = 3


class MissingColumnError(InputShapeError):
    """A required column is absent from a CSV header."""

    def __init__(self, column: str, source: Path | str | None, available: list[str]):
        super().__init__(
            f"Required column '{column}' not found in '{source}'. Available columns: {available}",
            {"column": column, "source": str(source), "available": list(available)},
        )
        self.column = column
        self.source = source


class MissingFieldError(InputShapeError):
    """A mandatory field is empty in one CSV line."""

    def __init__(self, field: str, source: Path | str | None, line_num: int, raw: str):
        super().__init__(
            f"Mandatory field '{field}' is empty in file '{source}' in line:\n[Line {line_num}] {raw}",
            {"field": field, "source": str(source), "line_num": line_num, "raw": raw},
        )
        self.field = field
        self.source = source
        self.line_num = line_num
        self.raw = raw


class EmptyInputError(InputShapeError):
    """An input file has no header line."""

    def __init__(self, source: Path | str):
        super().__init__(f"File '{source}' is empty (no header line)", {"source": str(source)})
        self.source = source


class UnsupportedFormatError(InputShapeError):
    def __init__(self, source: Path | str, supported: tuple[str, ...]):
        suffix = Path(str(source)).suffix
        super().__init__(
            f"Unsupported file format: '{suffix}' ({source}). Supported formats: {', '.join(supported)}",
            {"source": str(source), "suffix": suffix},
        )
        self.source = source


class ConfigError(InputShapeError):
    """A config file is not valid YAML or holds a value of the wrong shape."""

    def __init__(self, source: Path | str, reason: str):
        super().__init__(f"Invalid config '{source}': {reason}", {"source": str(source), "reason": reason})
        self.source = source


# ---- Referential errors ----


class ReferentialError(TaxonomyError, KeyError):
    exit_code = 4

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class UnknownClassificationError(ReferentialError):
    """A classification code has no entry in the description table."""

    def __init__(self, code: str | None, line_num: int | None = None, raw: str | None = None):
        where = f"\n  [{line_num}] {raw}" if line_num is not None else (f"\n  {raw}" if raw else "")
        super().__init__(
            f"Lookup for cluster code '{code}' not found.{' See line:' if where else ''}{where}",
            {"code": code, "line_num": line_num, "raw": raw},
        )
        self.code = code
        self.line_num = line_num
        self.raw = raw


class UnknownHandleError(ReferentialError):
    """A handle could not be resolved to an item or collection record."""

    def __init__(self, handle: str, kind: str, matches: int = 0):
        super().__init__(
            f"{matches} {kind} record(s) found for handle {handle} (but expected 1)",
            {"handle": handle, "kind": kind, "matches": matches},
        )
        self.handle = handle
        self.kind = kind


# ---- Invariant errors ----


class InvariantError(TaxonomyError, ValueError):
    exit_code = 5


class DuplicateItemError(InvariantError):
    def __init__(self, item_id: str, source: Path | str | None):
        super().__init__(
            f"Item-handle '{item_id}' has been repeated in file '{source}'",
            {"item_id": item_id, "source": str(source)},
        )
        self.item_id = item_id
        self.source = source


class DuplicateCollectionError(InvariantError):
    def __init__(self, item_id: str, collection_ids: list[str]):
        super().__init__(
            f"Item {item_id} is mapped to the same collection more than once: {collection_ids}",
            {"item_id": item_id, "collection_ids": list(collection_ids)},
        )
        self.item_id = item_id
        self.collection_ids = list(collection_ids)


class InvalidAttributeError(InvariantError):
    def __init__(self, attribute: str, kind: str, node_name: str, allowed: tuple[str, ...]):
        super().__init__(
            f"Attribute <{attribute}> is not permitted as part of a {kind} (node '{node_name}'). "
            f"Allowed: {list(allowed)}",
            {"attribute": attribute, "kind": kind, "node_name": node_name},
        )
        self.attribute = attribute
        self.kind = kind
        self.node_name = node_name


class DuplicateSiblingError(InvariantError):
    def __init__(self, name: str, parent_name: str):
        super().__init__(
            f"Node '{name}' already exists under '{parent_name}'",
            {"name": name, "parent_name": parent_name},
        )
        self.name = name
        self.parent_name = parent_name
