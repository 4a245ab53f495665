"""Source row record shared by the taxonomy builder and membership loader."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# In a single CSV column, multiple values are separated by this delimiter
VALUE_DELIMITER = "||"


@dataclass(frozen=True)
class SourceRow:
    """One CSV record: its 1-based line number in the file and its column values."""

    line_num: int
    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, column: str, default: str | None = None) -> str | None:
        return self.values.get(column, default)

    def text(self, column: str) -> str:
        """Stripped value of `column`, empty string when absent."""
        value = self.values.get(column)
        return "" if value is None else str(value).strip()

    @property
    def raw(self) -> str:
        """Approximation of the original line, used in error messages."""
        return ",".join("" if v is None else str(v) for v in self.values.values())


def split_multi_value(value: str | None, delimiter: str = VALUE_DELIMITER) -> list[str]:
    """Split a packed multi-value field, dropping empty fragments."""
    if value is None:
        return []
    return [part.strip() for part in str(value).split(delimiter) if part.strip()]
