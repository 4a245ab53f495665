"""I/O utilities: filesystem checks, dataset loading, serializers and handle lookups."""

from infrastructure.io.datasets import read_rows, read_table, symbolize_header
from infrastructure.io.fs import ensure_exists, write_output
from infrastructure.io.lookup import CsvHandleResolver
from infrastructure.io.writers import membership_to_csv, membership_to_frame, structure_to_xml

__all__ = [
    "ensure_exists",
    "write_output",
    "read_table",
    "read_rows",
    "symbolize_header",
    "structure_to_xml",
    "membership_to_csv",
    "membership_to_frame",
    "CsvHandleResolver",
]
