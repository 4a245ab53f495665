"""Dataset loading utilities."""

import logging
import re
from pathlib import Path

import pandas as pd

from domain.errors import EmptyInputError, MissingColumnError, UnsupportedFormatError
from domain.rows import SourceRow

logger = logging.getLogger(__name__)

# The header occupies line 1, so data row i (0-based) sits on line i + 2
_FIRST_DATA_LINE = 2

CSV_SUFFIXES = (".csv",)
EXCEL_SUFFIXES = (".xlsx", ".xls")


def symbolize_header(header: object) -> str:
    """'Item Hdl ' -> 'item_hdl': strip, lower-case, spaces to underscores, drop punctuation."""
    h = str(header).strip().lower()
    h = re.sub(r"\s+", "_", h)
    return re.sub(r"[^\w]+", "", h)


def _read_frame(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix in EXCEL_SUFFIXES:
            return pd.read_excel(path, dtype=str)
        if suffix in CSV_SUFFIXES:
            # index_col=False keeps columns positional when rows carry a trailing comma
            return pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                index_col=False,
                encoding="utf-8",
            )
    except pd.errors.EmptyDataError as e:
        raise EmptyInputError(path) from e
    raise UnsupportedFormatError(path, CSV_SUFFIXES + EXCEL_SUFFIXES)


def read_table(path: Path) -> pd.DataFrame:
    """
    Read tabular data file (Excel or CSV) based on file extension, every cell as a string.

    Supported formats:
    - Excel: .xlsx, .xls
    - CSV: .csv

    Blank lines are kept as empty rows so that row positions map onto file
    line numbers; callers drop them.

    Raises:
        EmptyInputError: If the file has no header line
        UnsupportedFormatError: If file format is not supported
        FileNotFoundError: If file does not exist
    """
    return _read_frame(path).fillna("")


def _blank_positions(path: Path, df: pd.DataFrame) -> set[int]:
    """
    Data-row positions of physically empty lines.

    A line of bare delimiters (',,') is not blank: it is a row whose fields
    are all empty and must reach the mandatory-field checks.
    """
    if path.suffix.lower() in CSV_SUFFIXES:
        data_lines = path.read_text(encoding="utf-8").splitlines()[1:]
        return {pos for pos, line in enumerate(data_lines) if not line}
    return {pos for pos, blank in enumerate(df.isna().all(axis=1)) if blank}


def read_rows(
    path: Path,
    required_columns: tuple[str, ...] | list[str] = (),
    renames: dict[str, str] | None = None,
) -> list[SourceRow]:
    """
    Read a CSV/Excel file into SourceRow records with 1-based line numbers.

    Header names are symbolized (see `symbolize_header`) and then renamed via
    `renames`. Empty lines are skipped; rows whose fields are all empty are kept.

    Raises:
        MissingColumnError: If a required column is not in the header
        EmptyInputError: If the file has no header line
    """
    raw = _read_frame(path)
    blank = _blank_positions(path, raw)
    df = raw.fillna("")
    df.columns = [symbolize_header(c) for c in df.columns]
    if renames:
        df = df.rename(columns=renames)

    for col in required_columns:
        if col not in df.columns:
            raise MissingColumnError(col, path, list(df.columns))

    rows: list[SourceRow] = []
    for pos, record in enumerate(df.to_dict(orient="records")):
        if pos in blank:
            continue
        values = {str(k): str(v) for k, v in record.items()}
        rows.append(SourceRow(line_num=pos + _FIRST_DATA_LINE, values=values))

    logger.debug(
        "Read %d row(s) from %s (blank lines=%d, columns=%s)", len(rows), path, len(blank), list(df.columns)
    )
    return rows
