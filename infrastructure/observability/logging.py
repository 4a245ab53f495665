"""
Logging setup with contextvars-based metadata injection.

Every record carries the run tag, the stage (structure / multicollections)
and the name of the input file being read. Console output goes to stderr so
that XML or CSV written to stdout stays clean; an optional rotating file
keeps the DEBUG trail (skipped rows, duplicate collection names, unknown
lookups).
"""

import contextvars
import hashlib
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

cv_run_id_full = contextvars.ContextVar("run_id_full", default="-")
cv_run_tag = contextvars.ContextVar("run_tag", default="-")
cv_stage = contextvars.ContextVar("stage", default="-")
cv_source = contextvars.ContextVar("source", default="-")

_CONSOLE_FMT = "%(asctime)s [%(levelname)s] r=%(run)s s=%(stage)s f=%(source)s | %(message)s"
_FILE_FMT = "%(asctime)s [%(levelname)s] %(name)s | r=%(run)s s=%(stage)s f=%(source)s | %(message)s"


def make_run_tag(run_id_full: str, length: int = 8) -> str:
    """Stable short tag derived from the full run_id (BLAKE2s)."""
    h = hashlib.blake2s(run_id_full.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Copy run / stage / source context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run = cv_run_tag.get()
        record.stage = cv_stage.get()
        # file name only; the full path is kept in get_log_context()
        source = cv_source.get()
        record.source = Path(source).name if source != "-" else "-"
        return True


def set_log_context(*, run_id_full: str | None = None, stage: str | None = None) -> None:
    if run_id_full is not None:
        cv_run_id_full.set(str(run_id_full))
        cv_run_tag.set(make_run_tag(str(run_id_full)))
    if stage is not None:
        cv_stage.set(str(stage))


@contextmanager
def source_context(source: str | Path) -> Iterator[None]:
    """Tag records emitted inside the block with the input file being processed."""
    token = cv_source.set(str(source))
    try:
        yield
    finally:
        cv_source.reset(token)


def get_log_context() -> dict[str, str]:
    return {
        "run_tag": cv_run_tag.get(),
        "run_id_full": cv_run_id_full.get(),
        "stage": cv_stage.get(),
        "source": cv_source.get(),
    }


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(ContextInjectFilter())
    return handler


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> None:
    """
    Install the stderr console handler and, when `log_file` is given, a
    rotating file handler. Safe to call more than once.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    root.addHandler(_handler(logging.StreamHandler(sys.stderr), console_level, _CONSOLE_FMT, "%H:%M:%S"))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        root.addHandler(_handler(fh, file_level, _FILE_FMT, "%Y-%m-%d %H:%M:%S"))

    logging.getLogger(__name__).debug(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        log_file if log_file is not None else "None",
    )
