"""
Token substitution for node attribute templates.

Two token kinds are recognised:
- {{CSV_FIELD_<key>}}  -> value of column <key> in the row ("" if the column is absent)
- {{LOOKUP_<NAME>}}    -> value produced by the LookupName dispatch

Unrecognised LOOKUP names are left in the output verbatim. Substitution is a
single pass: replacement text is never scanned for further tokens.
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from domain.taxonomy.classification import ClassificationTable

logger = logging.getLogger(__name__)

CSV_FIELD_PREFIX = "CSV_FIELD_"
LOOKUP_PREFIX = "LOOKUP_"

_TOKEN_RE = re.compile(r"\{\{(" + CSV_FIELD_PREFIX + r"|" + LOOKUP_PREFIX + r")([A-Za-z0-9_]+)\}\}")


@dataclass(frozen=True)
class TemplateContext:
    """Data the LOOKUP_ tokens resolve against."""

    classification: ClassificationTable
    group_code_col: str


class LookupName(str, Enum):
    """Supported LOOKUP_ token names."""

    CLUSTER_NAME = "CLUSTER_NAME"


def _lookup_cluster_name(row: Mapping[str, str], ctx: TemplateContext) -> str:
    code = row.get(ctx.group_code_col)
    return ctx.classification.describe(None if code is None else str(code).strip())


LOOKUP_DISPATCH: dict[LookupName, Callable[[Mapping[str, str], TemplateContext], str]] = {
    LookupName.CLUSTER_NAME: _lookup_cluster_name,
}


def substitute(text: str, row: Mapping[str, str], ctx: TemplateContext) -> str:
    """
    Return a copy of `text` with every recognised token replaced.

    Args:
        text: Template text, possibly without any tokens
        row: Column name -> value mapping for the current CSV row
        ctx: Lookup tables for LOOKUP_ tokens

    Raises:
        UnknownClassificationError: If LOOKUP_CLUSTER_NAME meets an unknown code
    """

    def _replace(m: re.Match[str]) -> str:
        kind, key = m.group(1), m.group(2)
        if kind == CSV_FIELD_PREFIX:
            value = row.get(key)
            return "" if value is None else str(value)

        try:
            name = LookupName(key)
        except ValueError:
            logger.debug("Unknown lookup token %s left unchanged", m.group(0))
            return m.group(0)
        return LOOKUP_DISPATCH[name](row, ctx)

    return _TOKEN_RE.sub(_replace, text)


def render_template(
    template: Mapping[str, str],
    row: Mapping[str, str],
    ctx: TemplateContext,
) -> dict[str, str]:
    """Substitute every value of an attribute template, keeping key order."""
    return {attr: substitute(text, row, ctx) for attr, text in template.items()}
