"""Create the mapping CSV that assigns target-period items to all of their collections."""

import logging
from dataclasses import dataclass
from pathlib import Path

from domain.membership.resolver import HandleResolver
from domain.membership.table import MANDATORY_IN_COLUMNS, MembershipTable
from infrastructure.config.models import MembershipConfig
from infrastructure.io import CsvHandleResolver, membership_to_csv, read_rows
from infrastructure.observability import source_context

logger = logging.getLogger(__name__)


@dataclass
class MultiCollectionsResult:
    target: MembershipTable
    previous: MembershipTable | None
    merged: MembershipTable
    exclusive: MembershipTable


def load_membership_table(path: Path, cfg: MembershipConfig) -> MembershipTable:
    with source_context(path):
        rows = read_rows(path, required_columns=MANDATORY_IN_COLUMNS, renames=cfg.columns.renames())
        return MembershipTable.from_rows(rows, source=path, delimiter=cfg.value_delimiter)


def run_multicollections(
    cfg: MembershipConfig,
    target_csv: Path,
    previous_csv: Path | None,
) -> MultiCollectionsResult:
    """
    Load the target (and optional previous) period tables and merge them.

    The exclusive table holds the target items that stay in a single
    collection (the complement of the merge).
    """
    logger.info("Target reporting-year CSV file:    %s", target_csv)
    logger.info("Previous reporting-years CSV file: %s", previous_csv if previous_csv else "(None)")

    target = load_membership_table(target_csv, cfg)
    previous = load_membership_table(previous_csv, cfg) if previous_csv is not None else None

    merged = target.merge(previous)
    exclusive = target.exclude(merged)
    logger.debug("%s", merged.summary())
    logger.info(
        "Items needing multi-collection mapping: %d; single-collection items: %d",
        len(merged),
        len(exclusive),
    )
    return MultiCollectionsResult(target=target, previous=previous, merged=merged, exclusive=exclusive)


def make_resolver(cfg: MembershipConfig, lookup_csv: Path | None = None) -> HandleResolver | None:
    path = lookup_csv or cfg.lookup_csv
    return CsvHandleResolver(path) if path is not None else None


def render_mapping_csv(
    table: MembershipTable,
    cfg: MembershipConfig,
    resolver: HandleResolver | None = None,
) -> str:
    return membership_to_csv(table, resolver=resolver, delimiter=cfg.value_delimiter)
