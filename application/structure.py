"""Build the structure-builder XML from a discipline-matrix CSV."""

import logging
from pathlib import Path

from domain.rows import SourceRow
from domain.taxonomy.builder import (
    TaxonomyBuilder,
    cluster_group_key,
    code_title_leaf_key,
    skip_codes_of_length,
)
from domain.taxonomy.node import TaxonomyTree
from infrastructure.config.models import StructureConfig
from infrastructure.io import read_rows, structure_to_xml
from infrastructure.observability import source_context

logger = logging.getLogger(__name__)


def build_structure(cfg: StructureConfig, rows: list[SourceRow]) -> TaxonomyTree:
    """
    Build the group -> collection tree with the default pluggables:
    skip short codes, group by cluster description, name collections '<code> - <title>'.
    """
    cols = cfg.columns
    builder = TaxonomyBuilder(cfg.classification, group_code_col=cols.group_code_col)
    return builder.build(
        rows,
        skip=skip_codes_of_length(cols.leaf_code_col, cfg.skip_code_length),
        group_key=cluster_group_key(cfg.classification, cols.group_code_col),
        leaf_key=code_title_leaf_key(cols.leaf_code_col, cols.leaf_title_col),
        group_template=cfg.templates.group,
        leaf_template=cfg.templates.leaf,
        root_name=cfg.root_name,
        root_attributes=cfg.root_attributes,
    )


def run_structure(cfg: StructureConfig, csv_path: Path) -> tuple[TaxonomyTree, str]:
    """Read the CSV, build the tree and render it; nothing is written on failure."""
    cols = cfg.columns
    with source_context(csv_path):
        logger.info("Loading discipline matrix from %s...", csv_path)
        rows = read_rows(csv_path, required_columns=(cols.group_code_col, cols.leaf_code_col, cols.leaf_title_col))
        logger.info("Discipline matrix loaded: %d rows", len(rows))
        tree = build_structure(cfg, rows)
    log_structure_summary(cfg, tree)
    return tree, structure_to_xml(tree)


def log_structure_summary(cfg: StructureConfig, tree: TaxonomyTree) -> None:
    """INFO: one line per group in cluster ordinal order. DEBUG: the whole tree, indented."""
    classification = cfg.classification
    groups = {g.name: g for g in tree.children(tree.root)}

    logger.info("Top community: %s", tree.root.name)
    for code in classification.codes():
        group = groups.pop(classification.describe(code), None)
        if group is not None:
            logger.info("  [%d] %s: %d collection(s)", classification.ordinal(code), group.name, len(group.child_ids))
    # groups not named after a cluster (custom group_key)
    for group in groups.values():
        logger.info("  [-] %s: %d collection(s)", group.name, len(group.child_ids))

    for depth, node in tree.walk():
        logger.debug("%s%s (%s)", "  " * depth, node.name, node.kind.value)
