import logging

import pytest

from application.structure import log_structure_summary
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.node import NodeKind, TaxonomyTree
from infrastructure.config.models import StructureConfig


def _config() -> StructureConfig:
    classification = ClassificationTable(
        descriptions={"AA": "Cluster A", "BB": "Cluster B"},
        ordinals={"AA": 2, "BB": 1},
    )
    return StructureConfig(root_name="Top", classification=classification)


def test_summary_lists_groups_in_ordinal_order(caplog: pytest.LogCaptureFixture) -> None:
    tree = TaxonomyTree("Top")
    a = tree.add_child(tree.root, NodeKind.GROUP, "Cluster A")
    tree.add_child(a, NodeKind.LEAF, "0101 - One")
    tree.add_child(tree.root, NodeKind.GROUP, "Cluster B")
    tree.add_child(tree.root, NodeKind.GROUP, "Custom")

    with caplog.at_level(logging.INFO, logger="application.structure"):
        log_structure_summary(_config(), tree)

    lines = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert lines == [
        "Top community: Top",
        "  [1] Cluster B: 0 collection(s)",
        "  [2] Cluster A: 1 collection(s)",
        "  [-] Custom: 0 collection(s)",
    ]


def test_summary_dumps_tree_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    tree = TaxonomyTree("Top")
    a = tree.add_child(tree.root, NodeKind.GROUP, "Cluster A")
    tree.add_child(a, NodeKind.LEAF, "0101 - One")

    with caplog.at_level(logging.DEBUG, logger="application.structure"):
        log_structure_summary(_config(), tree)

    debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert debug == ["Top (community)", "  Cluster A (community)", "    0101 - One (collection)"]
