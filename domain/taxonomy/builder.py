"""Build a deduplicated group -> collection tree from classified CSV rows."""

import logging
from collections.abc import Callable, Iterable, Mapping

from domain.errors import UnknownClassificationError
from domain.rows import SourceRow
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.node import NodeKind, TaxonomyNode, TaxonomyTree
from domain.taxonomy.templates import TemplateContext, render_template

logger = logging.getLogger(__name__)

SkipFn = Callable[[SourceRow], bool]
KeyFn = Callable[[SourceRow], str]


# ---- Default pluggables ----


def skip_codes_of_length(code_col: str, length: int | None) -> SkipFn:
    """Skip rows whose code in `code_col` has exactly `length` characters (e.g. 2-digit FOR codes)."""

    def _skip(row: SourceRow) -> bool:
        if length is None:
            return False
        return len(row.text(code_col)) == length

    return _skip


def cluster_group_key(classification: ClassificationTable, code_col: str) -> KeyFn:
    """Group name is the full description of the row's cluster code."""

    def _key(row: SourceRow) -> str:
        code = row.text(code_col)
        if not classification.has(code):
            raise UnknownClassificationError(code, line_num=row.line_num, raw=row.raw)
        return classification.describe(code)

    return _key


def code_title_leaf_key(code_col: str, title_col: str) -> KeyFn:
    """Collection name is '<code> - <title>'."""

    def _key(row: SourceRow) -> str:
        return f"{row.text(code_col)} - {row.text(title_col)}"

    return _key


# ---- Builder ----


class TaxonomyBuilder:
    """
    Consumes rows in order and finds-or-creates one group under the root and
    one collection under that group per row. Attributes of a new node are
    rendered from the node kind's template against the row that created it.
    """

    def __init__(self, classification: ClassificationTable, group_code_col: str):
        self.ctx = TemplateContext(classification=classification, group_code_col=group_code_col)

    def build(
        self,
        rows: Iterable[SourceRow],
        skip: SkipFn,
        group_key: KeyFn,
        leaf_key: KeyFn,
        group_template: Mapping[str, str] | None = None,
        leaf_template: Mapping[str, str] | None = None,
        *,
        root_name: str,
        root_attributes: Mapping[str, str] | None = None,
    ) -> TaxonomyTree:
        """
        Build the tree. The caller owns the returned tree and its root.

        Raises:
            UnknownClassificationError: From group_key for an unknown code
            InvalidAttributeError: If a template names a disallowed attribute
        """
        tree = TaxonomyTree(root_name, root_attributes)
        group_template = dict(group_template or {})
        leaf_template = dict(leaf_template or {})

        seen = skipped = absorbed = 0
        for row in rows:
            seen += 1
            if skip(row):
                skipped += 1
                continue

            group = self._find_or_create(tree, tree.root, NodeKind.GROUP, group_key(row), group_template, row)
            before = len(tree)
            self._find_or_create(tree, group, NodeKind.LEAF, leaf_key(row), leaf_template, row)
            if len(tree) == before:
                absorbed += 1

        logger.info(
            "Built taxonomy '%s': rows=%d skipped=%d duplicates=%d groups=%d collections=%d",
            tree.root.name,
            seen,
            skipped,
            absorbed,
            tree.group_count,
            tree.leaf_count,
        )
        return tree

    def _find_or_create(
        self,
        tree: TaxonomyTree,
        parent: TaxonomyNode,
        kind: NodeKind,
        name: str,
        template: Mapping[str, str],
        row: SourceRow,
    ) -> TaxonomyNode:
        node = tree.find_child(parent, name)
        if node is not None:
            return node
        attributes = render_template(template, row.values, self.ctx)
        node = tree.add_child(parent, kind, name, attributes)
        logger.debug("[Line %d] Created %s '%s' under '%s'", row.line_num, kind.value, name, parent.name)
        return node
