"""
Taxonomy construction: classification lookups, attribute templates and the
group -> collection tree builder.

All functions in this module are pure (no file I/O).
"""

from domain.taxonomy.builder import (
    TaxonomyBuilder,
    cluster_group_key,
    code_title_leaf_key,
    skip_codes_of_length,
)
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.loader import parse_classification_config
from domain.taxonomy.node import NodeKind, TaxonomyNode, TaxonomyTree
from domain.taxonomy.templates import LookupName, TemplateContext, substitute

__all__ = [
    "ClassificationTable",
    "parse_classification_config",
    "NodeKind",
    "TaxonomyNode",
    "TaxonomyTree",
    "TaxonomyBuilder",
    "skip_codes_of_length",
    "cluster_group_key",
    "code_title_leaf_key",
    "LookupName",
    "TemplateContext",
    "substitute",
]
