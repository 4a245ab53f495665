"""Taxonomy tree stored as an arena of nodes addressed by index."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from domain.errors import DuplicateSiblingError, InvalidAttributeError, InvariantError


class NodeKind(str, Enum):
    """Node kinds and the optional text attributes each may carry ('name' is implicit)."""

    GROUP = "community"
    LEAF = "collection"

    @property
    def allowed_attributes(self) -> tuple[str, ...]:
        if self is NodeKind.GROUP:
            return ("description", "intro", "copyright", "sidebar")
        return ("description", "intro", "copyright", "sidebar", "license", "provenance")


def check_attributes(kind: NodeKind, name: str, attributes: Mapping[str, str]) -> None:
    """Raise InvalidAttributeError for the first key outside the kind's allowed set."""
    allowed = kind.allowed_attributes
    for key in attributes:
        if key not in allowed:
            raise InvalidAttributeError(key, kind.value, name, allowed)


@dataclass
class TaxonomyNode:
    index: int
    kind: NodeKind
    name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    child_ids: list[int] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def __str__(self) -> str:
        return self.name


class TaxonomyTree:
    """
    Owns every node. The root (index 0) is a group created with the tree.

    Lookups by (parent, name) go through an index so that finding an existing
    child does not scan the sibling list.
    """

    ROOT = 0

    def __init__(self, root_name: str, root_attributes: Mapping[str, str] | None = None):
        self._nodes: list[TaxonomyNode] = []
        self._by_parent_name: dict[tuple[int, str], int] = {}
        self._new_node(NodeKind.GROUP, root_name, root_attributes or {})

    def _new_node(self, kind: NodeKind, name: str, attributes: Mapping[str, str]) -> TaxonomyNode:
        check_attributes(kind, name, attributes)
        node = TaxonomyNode(
            index=len(self._nodes),
            kind=kind,
            name=name,
            attributes=MappingProxyType(dict(attributes)),
        )
        self._nodes.append(node)
        return node

    @property
    def root(self) -> TaxonomyNode:
        return self._nodes[self.ROOT]

    def children(self, node: TaxonomyNode) -> list[TaxonomyNode]:
        return [self._nodes[i] for i in node.child_ids]

    def find_child(self, parent: TaxonomyNode, name: str) -> TaxonomyNode | None:
        """Child of `parent` with exactly this name (case-sensitive), or None."""
        index = self._by_parent_name.get((parent.index, name))
        return None if index is None else self._nodes[index]

    def add_child(
        self,
        parent: TaxonomyNode,
        kind: NodeKind,
        name: str,
        attributes: Mapping[str, str] | None = None,
    ) -> TaxonomyNode:
        """Append a new child to the end of `parent`'s children."""
        if parent.is_leaf:
            raise InvariantError(f"Collection '{parent.name}' cannot contain '{name}'")
        if (parent.index, name) in self._by_parent_name:
            raise DuplicateSiblingError(name, parent.name)

        child = self._new_node(kind, name, attributes or {})
        parent.child_ids.append(child.index)
        self._by_parent_name[(parent.index, name)] = child.index
        return child

    def walk(self, start: TaxonomyNode | None = None) -> Iterator[tuple[int, TaxonomyNode]]:
        """Depth-first, pre-order (depth, node) pairs."""
        stack = [(0, start or self.root)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, c) for c in reversed(self.children(node)))

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def group_count(self) -> int:
        """Groups below the root."""
        return sum(1 for n in self._nodes[1:] if n.kind is NodeKind.GROUP)

    @property
    def leaf_count(self) -> int:
        return sum(1 for n in self._nodes if n.kind is NodeKind.LEAF)

    def to_dict(self, node: TaxonomyNode | None = None) -> dict[str, Any]:
        """Recursive name / attributes / children view used by serializers and tests."""
        node = node or self.root
        out: dict[str, Any] = {"kind": node.kind.value, "name": node.name, "attributes": dict(node.attributes)}
        if not node.is_leaf:
            out["children"] = [self.to_dict(c) for c in self.children(node)]
        return out
