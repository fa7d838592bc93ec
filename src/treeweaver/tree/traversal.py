"""Read-only traversal and lookup over a document tree.

No index is kept: lookups walk the tree. Trees are interactive-sized (tens to a few
hundred nodes), so a linear walk per call is fine.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from treeweaver.models import TextNode


@dataclass(frozen=True)
class Edge:
    """A parent-to-child connector segment in model coordinates."""

    parent_id: str
    child_id: str
    x1: float
    y1: float
    x2: float
    y2: float


def iter_with_depth(root: TextNode, depth: int = 0) -> Iterator[tuple[TextNode, int]]:
    """Yield ``(node, depth)`` depth-first, parent before children, children in order."""

    stack: list[tuple[TextNode, int]] = [(root, depth)]
    while stack:
        node, d = stack.pop()
        yield node, d
        for child in reversed(node.children):
            stack.append((child, d + 1))


def iter_nodes(root: TextNode) -> Iterator[TextNode]:
    for node, _ in iter_with_depth(root):
        yield node


def find_node(root: TextNode, node_id: str) -> TextNode | None:
    """Return the first node with ``node_id`` in depth-first order, or ``None``."""

    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def find_parent(root: TextNode, node_id: str) -> TextNode | None:
    """Return the parent of ``node_id``. ``None`` for the root and for unknown ids."""

    for node in iter_nodes(root):
        if any(child.id == node_id for child in node.children):
            return node
    return None


def node_ids(root: TextNode) -> list[str]:
    return [node.id for node in iter_nodes(root)]


def count_nodes(root: TextNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def has_unique_ids(root: TextNode) -> bool:
    ids = node_ids(root)
    return len(ids) == len(set(ids))


def collect_edges(root: TextNode, node_width: float = 200.0) -> list[Edge]:
    """Build connector segments for a laid-out tree.

    Each segment starts at the parent's right edge and ends at the child's
    anchor point. Pairs where either end has no coordinates are skipped.
    """

    edges: list[Edge] = []
    for node in iter_nodes(root):
        if node.x is None or node.y is None:
            continue
        for child in node.children:
            if child.x is None or child.y is None:
                continue
            edges.append(Edge(node.id, child.id, node.x + node_width, node.y, child.x, child.y))
    return edges
