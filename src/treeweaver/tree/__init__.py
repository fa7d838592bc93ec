"""Tree traversal, normalization and structural edits."""

from __future__ import annotations

from treeweaver.tree.edits import (
    can_indent,
    can_outdent,
    delete_node,
    indent_node,
    insert_child,
    merge_children,
    outdent_node,
    remove_node,
    set_position,
    update_node,
)
from treeweaver.tree.normalize import normalize_children, validate_and_normalize
from treeweaver.tree.traversal import (
    Edge,
    collect_edges,
    count_nodes,
    find_node,
    find_parent,
    has_unique_ids,
    iter_nodes,
    iter_with_depth,
    node_ids,
)

__all__ = [
    "Edge",
    "can_indent",
    "can_outdent",
    "collect_edges",
    "count_nodes",
    "delete_node",
    "find_node",
    "find_parent",
    "has_unique_ids",
    "indent_node",
    "insert_child",
    "iter_nodes",
    "iter_with_depth",
    "merge_children",
    "node_ids",
    "normalize_children",
    "outdent_node",
    "remove_node",
    "set_position",
    "update_node",
    "validate_and_normalize",
]
