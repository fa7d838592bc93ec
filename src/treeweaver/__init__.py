"""treeweaver: editable document trees with structural edits and graph layout."""

from __future__ import annotations

from treeweaver.errors import MalformedTreeError, NoTreeError, RootDeletionError, TreeWeaverError
from treeweaver.export import serialize_outline, to_json, tree_from_json
from treeweaver.layout import LayoutConfig, layout_tree
from treeweaver.models import NODE_KINDS_BY_TEXT_TYPE, ROOT_KIND, TextNode, TextType
from treeweaver.tree import (
    can_indent,
    can_outdent,
    delete_node,
    find_node,
    indent_node,
    insert_child,
    iter_nodes,
    merge_children,
    normalize_children,
    outdent_node,
    remove_node,
    set_position,
    update_node,
    validate_and_normalize,
)
from treeweaver.viewport import Viewport, drag_node, screen_delta_to_model

__version__ = "0.1.0"

__all__ = [
    "LayoutConfig",
    "MalformedTreeError",
    "NODE_KINDS_BY_TEXT_TYPE",
    "NoTreeError",
    "ROOT_KIND",
    "RootDeletionError",
    "TextNode",
    "TextType",
    "TreeWeaverError",
    "Viewport",
    "can_indent",
    "can_outdent",
    "delete_node",
    "drag_node",
    "find_node",
    "indent_node",
    "insert_child",
    "iter_nodes",
    "layout_tree",
    "merge_children",
    "normalize_children",
    "outdent_node",
    "remove_node",
    "screen_delta_to_model",
    "serialize_outline",
    "set_position",
    "to_json",
    "tree_from_json",
    "update_node",
    "validate_and_normalize",
]
