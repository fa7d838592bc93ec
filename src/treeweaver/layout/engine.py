"""Indented-column tree layout.

Columns are fixed per depth and rows are handed out to leaves in depth-first order;
a parent is centred between its first and last child. Coordinates that are already
set are treated as fixed and never overwritten, so a node placed by drag keeps its
position through later edits and re-layouts. Auto-placed rows continue below fixed
nodes so new nodes do not land on top of them.

Placement recurses once per level. Trees reach the engine through normalization,
which rejects anything deeper than ``MAX_DEPTH``.
"""

from __future__ import annotations

from dataclasses import dataclass

from treeweaver.models import TextNode


@dataclass(frozen=True)
class LayoutConfig:
    """Layout spacing, in model units."""

    base_x: float = 50.0
    start_y: float = 50.0
    level_width: float = 280.0
    node_height: float = 100.0


class _Cursor:
    def __init__(self, y: float) -> None:
        self.y = y


def _place(node: TextNode, depth: int, cursor: _Cursor, config: LayoutConfig) -> tuple[TextNode, float]:
    x = node.x if node.x is not None else config.base_x + depth * config.level_width

    if node.is_leaf:
        if node.y is None:
            y = cursor.y
            cursor.y += config.node_height
        else:
            y = node.y
            cursor.y = max(cursor.y, y + config.node_height)
        return node.model_copy(update={"x": x, "y": y}), y

    placed = [_place(child, depth + 1, cursor, config) for child in node.children]
    first_y = placed[0][1]
    last_y = placed[-1][1]

    if node.y is None:
        y = (first_y + last_y) / 2
    else:
        y = node.y
        cursor.y = max(cursor.y, last_y + config.node_height)
    children = [child for child, _ in placed]
    return node.model_copy(update={"x": x, "y": y, "children": children}), y


def layout_tree(root: TextNode, config: LayoutConfig | None = None) -> TextNode:
    """Return a copy of ``root`` in which every node has ``x`` and ``y``.

    The input tree is left untouched.
    """

    config = config or LayoutConfig()
    placed, _ = _place(root, 0, _Cursor(config.start_y), config)
    return placed
