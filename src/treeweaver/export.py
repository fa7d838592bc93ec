"""Tree serialization: markdown outline and JSON wire format."""

from __future__ import annotations

import json
from typing import Any

from treeweaver.models import TextNode
from treeweaver.tree import iter_with_depth, validate_and_normalize


def serialize_outline(root: TextNode) -> str:
    """Render the tree as a markdown outline.

    One line per node, depth-first with children in order. The root is a heading;
    descendants are bullets indented two spaces per level.
    """

    lines: list[str] = []
    for node, depth in iter_with_depth(root):
        bullet = "# " if depth == 0 else "- "
        lines.append(f"{'  ' * depth}{bullet}**{node.kind}**: {node.content}\n")
    return "".join(lines)


def to_dict(root: TextNode) -> dict[str, Any]:
    return root.model_dump(mode="json", by_alias=True, exclude_none=True)


def to_json(root: TextNode, *, indent: int | None = 2) -> str:
    return json.dumps(to_dict(root), ensure_ascii=False, indent=indent)


def tree_from_json(text: str) -> TextNode:
    """Parse and normalize a JSON tree document."""

    return validate_and_normalize(json.loads(text))
