"""Tests for outline and JSON export."""

from __future__ import annotations

import json

from treeweaver.export import serialize_outline, to_json, tree_from_json
from treeweaver.models import TextNode


def test_serialize_outline_depth_first(deep_tree: TextNode) -> None:
    text = serialize_outline(deep_tree)

    assert text == (
        "# **ROOT**: content of root\n"
        "  - **CLAIM**: content of A\n"
        "    - **CLAIM**: content of A1\n"
        "    - **CLAIM**: content of A2\n"
        "      - **CLAIM**: content of A2a\n"
        "  - **CLAIM**: content of B\n"
    )


def test_to_json_uses_type_and_drops_unset_fields(abc_tree: TextNode) -> None:
    data = json.loads(to_json(abc_tree))

    assert data["type"] == "ROOT"
    assert "kind" not in data
    assert "x" not in data and "metadata" not in data
    assert [c["id"] for c in data["children"]] == ["A", "B", "C"]


def test_tree_from_json_reads_back(deep_tree: TextNode) -> None:
    assert tree_from_json(to_json(deep_tree)) == deep_tree
