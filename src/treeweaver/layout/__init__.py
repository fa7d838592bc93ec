"""Graph layout for document trees."""

from __future__ import annotations

from treeweaver.layout.engine import LayoutConfig, layout_tree

__all__ = ["LayoutConfig", "layout_tree"]
