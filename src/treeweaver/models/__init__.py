"""Pydantic models used across the project."""

from __future__ import annotations

from treeweaver.models.edit_op import EditOp
from treeweaver.models.node import TextNode
from treeweaver.models.text_type import (
    NODE_KINDS_BY_TEXT_TYPE,
    ROOT_KIND,
    TextType,
    allowed_kinds,
    default_kind,
)

__all__ = [
    "EditOp",
    "NODE_KINDS_BY_TEXT_TYPE",
    "ROOT_KIND",
    "TextNode",
    "TextType",
    "allowed_kinds",
    "default_kind",
]
