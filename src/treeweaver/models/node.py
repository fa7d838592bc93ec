"""Document tree node model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TextNode(BaseModel):
    """A node of the document tree.

    Nodes are treated as immutable values: edit operations build new nodes with
    ``model_copy`` and never assign to an existing one. ``kind`` travels on the
    wire as ``type``. ``x``/``y`` are set once a node has been placed, either by
    layout or by a drag; unset coordinates are filled in by the next layout pass.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    kind: str = Field(alias="type", min_length=1)
    content: str

    children: list["TextNode"] = Field(default_factory=list)

    x: float | None = None
    y: float | None = None

    metadata: dict[str, Any] | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None

    def with_children(self, children: list[TextNode]) -> TextNode:
        """Return a copy of this node with a new children list."""

        return self.model_copy(update={"children": children})
