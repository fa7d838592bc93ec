"""Analysis session: the single owner of the current tree value.

The session applies one edit at a time and stores the result as the new current
tree. Structural edits are followed by a layout pass so new nodes get coordinates
while already placed nodes keep theirs. Content updates and drags are stored as-is.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from treeweaver.errors import NoTreeError, RootDeletionError
from treeweaver.layout import LayoutConfig, layout_tree
from treeweaver.logging import get_logger, session_context
from treeweaver.models import TextNode, TextType, default_kind
from treeweaver.tree import (
    delete_node,
    find_node,
    indent_node,
    insert_child,
    merge_children,
    node_ids,
    normalize_children,
    outdent_node,
    set_position,
    update_node,
    validate_and_normalize,
)
from treeweaver.utils.ids import IdFactory
from treeweaver.viewport import drag_node

logger = get_logger(__name__)


@dataclass
class AnalysisSession:
    text_type: TextType = TextType.GENERAL
    layout_config: LayoutConfig = field(default_factory=LayoutConfig)
    root: TextNode | None = None
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def __post_init__(self) -> None:
        self._new_ids = IdFactory("new")
        self._gen_ids = IdFactory("gen")

    def _require_root(self) -> TextNode:
        if self.root is None:
            raise NoTreeError("no tree has been adopted in this session")
        return self.root

    def _commit(self, new_root: TextNode, *, relayout: bool) -> TextNode:
        if relayout:
            new_root = layout_tree(new_root, self.layout_config)
        self.root = new_root
        return new_root

    def adopt_tree(self, raw: Any) -> TextNode:
        """Replace the current tree with a normalized, laid-out external tree.

        Raises:
            MalformedTreeError: The payload root is malformed; the current tree is kept.
        """

        with session_context(session_id=self.session_id, op="adopt"):
            root = validate_and_normalize(raw, id_factory=self._gen_ids)
            logger.info("Adopted tree with %d nodes", len(node_ids(root)))
            return self._commit(root, relayout=True)

    def adopt_breakdown(self, node_id: str, raw_children: Any) -> int:
        """Merge a breakdown result under ``node_id``.

        Returns:
            Number of children merged. Zero when the target is gone or nothing valid
            arrived.

        Raises:
            MalformedTreeError: A child nests too deep; the current tree is kept.
        """

        root = self._require_root()
        with session_context(session_id=self.session_id, op="breakdown"):
            if find_node(root, node_id) is None:
                logger.info("Breakdown target %s no longer exists", node_id)
                return 0
            children = normalize_children(
                raw_children,
                existing_ids=node_ids(root),
                id_factory=self._gen_ids,
            )
            self._commit(merge_children(root, node_id, children), relayout=True)
            logger.info("Merged %d children under %s", len(children), node_id)
            return len(children)

    def add_child(self, parent_id: str, content: str = "New Node", kind: str | None = None) -> TextNode:
        root = self._require_root()
        with session_context(session_id=self.session_id, op="add"):
            new_node = TextNode(
                id=self._new_ids.next(node_ids(root)),
                kind=kind or default_kind(self.text_type),
                content=content,
            )
            return self._commit(insert_child(root, parent_id, new_node), relayout=True)

    def update(self, node_id: str, content: str, kind: str) -> TextNode:
        root = self._require_root()
        with session_context(session_id=self.session_id, op="update"):
            return self._commit(update_node(root, node_id, content, kind), relayout=False)

    def move(self, node_id: str, x: float, y: float) -> TextNode:
        root = self._require_root()
        with session_context(session_id=self.session_id, op="move"):
            return self._commit(set_position(root, node_id, x, y), relayout=False)

    def drag(self, node_id: str, dx: float, dy: float, scale: float) -> TextNode:
        root = self._require_root()
        with session_context(session_id=self.session_id, op="drag"):
            return self._commit(drag_node(root, node_id, dx, dy, scale), relayout=False)

    def delete(self, node_id: str) -> TextNode:
        """Delete a node. Deleting the root is refused and leaves the tree as is."""

        root = self._require_root()
        with session_context(session_id=self.session_id, op="delete"):
            try:
                new_root = delete_node(root, node_id)
            except RootDeletionError:
                logger.warning("Refusing to delete root %s", node_id)
                return root
            return self._commit(new_root, relayout=True)

    def indent(self, node_id: str) -> TextNode:
        root = self._require_root()
        with session_context(session_id=self.session_id, op="indent"):
            return self._commit(indent_node(root, node_id), relayout=True)

    def outdent(self, node_id: str) -> TextNode:
        root = self._require_root()
        with session_context(session_id=self.session_id, op="outdent"):
            return self._commit(outdent_node(root, node_id), relayout=True)
