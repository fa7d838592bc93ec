"""Structural edit operations.

Every function takes the current root and returns the next root without mutating its
input. Only the path from the root down to the changed node is rebuilt; untouched
subtrees are shared between the old and the new tree.

An id that is not present in the tree is not an error: the input root is returned
as-is. The same holds for structurally impossible moves (indenting a first child,
outdenting a child of the root). Tree shape can lag behind the interaction that
produced an id, so these cases degrade to no-ops.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from treeweaver.errors import RootDeletionError
from treeweaver.logging import get_logger
from treeweaver.models import TextNode
from treeweaver.tree.traversal import find_node, find_parent, node_ids

logger = get_logger(__name__)


def _rewrite(node: TextNode, node_id: str, fn: Callable[[TextNode], TextNode]) -> TextNode:
    """Apply ``fn`` to the first node with ``node_id``; return ``node`` itself on a miss."""

    if node.id == node_id:
        return fn(node)
    for i, child in enumerate(node.children):
        new_child = _rewrite(child, node_id, fn)
        if new_child is not child:
            children = list(node.children)
            children[i] = new_child
            return node.with_children(children)
    return node


def _rewrite_parent_of(
    node: TextNode,
    node_id: str,
    fn: Callable[[TextNode, int], TextNode],
) -> tuple[TextNode, bool]:
    """Apply ``fn(parent, index)`` at the first parent holding ``node_id``.

    Returns the rewritten subtree and whether a parent was found, so callers can tell
    a miss from a located-but-refused move.
    """

    for i, child in enumerate(node.children):
        if child.id == node_id:
            return fn(node, i), True
    for i, child in enumerate(node.children):
        new_child, found = _rewrite_parent_of(child, node_id, fn)
        if found:
            if new_child is child:
                return node, True
            children = list(node.children)
            children[i] = new_child
            return node.with_children(children), True
    return node, False


def _collides(taken: set[str], node: TextNode) -> bool:
    """Whether the subtree under ``node`` reuses a taken id or repeats one of its own."""

    ids = node_ids(node)
    return bool(taken.intersection(ids)) or len(ids) != len(set(ids))


def update_node(root: TextNode, node_id: str, content: str, kind: str) -> TextNode:
    """Replace content and kind of one node. Structure and coordinates are kept."""

    new_root = _rewrite(root, node_id, lambda n: n.model_copy(update={"content": content, "kind": kind}))
    if new_root is root:
        logger.debug("update_node: %s not found", node_id)
    return new_root


def set_position(root: TextNode, node_id: str, x: float, y: float) -> TextNode:
    """Fix the coordinates of one node. No other node's coordinates change."""

    new_root = _rewrite(root, node_id, lambda n: n.model_copy(update={"x": x, "y": y}))
    if new_root is root:
        logger.debug("set_position: %s not found", node_id)
    return new_root


def insert_child(root: TextNode, parent_id: str, new_node: TextNode) -> TextNode:
    """Append ``new_node`` as the last child of ``parent_id``.

    The caller supplies fresh ids. A node whose subtree reuses an id already in
    the tree is refused so ids stay unique.
    """

    if _collides(set(node_ids(root)), new_node):
        logger.warning("insert_child: id collision under %s, ignoring", new_node.id)
        return root

    new_root = _rewrite(root, parent_id, lambda n: n.with_children([*n.children, new_node]))
    if new_root is root:
        logger.debug("insert_child: parent %s not found", parent_id)
    return new_root


def merge_children(root: TextNode, parent_id: str, new_children: Iterable[TextNode]) -> TextNode:
    """Append several nodes after the existing children of ``parent_id``.

    Incoming nodes whose subtree reuses an id already in the tree (or already taken
    by an earlier incoming node) are skipped.
    """

    if find_node(root, parent_id) is None:
        logger.debug("merge_children: parent %s not found", parent_id)
        return root

    taken = set(node_ids(root))
    accepted: list[TextNode] = []
    for child in new_children:
        if _collides(taken, child):
            logger.warning("merge_children: skipping %s, id collision", child.id)
            continue
        taken.update(node_ids(child))
        accepted.append(child)

    if not accepted:
        return root
    return _rewrite(root, parent_id, lambda n: n.with_children([*n.children, *accepted]))


def remove_node(root: TextNode, node_id: str) -> TextNode | None:
    """Remove a node and its whole subtree.

    Returns ``None`` when ``node_id`` is the root itself; callers that must always
    hold a tree should use :func:`delete_node`.
    """

    if root.id == node_id:
        return None

    new_root, found = _rewrite_parent_of(
        root,
        node_id,
        lambda parent, i: parent.with_children([*parent.children[:i], *parent.children[i + 1 :]]),
    )
    if not found:
        logger.debug("remove_node: %s not found", node_id)
    return new_root


def delete_node(root: TextNode, node_id: str) -> TextNode:
    """Remove a node, refusing to remove the root.

    Raises:
        RootDeletionError: ``node_id`` is the root's id.
    """

    new_root = remove_node(root, node_id)
    if new_root is None:
        raise RootDeletionError(node_id)
    return new_root


def _indent_at(parent: TextNode, i: int) -> TextNode:
    if i == 0:
        return parent
    target = parent.children[i]
    prev = parent.children[i - 1]
    children = list(parent.children)
    children[i - 1] = prev.with_children([*prev.children, target])
    del children[i]
    return parent.with_children(children)


def indent_node(root: TextNode, node_id: str) -> TextNode:
    """Make a node the last child of its previous sibling.

    No-op for the root, for a first child and for unknown ids.
    """

    new_root, found = _rewrite_parent_of(root, node_id, _indent_at)
    if not found:
        logger.debug("indent_node: %s not found or is the root", node_id)
    elif new_root is root:
        logger.debug("indent_node: %s has no previous sibling", node_id)
    return new_root


def _rewrite_grandparent_of(node: TextNode, node_id: str) -> tuple[TextNode, bool]:
    for i, parent in enumerate(node.children):
        for j, child in enumerate(parent.children):
            if child.id != node_id:
                continue
            new_parent = parent.with_children([*parent.children[:j], *parent.children[j + 1 :]])
            children = list(node.children)
            children[i] = new_parent
            children.insert(i + 1, child)
            return node.with_children(children), True

    for i, child in enumerate(node.children):
        new_child, found = _rewrite_grandparent_of(child, node_id)
        if found:
            children = list(node.children)
            children[i] = new_child
            return node.with_children(children), True
    return node, False


def outdent_node(root: TextNode, node_id: str) -> TextNode:
    """Move a node out of its parent, right after the parent in the grandparent.

    No-op when the parent is the root (no grandparent) and for unknown ids.
    """

    new_root, found = _rewrite_grandparent_of(root, node_id)
    if not found:
        logger.debug("outdent_node: %s has no grandparent or is unknown", node_id)
    return new_root


def can_indent(root: TextNode, node_id: str) -> bool:
    """Whether :func:`indent_node` would change the tree."""

    parent = find_parent(root, node_id)
    if parent is None:
        return False
    return [c.id for c in parent.children].index(node_id) > 0


def can_outdent(root: TextNode, node_id: str) -> bool:
    """Whether :func:`outdent_node` would change the tree."""

    parent = find_parent(root, node_id)
    if parent is None:
        return False
    return find_parent(root, parent.id) is not None
