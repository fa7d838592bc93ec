"""Tests for structural edit operations."""

from __future__ import annotations

import pytest

from treeweaver.errors import RootDeletionError
from treeweaver.models import TextNode
from treeweaver.tree import (
    can_indent,
    can_outdent,
    delete_node,
    find_node,
    has_unique_ids,
    indent_node,
    insert_child,
    merge_children,
    node_ids,
    outdent_node,
    remove_node,
    set_position,
    update_node,
)

from .conftest import _n


def _child_ids(node: TextNode | None) -> list[str]:
    assert node is not None
    return [c.id for c in node.children]


def test_indent_moves_node_under_previous_sibling(abc_tree: TextNode) -> None:
    """It should make B the last child of A and drop it from the root's children."""

    t = indent_node(abc_tree, "B")

    assert _child_ids(t) == ["A", "C"]
    assert _child_ids(find_node(t, "A")) == ["B"]


def test_outdent_restores_indent(abc_tree: TextNode) -> None:
    """Outdent after indent should restore the original sibling order."""

    t = outdent_node(indent_node(abc_tree, "B"), "B")

    assert _child_ids(t) == ["A", "B", "C"]
    assert node_ids(t) == node_ids(abc_tree)


def test_indent_appends_after_existing_children() -> None:
    """It should append the node after the previous sibling's own children."""

    root = _n("root", _n("A", _n("A1")), _n("B"))

    t = indent_node(root, "B")

    assert _child_ids(find_node(t, "A")) == ["A1", "B"]


def test_indent_noops(abc_tree: TextNode) -> None:
    """First children, the root and unknown ids are left in place."""

    assert indent_node(abc_tree, "A") == abc_tree
    assert indent_node(abc_tree, "root") == abc_tree
    assert indent_node(abc_tree, "ghost") == abc_tree


def test_outdent_noops(abc_tree: TextNode) -> None:
    """Children of the root have no grandparent to move into."""

    assert outdent_node(abc_tree, "B") == abc_tree
    assert outdent_node(abc_tree, "root") == abc_tree
    assert outdent_node(abc_tree, "ghost") == abc_tree


def test_outdent_inserts_right_after_parent(deep_tree: TextNode) -> None:
    """It should place the node directly after its former parent."""

    t = outdent_node(deep_tree, "A2a")

    assert _child_ids(find_node(t, "A")) == ["A1", "A2", "A2a"]
    assert _child_ids(find_node(t, "A2")) == []
    assert _child_ids(t) == ["A", "B"]


def test_outdent_keeps_later_siblings_order(deep_tree: TextNode) -> None:
    """Siblings that follow the parent stay after the moved node."""

    t = outdent_node(deep_tree, "A1")

    assert _child_ids(t) == ["A", "A1", "B"]
    assert _child_ids(find_node(t, "A")) == ["A2"]


def test_indent_moves_whole_subtree(deep_tree: TextNode) -> None:
    """The indented node keeps its own children."""

    t = indent_node(deep_tree, "A2")

    assert _child_ids(find_node(t, "A1")) == ["A2"]
    assert _child_ids(find_node(t, "A2")) == ["A2a"]


def test_can_indent_and_outdent(deep_tree: TextNode) -> None:
    assert can_indent(deep_tree, "B")
    assert not can_indent(deep_tree, "A")
    assert not can_indent(deep_tree, "root")
    assert not can_indent(deep_tree, "ghost")

    assert can_outdent(deep_tree, "A2a")
    assert can_outdent(deep_tree, "A1")
    assert not can_outdent(deep_tree, "B")
    assert not can_outdent(deep_tree, "root")


def test_update_node_changes_content_and_kind_only() -> None:
    """It should keep children and coordinates."""

    root = _n("root", _n("A", _n("A1"), x=10.0, y=20.0))

    t = update_node(root, "A", "new text", "EVIDENCE")
    a = find_node(t, "A")

    assert a is not None
    assert (a.content, a.kind, a.x, a.y) == ("new text", "EVIDENCE", 10.0, 20.0)
    assert _child_ids(a) == ["A1"]
    assert find_node(root, "A").content == "content of A"  # type: ignore[union-attr]


def test_set_position_touches_only_target(abc_tree: TextNode) -> None:
    t = set_position(abc_tree, "B", 300.0, 400.0)

    b = find_node(t, "B")
    assert b is not None and (b.x, b.y) == (300.0, 400.0)
    for other in ("root", "A", "C"):
        node = find_node(t, other)
        assert node is not None and node.x is None and node.y is None


def test_insert_child_appends(abc_tree: TextNode) -> None:
    t = insert_child(abc_tree, "root", _n("D"))

    assert _child_ids(t) == ["A", "B", "C", "D"]


def test_insert_then_remove_is_identity(deep_tree: TextNode) -> None:
    """Removing a freshly inserted node should give back the same structure."""

    t = remove_node(insert_child(deep_tree, "A2", _n("fresh")), "fresh")

    assert t == deep_tree


def test_insert_child_refuses_duplicate_id(abc_tree: TextNode) -> None:
    assert insert_child(abc_tree, "A", _n("B")) == abc_tree


def test_insert_child_refuses_colliding_descendant(abc_tree: TextNode) -> None:
    """A fresh node carrying a child with a taken id is refused as a whole."""

    t = insert_child(abc_tree, "A", _n("fresh", _n("B")))

    assert t == abc_tree
    assert has_unique_ids(t)
    assert insert_child(abc_tree, "A", _n("fresh", _n("dup"), _n("dup"))) == abc_tree


def test_insert_child_unknown_parent_is_noop(abc_tree: TextNode) -> None:
    assert insert_child(abc_tree, "ghost", _n("D")) == abc_tree


def test_merge_children_preserves_existing() -> None:
    root = _n("root", _n("A", _n("A1")))

    t = merge_children(root, "A", [_n("g1"), _n("g2", _n("g2a"))])

    assert _child_ids(find_node(t, "A")) == ["A1", "g1", "g2"]
    assert _child_ids(find_node(t, "g2")) == ["g2a"]


def test_merge_children_skips_colliding_ids(abc_tree: TextNode) -> None:
    """Incoming nodes that reuse ids are skipped; the others are merged."""

    t = merge_children(abc_tree, "A", [_n("x1"), _n("x2", _n("C")), _n("x1")])

    assert _child_ids(find_node(t, "A")) == ["x1"]
    assert has_unique_ids(t)


def test_merge_children_unknown_parent_is_noop(abc_tree: TextNode) -> None:
    assert merge_children(abc_tree, "ghost", [_n("x1")]) == abc_tree


def test_remove_deletes_subtree(deep_tree: TextNode) -> None:
    t = remove_node(deep_tree, "A2")

    assert t is not None
    assert node_ids(t) == ["root", "A", "A1", "B"]


def test_remove_ghost_returns_equal_tree(deep_tree: TextNode) -> None:
    assert remove_node(deep_tree, "ghost") == deep_tree


def test_remove_root_returns_none(abc_tree: TextNode) -> None:
    assert remove_node(abc_tree, "root") is None


def test_delete_node_rejects_root(abc_tree: TextNode) -> None:
    with pytest.raises(RootDeletionError):
        delete_node(abc_tree, "root")

    assert _child_ids(delete_node(abc_tree, "B")) == ["A", "C"]


def test_edits_do_not_mutate_input(deep_tree: TextNode) -> None:
    """Every operation should leave its input tree untouched."""

    before = deep_tree.model_dump()

    indent_node(deep_tree, "B")
    outdent_node(deep_tree, "A2a")
    remove_node(deep_tree, "A1")
    insert_child(deep_tree, "A1", _n("new"))
    merge_children(deep_tree, "B", [_n("m1")])
    update_node(deep_tree, "A", "changed", "OTHER")
    set_position(deep_tree, "A", 1.0, 2.0)

    assert deep_tree.model_dump() == before


def test_untouched_subtrees_are_shared(deep_tree: TextNode) -> None:
    """Only the path to the edited node is rebuilt."""

    t = update_node(deep_tree, "B", "changed", "OTHER")

    assert t.children[0] is deep_tree.children[0]
    assert t.children[1] is not deep_tree.children[1]


def test_ids_stay_unique_over_edit_sequence(deep_tree: TextNode) -> None:
    t = deep_tree
    t = insert_child(t, "A1", _n("n1"))
    t = indent_node(t, "B")
    t = merge_children(t, "n1", [_n("m1"), _n("m2")])
    t = outdent_node(t, "m2")
    t = indent_node(t, "A2")
    removed = remove_node(t, "A1")
    assert removed is not None
    t = removed

    assert has_unique_ids(t)
    assert node_ids(t) == ["root", "A", "B"]
