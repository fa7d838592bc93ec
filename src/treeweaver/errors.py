"""Exceptions raised by treeweaver."""

from __future__ import annotations


class TreeWeaverError(RuntimeError):
    pass


class MalformedTreeError(TreeWeaverError, ValueError):
    """An external tree payload cannot be adopted.

    Only raised for the root of a payload; malformed descendants are dropped
    during normalization instead.
    """


class RootDeletionError(TreeWeaverError):
    """Deleting the root through the caller-facing delete path."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"cannot delete root node {node_id!r}")
        self.node_id = node_id


class NoTreeError(TreeWeaverError):
    """A session operation was requested before any tree was adopted."""
