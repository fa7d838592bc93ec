"""Shared fixtures."""

from __future__ import annotations

import pytest

from treeweaver.models import ROOT_KIND, TextNode


def _n(
    node_id: str,
    *children: TextNode,
    kind: str = "CLAIM",
    content: str | None = None,
    x: float | None = None,
    y: float | None = None,
) -> TextNode:
    return TextNode(
        id=node_id,
        kind=kind,
        content=content if content is not None else f"content of {node_id}",
        children=list(children),
        x=x,
        y=y,
    )


@pytest.fixture
def abc_tree() -> TextNode:
    """Root with three leaf children A, B, C."""

    return _n("root", _n("A"), _n("B"), _n("C"), kind=ROOT_KIND)


@pytest.fixture
def deep_tree() -> TextNode:
    """root -> A -> (A1, A2 -> A2a), B."""

    return _n(
        "root",
        _n("A", _n("A1"), _n("A2", _n("A2a"))),
        _n("B"),
        kind=ROOT_KIND,
    )


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TREEWEAVER_LOG_LEVEL", "ERROR")
