"""FastAPI app exposing tree normalization, layout, export and edits.

The API is stateless: every request carries the current tree and the response is
the next tree. The client owns the tree between requests.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from treeweaver.config import Settings, load_settings
from treeweaver.errors import MalformedTreeError, RootDeletionError
from treeweaver.export import serialize_outline, to_dict
from treeweaver.layout import layout_tree
from treeweaver.logging import configure_logging, get_logger
from treeweaver.models import EditOp, TextNode, TextType, allowed_kinds, default_kind
from treeweaver.tree import (
    collect_edges,
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
from treeweaver.viewport import clamp_scale, drag_node


class TreeRequest(BaseModel):
    """A raw tree payload."""

    tree: dict[str, Any]


class EditRequest(BaseModel):
    """One edit operation applied to ``tree``."""

    tree: dict[str, Any]
    op: EditOp
    node_id: str
    content: str | None = None
    kind: str | None = None
    x: float | None = None
    y: float | None = None
    text_type: TextType = TextType.GENERAL


class BreakdownRequest(BaseModel):
    """Children returned by a breakdown request, to merge under ``node_id``."""

    tree: dict[str, Any]
    node_id: str
    children: Any


class BreakdownResponse(BaseModel):
    tree: dict[str, Any]
    merged: int


class DragRequest(BaseModel):
    """A pointer drag of one node, in screen pixels at zoom ``scale``."""

    tree: dict[str, Any]
    node_id: str
    dx: float
    dy: float
    scale: float = 1.0


def _normalize(raw: dict[str, Any]) -> TextNode:
    try:
        return validate_and_normalize(raw)
    except MalformedTreeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _apply_edit(root: TextNode, req: EditRequest, id_factory: IdFactory) -> tuple[TextNode, bool]:
    """Apply ``req``; return the new tree and whether a layout pass is due."""

    if req.op is EditOp.UPDATE:
        target = find_node(root, req.node_id)
        if target is None:
            return root, False
        content = req.content if req.content is not None else target.content
        return update_node(root, req.node_id, content, req.kind or target.kind), False
    if req.op is EditOp.MOVE:
        if req.x is None or req.y is None:
            raise HTTPException(status_code=422, detail="move requires x and y")
        return set_position(root, req.node_id, req.x, req.y), False
    if req.op is EditOp.ADD:
        new_node = TextNode(
            id=id_factory.next(node_ids(root)),
            kind=req.kind or default_kind(req.text_type),
            content=req.content if req.content is not None else "New Node",
        )
        return insert_child(root, req.node_id, new_node), True
    if req.op is EditOp.DELETE:
        try:
            return delete_node(root, req.node_id), True
        except RootDeletionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
    if req.op is EditOp.INDENT:
        return indent_node(root, req.node_id), True
    return outdent_node(root, req.node_id), True


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)
    layout_config = settings.layout_config()
    viewport = settings.viewport()
    new_ids = IdFactory("new")

    app = FastAPI(title="treeweaver", version="0.1.0")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/kinds/{text_type}")
    def kinds(text_type: TextType) -> list[str]:
        return list(allowed_kinds(text_type))

    @app.post("/trees/normalize")
    def normalize(req: TreeRequest) -> dict[str, Any]:
        return to_dict(_normalize(req.tree))

    @app.post("/trees/layout")
    def layout(req: TreeRequest) -> dict[str, Any]:
        return to_dict(layout_tree(_normalize(req.tree), layout_config))

    @app.post("/trees/export", response_class=PlainTextResponse)
    def export(req: TreeRequest) -> str:
        return serialize_outline(_normalize(req.tree))

    @app.post("/trees/edges")
    def edges(req: TreeRequest) -> list[dict[str, Any]]:
        root = layout_tree(_normalize(req.tree), layout_config)
        return [asdict(e) for e in collect_edges(root, settings.node_width)]

    @app.post("/trees/drag")
    def drag(req: DragRequest) -> dict[str, Any]:
        scale = clamp_scale(req.scale, viewport.min_scale, viewport.max_scale)
        return to_dict(drag_node(_normalize(req.tree), req.node_id, req.dx, req.dy, scale))

    @app.post("/trees/edit")
    def edit(req: EditRequest) -> dict[str, Any]:
        logger.info("API edit requested: %s %s", req.op.value, req.node_id)
        root, relayout = _apply_edit(_normalize(req.tree), req, new_ids)
        if relayout:
            root = layout_tree(root, layout_config)
        return to_dict(root)

    @app.post("/trees/breakdown")
    def breakdown(req: BreakdownRequest) -> BreakdownResponse:
        root = _normalize(req.tree)
        if find_node(root, req.node_id) is None:
            logger.info("API breakdown target %s no longer exists", req.node_id)
            return BreakdownResponse(tree=to_dict(root), merged=0)
        try:
            children = normalize_children(req.children, existing_ids=node_ids(root))
        except MalformedTreeError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        root = layout_tree(merge_children(root, req.node_id, children), layout_config)
        logger.info("API breakdown merged %d children under %s", len(children), req.node_id)
        return BreakdownResponse(tree=to_dict(root), merged=len(children))

    return app
