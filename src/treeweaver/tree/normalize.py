"""Normalization of externally supplied trees.

Trees arrive from the text-to-structure service as loosely shaped JSON: ids may be
missing or numeric, ``children`` may be absent or ``null``, and the kind may be
named ``type`` or ``kind``. Nothing enters the edit or layout engines before it has
passed through here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from treeweaver.errors import MalformedTreeError
from treeweaver.logging import get_logger
from treeweaver.models import TextNode
from treeweaver.utils.ids import IdFactory

logger = get_logger(__name__)

# Deeper payloads are rejected before the recursive engines see them.
MAX_DEPTH = 256


class _RawNode(BaseModel):
    """Shape check for a single incoming node; children stay unparsed."""

    model_config = ConfigDict(extra="ignore")

    id: str | int | None = None
    kind: str = Field(validation_alias=AliasChoices("kind", "type"), min_length=1)
    content: str
    children: list[Any] = Field(default_factory=list)
    x: float | None = None
    y: float | None = None
    metadata: dict[str, Any] | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _strip_kind(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("content", mode="before")
    @classmethod
    def _number_content(cls, v: Any) -> Any:
        # Numbers such as verse or article numbers come through unquoted
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("children", mode="before")
    @classmethod
    def _default_children(cls, v: Any) -> Any:
        return [] if v is None else v


def _as_mapping(raw: Any) -> Any:
    if isinstance(raw, TextNode):
        return raw.model_dump(by_alias=True)
    return raw


def _build(shape: _RawNode, path: str, factory: IdFactory, seen: set[str], depth: int) -> TextNode:
    if depth > MAX_DEPTH:
        raise MalformedTreeError(f"tree is deeper than {MAX_DEPTH} levels at {path}")

    node_id = str(shape.id).strip() if shape.id is not None else ""
    if not node_id or node_id in seen:
        new_id = factory.next(seen)
        if node_id:
            logger.warning("Duplicate id %s at %s, renamed to %s", node_id, path, new_id)
        node_id = new_id
    seen.add(node_id)

    children: list[TextNode] = []
    for i, raw_child in enumerate(shape.children):
        child = _normalize_optional(raw_child, f"{path}.children[{i}]", factory, seen, depth + 1)
        if child is not None:
            children.append(child)

    return TextNode(
        id=node_id,
        kind=shape.kind,
        content=shape.content,
        children=children,
        x=shape.x,
        y=shape.y,
        metadata=shape.metadata,
    )


def _normalize_optional(
    raw: Any, path: str, factory: IdFactory, seen: set[str], depth: int
) -> TextNode | None:
    try:
        shape = _RawNode.model_validate(_as_mapping(raw))
    except ValidationError as exc:
        logger.warning("Dropping malformed node at %s (%d errors)", path, exc.error_count())
        return None
    return _build(shape, path, factory, seen, depth)


def validate_and_normalize(raw: Any, *, id_factory: IdFactory | None = None) -> TextNode:
    """Convert a loosely shaped tree into a :class:`TextNode` tree.

    Missing children become empty lists, missing or duplicate ids are synthesized
    and malformed descendants are dropped while their valid siblings are kept.

    Args:
        raw: Mapping with ``id``, ``type``/``kind``, ``content`` and optional
            ``children``, ``x``, ``y``, ``metadata``.
        id_factory: Source of synthesized ids.

    Returns:
        The normalized root.

    Raises:
        MalformedTreeError: The root itself is malformed, or the tree is deeper
            than ``MAX_DEPTH``.
    """

    factory = id_factory or IdFactory("gen")
    try:
        shape = _RawNode.model_validate(_as_mapping(raw))
    except ValidationError as exc:
        raise MalformedTreeError(f"tree root is malformed: {exc.error_count()} errors") from exc
    return _build(shape, "root", factory, set(), 0)


def normalize_children(
    raw: Any,
    *,
    existing_ids: Iterable[str] = (),
    id_factory: IdFactory | None = None,
) -> list[TextNode]:
    """Normalize a breakdown result into nodes ready for ``merge_children``.

    ``raw`` is either a list of child objects or a mapping holding them under
    ``children``. Ids that are missing, repeated or already used by
    ``existing_ids`` are replaced with fresh ones. Raises
    :class:`MalformedTreeError` when a child nests deeper than ``MAX_DEPTH``.
    """

    if isinstance(raw, Mapping):
        raw = raw.get("children")
    if not isinstance(raw, list):
        logger.warning("Breakdown result has no children list")
        return []

    factory = id_factory or IdFactory("gen")
    seen = set(existing_ids)
    nodes: list[TextNode] = []
    for i, raw_child in enumerate(raw):
        node = _normalize_optional(raw_child, f"children[{i}]", factory, seen, 1)
        if node is not None:
            nodes.append(node)
    return nodes
