"""CLI entrypoints for treeweaver."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from treeweaver.config import load_settings
from treeweaver.errors import MalformedTreeError
from treeweaver.export import serialize_outline, to_json
from treeweaver.logging import configure_logging, get_logger
from treeweaver.models import EditOp, TextNode, TextType, allowed_kinds
from treeweaver.session import AnalysisSession
from treeweaver.tree import find_node

app = typer.Typer(add_completion=False, help="treeweaver document tree editing CLI")
logger = get_logger(__name__)


def _open_session(tree_file: Path) -> tuple[AnalysisSession, TextNode]:
    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        raw = json.loads(tree_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{tree_file} is not valid JSON: {exc}") from exc

    session = AnalysisSession(text_type=settings.text_type, layout_config=settings.layout_config())
    try:
        root = session.adopt_tree(raw)
    except MalformedTreeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return session, root


def _write(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.echo(str(output))


@app.command()
def layout(
    tree_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON tree file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
) -> None:
    """Normalize a tree and fill in missing coordinates."""

    _, root = _open_session(tree_file)
    _write(to_json(root) + "\n", output)


@app.command()
def export(
    tree_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON tree file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output markdown file"),
) -> None:
    """Export a tree as a markdown outline."""

    _, root = _open_session(tree_file)
    _write(serialize_outline(root), output)


@app.command()
def edit(
    tree_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON tree file"),
    op: EditOp = typer.Argument(..., help="Edit operation"),
    node_id: str = typer.Argument(..., help="Target node id (the parent for `add`)"),
    content: str | None = typer.Option(None, "--content", help="Node content (update/add)"),
    kind: str | None = typer.Option(None, "--kind", help="Node kind (update/add)"),
    x: float | None = typer.Option(None, "--x", help="X coordinate (move)"),
    y: float | None = typer.Option(None, "--y", help="Y coordinate (move)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
) -> None:
    """Apply one edit operation and write the resulting tree."""

    session, root = _open_session(tree_file)
    logger.info("CLI edit requested: %s %s", op.value, node_id)

    if op is EditOp.UPDATE:
        target = find_node(root, node_id)
        if target is not None:
            root = session.update(node_id, content if content is not None else target.content, kind or target.kind)
    elif op is EditOp.MOVE:
        if x is None or y is None:
            raise typer.BadParameter("move requires both --x and --y")
        root = session.move(node_id, x, y)
    elif op is EditOp.ADD:
        root = session.add_child(node_id, content if content is not None else "New Node", kind)
    elif op is EditOp.DELETE:
        if node_id == root.id:
            raise typer.BadParameter("the root node cannot be deleted")
        root = session.delete(node_id)
    elif op is EditOp.INDENT:
        root = session.indent(node_id)
    elif op is EditOp.OUTDENT:
        root = session.outdent(node_id)

    _write(to_json(root) + "\n", output)


@app.command()
def kinds(
    text_type: TextType = typer.Argument(TextType.GENERAL, help="Document class"),
) -> None:
    """List the node kinds of a document class."""

    for kind in allowed_kinds(text_type):
        typer.echo(kind)


if __name__ == "__main__":
    app()
