"""Edit operation names shared by the CLI and the HTTP API."""

from __future__ import annotations

from enum import Enum


class EditOp(str, Enum):
    UPDATE = "update"
    MOVE = "move"
    ADD = "add"
    DELETE = "delete"
    INDENT = "indent"
    OUTDENT = "outdent"
