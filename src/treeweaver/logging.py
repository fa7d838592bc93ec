"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.logging import RichHandler


_session_var: contextvars.ContextVar[str] = contextvars.ContextVar("treeweaver_session", default="-")
_op_var: contextvars.ContextVar[str] = contextvars.ContextVar("treeweaver_op", default="-")


class _ContextFilter(logging.Filter):
    """Inject session context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.session = _session_var.get()  # type: ignore[attr-defined]
        record.op = _op_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def session_context(*, session_id: str, op: str | None = None) -> Any:
    """Temporarily bind session context for structured logging.

    Args:
        session_id: Analysis session identifier.
        op: Optional edit operation name.
    """

    token_session = _session_var.set(session_id)
    token_op = _op_var.set(op or _op_var.get())
    try:
        yield
    finally:
        _session_var.reset(token_session)
        _op_var.reset(token_op)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s session=%(session)s op=%(op)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Repeated calls must not stack handlers
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                h.addFilter(_ContextFilter())
                h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
