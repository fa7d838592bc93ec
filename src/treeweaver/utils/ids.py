"""ID utilities."""

from __future__ import annotations

import itertools
import time
from collections.abc import Container


class IdFactory:
    """Produce node ids of the form ``<prefix>-<millis>-<n>``.

    The counter makes ids unique within one factory; ``taken`` lets the caller rule
    out ids already used in a tree.
    """

    def __init__(self, prefix: str = "gen") -> None:
        self.prefix = prefix
        self._counter = itertools.count()

    def next(self, taken: Container[str] = ()) -> str:  # noqa: A003
        while True:
            candidate = f"{self.prefix}-{int(time.time() * 1000)}-{next(self._counter)}"
            if candidate not in taken:
                return candidate
