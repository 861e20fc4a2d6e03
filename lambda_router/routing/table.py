"""Exact-path route table.

Each path maps to a RouteEntry with one slot per supported method. The
catch-all handler lives under the reserved "*" key. Registering the same
slot twice keeps the last handler.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

CATCH_ALL = "*"
METHODS = ("GET", "POST")

# (event, context) -> ProxyResult | mapping
RouteHandler = Callable[[Any, Any], Awaitable[Any]]


@dataclass
class RouteEntry:
    get: RouteHandler | None = None
    post: RouteHandler | None = None
    all: RouteHandler | None = None  # only set on the catch-all entry

    def for_method(self, method: str) -> RouteHandler | None:
        if method == "GET":
            return self.get
        if method == "POST":
            return self.post
        return None


class RouteTable:
    """Registry of (method, path) -> handler plus one catch-all slot."""

    def __init__(self):
        self._entries: dict[str, RouteEntry] = {}

    def register(self, method: str, path: str, handler: RouteHandler) -> None:
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported method: {method}")
        entry = self._entries.setdefault(path, RouteEntry())
        setattr(entry, method.lower(), handler)

    def register_catch_all(self, handler: RouteHandler) -> None:
        self._entries[CATCH_ALL] = RouteEntry(all=handler)

    def entry(self, path: str) -> RouteEntry | None:
        return self._entries.get(path)

    def catch_all(self) -> RouteHandler | None:
        entry = self._entries.get(CATCH_ALL)
        return entry.all if entry else None

    def lookup(self, method: str, path: str) -> RouteHandler | None:
        """Exact match only. Methods other than GET and POST never match."""
        entry = self._entries.get(path)
        if entry is None:
            return None
        return entry.for_method(method.upper())

    def routes(self) -> list[tuple[str, str]]:
        pairs = []
        for path, entry in self._entries.items():
            for method in METHODS:
                if entry.for_method(method) is not None:
                    pairs.append((method, path))
            if entry.all is not None:
                pairs.append((CATCH_ALL, path))
        return pairs
