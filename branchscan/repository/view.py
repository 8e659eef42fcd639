"""Repository view contract consumed by the crawler and head source."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol

from .types import NodeEntry, NodeKind


class RepositoryView(Protocol):
    """Read-only, revision-addressed access to a remote tree.

    Paths are relative to the repository root. Revision ``-1`` means latest.
    Implementations raise ``NodeNotFoundError`` from ``get_node`` for missing
    paths and ``RemoteAccessError`` for any other failure.
    """

    def get_node(self, path: str, revision: int) -> NodeEntry: ...

    def check_path(self, path: str, revision: int) -> NodeKind: ...

    def get_uuid(self) -> str: ...

    def relative_path(self, url: str) -> str: ...

    def close(self) -> None: ...


ViewFactory = Callable[[str], RepositoryView]


@contextmanager
def open_session(factory: ViewFactory, url: str) -> Iterator[RepositoryView]:
    """Open a view for ``url`` and close it on every exit path."""
    view = factory(url)
    try:
        yield view
    finally:
        view.close()


__all__ = [
    "RepositoryView",
    "ViewFactory",
    "open_session",
]
