"""Datatypes describing repository nodes as seen at a pinned revision."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

LATEST_REVISION = -1


class NodeKind(str, Enum):
    """Kind of a versioned node."""

    NONE = "none"
    FILE = "file"
    DIR = "dir"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ChildEntry:
    """One directory child with its last-changed revision.

    ``last_modified`` is milliseconds since the epoch, or ``None`` when the
    repository does not report a commit date.
    """

    name: str
    kind: NodeKind
    revision: int
    last_modified: int | None = None


@dataclass(frozen=True)
class NodeEntry:
    """A node listing; ``children`` is ``None`` for anything but directories."""

    kind: NodeKind
    revision: int
    children: tuple[ChildEntry, ...] | None = None


def revision_label(revision: int) -> str:
    return "HEAD" if revision < 0 else str(revision)


def join_path(*parts: str) -> str:
    """Join repository path fragments with ``/``, skipping empty fragments."""
    return "/".join(part.strip("/") for part in parts if part.strip("/"))


__all__ = [
    "LATEST_REVISION",
    "NodeKind",
    "ChildEntry",
    "NodeEntry",
    "revision_label",
    "join_path",
]
