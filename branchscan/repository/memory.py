"""In-memory revisioned tree implementing the repository view contract.

Every ``commit`` produces a new global revision. Nodes carry their
last-changed revision, which bubbles up to every ancestor directory the way
Subversion reports it, so listings "as of" an old revision stay stable while
newer commits land.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..errors import NodeNotFoundError, RemoteAccessError
from .types import LATEST_REVISION, ChildEntry, NodeEntry, NodeKind, join_path


@dataclass(frozen=True)
class _Node:
    kind: NodeKind
    revision: int
    last_modified: int


def _ancestors(path: str) -> list[str]:
    parts = path.split("/")
    return ["/".join(parts[:index]) for index in range(len(parts))]


@dataclass
class MemoryRepositoryView:
    """Repository view over an in-memory tree, with a log of listing calls."""

    root_url: str = "memory://repository"
    uuid: str = "00000000-0000-0000-0000-000000000000"
    listings: list[tuple[str, int]] = field(default_factory=list, init=False)
    closed: bool = field(default=False, init=False)
    _snapshots: list[dict[str, _Node]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._snapshots.append({"": _Node(NodeKind.DIR, 0, 0)})

    @property
    def youngest(self) -> int:
        return len(self._snapshots) - 1

    def commit(
        self,
        *,
        add_dirs: Iterable[str] = (),
        add_files: Iterable[str] = (),
        delete: Iterable[str] = (),
        timestamp_ms: int | None = None,
    ) -> int:
        """Apply one change set as a new revision and return its number.

        Missing parent directories of added paths are created implicitly.
        """
        revision = self.youngest + 1
        stamp = revision * 1000 if timestamp_ms is None else timestamp_ms
        nodes = dict(self._snapshots[-1])
        touched: set[str] = set()

        for raw in delete:
            path = join_path(raw)
            if path not in nodes:
                raise NodeNotFoundError(path, self.youngest)
            for existing in [name for name in nodes if name == path or name.startswith(path + "/")]:
                del nodes[existing]
            touched.update(_ancestors(path))

        for kind, paths in ((NodeKind.DIR, add_dirs), (NodeKind.FILE, add_files)):
            for raw in paths:
                path = join_path(raw)
                for ancestor in _ancestors(path):
                    existing = nodes.get(ancestor)
                    if existing is not None and existing.kind is not NodeKind.DIR:
                        raise RemoteAccessError(f"{ancestor} is not a directory")
                    touched.add(ancestor)
                touched.add(path)
                nodes[path] = _Node(kind, revision, stamp)

        for path in touched:
            node = nodes.get(path)
            if node is None:
                nodes[path] = _Node(NodeKind.DIR, revision, stamp)
            else:
                nodes[path] = _Node(node.kind, revision, stamp)

        self._snapshots.append(nodes)
        return revision

    def _snapshot(self, revision: int) -> dict[str, _Node]:
        if revision == LATEST_REVISION:
            return self._snapshots[-1]
        if revision < 0 or revision > self.youngest:
            raise RemoteAccessError(f"no such revision {revision}")
        return self._snapshots[revision]

    def get_node(self, path: str, revision: int) -> NodeEntry:
        path = join_path(path)
        self.listings.append((path, revision))
        nodes = self._snapshot(revision)
        node = nodes.get(path)
        if node is None:
            raise NodeNotFoundError(path, revision)
        if node.kind is not NodeKind.DIR:
            return NodeEntry(kind=node.kind, revision=node.revision)

        prefix = f"{path}/" if path else ""
        children: list[ChildEntry] = []
        for name, child in nodes.items():
            if not name or not name.startswith(prefix):
                continue
            rest = name[len(prefix):]
            if "/" in rest:
                continue
            children.append(
                ChildEntry(
                    name=rest,
                    kind=child.kind,
                    revision=child.revision,
                    last_modified=child.last_modified,
                )
            )
        children.sort(key=lambda item: item.name)
        return NodeEntry(kind=NodeKind.DIR, revision=node.revision, children=tuple(children))

    def check_path(self, path: str, revision: int) -> NodeKind:
        node = self._snapshot(revision).get(join_path(path))
        return NodeKind.NONE if node is None else node.kind

    def get_uuid(self) -> str:
        return self.uuid

    def relative_path(self, url: str) -> str:
        base = self.root_url.rstrip("/")
        if url.rstrip("/") != base and not url.startswith(base + "/"):
            raise RemoteAccessError(f"{url} is not inside {self.root_url}")
        return join_path(url[len(base):])

    def close(self) -> None:
        self.closed = True


__all__ = ["MemoryRepositoryView"]
