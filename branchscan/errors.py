"""Exception types raised by repository views and the head crawler."""

from __future__ import annotations


class BranchScanError(Exception):
    """Base class for branchscan failures."""


class RemoteAccessError(BranchScanError):
    """Transport, authentication, or client-tool failure talking to the repository."""


class NodeNotFoundError(RemoteAccessError):
    """The requested path does not exist at the requested revision."""

    def __init__(self, path: str, revision: int) -> None:
        rev_label = "HEAD" if revision < 0 else str(revision)
        super().__init__(f"{path or '/'}@{rev_label} not found")
        self.path = path
        self.revision = revision


class HeadNotFoundError(BranchScanError, LookupError):
    """A named head could not be resolved to a revision."""

    def __init__(self, name: str) -> None:
        super().__init__(f"head not found: {name}")
        self.name = name


__all__ = [
    "BranchScanError",
    "RemoteAccessError",
    "NodeNotFoundError",
    "HeadNotFoundError",
]
