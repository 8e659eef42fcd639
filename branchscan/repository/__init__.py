"""Revision-addressed repository access.

This package contains:
- node/child datatypes observed at a pinned revision
- the ``RepositoryView`` protocol plus a scoped-session helper
- an ``svn`` command-line backed view and an in-memory view
"""

from __future__ import annotations

from .memory import MemoryRepositoryView
from .svn import SvnRepositoryView
from .types import LATEST_REVISION, ChildEntry, NodeEntry, NodeKind, join_path, revision_label
from .view import RepositoryView, ViewFactory, open_session

__all__ = [
    "LATEST_REVISION",
    "NodeKind",
    "ChildEntry",
    "NodeEntry",
    "join_path",
    "revision_label",
    "RepositoryView",
    "ViewFactory",
    "open_session",
    "MemoryRepositoryView",
    "SvnRepositoryView",
]
