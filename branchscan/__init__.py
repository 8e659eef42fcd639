"""Public package surface for branchscan.

Exports the head source, crawl primitives, and ``main`` for programmatic CLI
invocation. Most implementation lives in submodules under ``branchscan``.
"""

from __future__ import annotations

from .crawler import CandidateHead, Probe, crawl, crawl_heads
from .errors import BranchScanError, HeadNotFoundError, NodeNotFoundError, RemoteAccessError
from .source import HeadSource


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "CandidateHead",
    "Probe",
    "crawl",
    "crawl_heads",
    "HeadSource",
    "BranchScanError",
    "RemoteAccessError",
    "NodeNotFoundError",
    "HeadNotFoundError",
    "main",
]
