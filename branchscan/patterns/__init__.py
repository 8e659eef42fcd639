"""Glob pattern primitives for head discovery.

This package contains the pure, repository-independent pieces:
- include/exclude string parsing into segment tuples
- per-segment ``*``/``?`` matching and prefix tests
- literal-prefix grouping that bounds remote listings per level
"""

from __future__ import annotations

from .grouping import group_paths, optimization_point
from .matching import (
    filter_paths,
    index_of_next_wildcard,
    is_match,
    is_wildcard,
    starts_with,
    wildcard_starts_with,
    wildcard_starts_with_any,
)
from .parse import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    PathPattern,
    compare_paths,
    resolve_excludes,
    resolve_includes,
    split_cludes,
    to_path,
    to_paths,
)

__all__ = [
    "DEFAULT_INCLUDES",
    "DEFAULT_EXCLUDES",
    "PathPattern",
    "split_cludes",
    "resolve_includes",
    "resolve_excludes",
    "to_path",
    "to_paths",
    "compare_paths",
    "is_wildcard",
    "is_match",
    "starts_with",
    "wildcard_starts_with",
    "wildcard_starts_with_any",
    "filter_paths",
    "index_of_next_wildcard",
    "optimization_point",
    "group_paths",
]
