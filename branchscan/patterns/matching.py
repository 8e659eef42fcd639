"""Per-segment wildcard matching for path patterns.

Only ``*`` (any run, possibly empty) and ``?`` (exactly one character) are
special. Matching is case-sensitive and never spans a ``/`` boundary because
patterns are compared one segment at a time.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from .parse import PathPattern

WILDCARD_CHARS = ("*", "?")


@lru_cache(maxsize=512)
def _segment_regex(glob_segment: str) -> re.Pattern[str]:
    parts: list[str] = []
    for char in glob_segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def is_wildcard(segment: str) -> bool:
    return any(char in segment for char in WILDCARD_CHARS)


def is_match(name: str, glob_segment: str) -> bool:
    """Return whether ``name`` matches the single-segment glob."""
    if not is_wildcard(glob_segment):
        return name == glob_segment
    return _segment_regex(glob_segment).fullmatch(name) is not None


def starts_with(path: PathPattern, prefix: PathPattern) -> bool:
    """Literal segment-wise prefix test."""
    return len(path) >= len(prefix) and path[: len(prefix)] == prefix


def wildcard_starts_with(path: PathPattern, wildcard_prefix: PathPattern) -> bool:
    """Return whether the first ``len(wildcard_prefix)`` segments of ``path`` match it."""
    if len(path) < len(wildcard_prefix):
        return False
    return all(is_match(segment, glob) for segment, glob in zip(path, wildcard_prefix))


def wildcard_starts_with_any(path: PathPattern, wildcard_prefixes: Iterable[PathPattern]) -> bool:
    return any(wildcard_starts_with(path, prefix) for prefix in wildcard_prefixes)


def filter_paths(paths: Iterable[PathPattern], prefix: PathPattern) -> tuple[PathPattern, ...]:
    """Keep the paths that literally start with ``prefix``, in sorted order."""
    return tuple(sorted({path for path in paths if starts_with(path, prefix)}))


def index_of_next_wildcard(path: PathPattern, start_index: int) -> int:
    """Index of the first wildcard segment at or after ``start_index``.

    Returns ``len(path)`` when the remainder is all literal.
    """
    for index in range(start_index, len(path)):
        if is_wildcard(path[index]):
            return index
    return max(start_index, len(path))


__all__ = [
    "is_wildcard",
    "is_match",
    "starts_with",
    "wildcard_starts_with",
    "wildcard_starts_with_any",
    "filter_paths",
    "index_of_next_wildcard",
]
