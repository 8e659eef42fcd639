"""Include/exclude pattern parsing.

Pattern strings are comma-separated globs such as ``trunk,branches/*``.
Each glob becomes a tuple of slash-delimited segments.
"""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_INCLUDES = "trunk,branches/*,tags/*,sandbox/*"
DEFAULT_EXCLUDES = ""

PathPattern = tuple[str, ...]


def split_cludes(cludes: str | None) -> tuple[str, ...]:
    """Split a comma-separated include/exclude string.

    Tokens are trimmed; empty tokens are dropped and duplicates collapsed.
    The result is sorted.
    """
    tokens = {token.strip() for token in (cludes or "").split(",")}
    tokens.discard("")
    return tuple(sorted(tokens))


def resolve_includes(includes: str | None) -> str:
    """Return ``includes`` or the default include list when it is empty."""
    return includes if includes and includes.strip() else DEFAULT_INCLUDES


def resolve_excludes(excludes: str | None) -> str:
    """Return ``excludes`` or the (empty) default exclude list."""
    return excludes if excludes and excludes.strip() else DEFAULT_EXCLUDES


def to_path(clude: str) -> PathPattern:
    return tuple(clude.split("/"))


def to_paths(cludes: Iterable[str]) -> tuple[PathPattern, ...]:
    """Convert glob strings to sorted, de-duplicated segment tuples."""
    return tuple(sorted({to_path(clude) for clude in cludes}))


def compare_paths(left: PathPattern, right: PathPattern) -> int:
    """Sequence comparator: segment-wise, shorter prefix sorts first."""
    for left_segment, right_segment in zip(left, right):
        if left_segment != right_segment:
            return -1 if left_segment < right_segment else 1
    if len(left) == len(right):
        return 0
    return -1 if len(left) < len(right) else 1


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
]
