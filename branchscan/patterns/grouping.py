"""Prefix grouping of include patterns.

Each group key is a literal path that has to be listed once to make progress
on every pattern in its group. Grouping keeps the number of remote listings
per crawl level as small as the patterns allow.
"""

from __future__ import annotations

from collections.abc import Iterable

from .matching import filter_paths, index_of_next_wildcard, starts_with
from .parse import PathPattern


def optimization_point(keys: Iterable[PathPattern], prefix_size: int) -> str | None:
    """Return a segment shared at ``prefix_size`` by more than one key, else ``None``."""
    seen: set[str] = set()
    for key in keys:
        if len(key) <= prefix_size:
            continue
        value = key[prefix_size]
        if value in seen:
            return value
        seen.add(value)
    return None


def group_paths(
    patterns: Iterable[PathPattern],
    prefix: PathPattern,
) -> dict[PathPattern, tuple[PathPattern, ...]]:
    """Group ``patterns`` under literal extensions of ``prefix``.

    Patterns that do not literally start with ``prefix`` (or do not extend
    it) are ignored. Every returned key extends ``prefix`` and is strictly
    longer, every member starts with its key, and the members of all groups
    partition the remaining input. Keys are returned in sequence order.
    """
    prefix_size = len(prefix)
    pool = [path for path in filter_paths(patterns, prefix) if len(path) > prefix_size]

    groups: dict[PathPattern, tuple[PathPattern, ...]] = {}
    while pool:
        longest = pool[0]
        longest_index = index_of_next_wildcard(longest, prefix_size)
        for path in pool[1:]:
            index = index_of_next_wildcard(path, prefix_size)
            if index > longest_index:
                longest = path
                longest_index = index
        # keys stay strictly longer than prefix even when the next segment is a wildcard
        key = longest[: max(longest_index, prefix_size + 1)]
        members = tuple(path for path in pool if starts_with(path, key))
        groups[key] = members
        pool = [path for path in pool if path not in members]

    while (value := optimization_point(groups, prefix_size)) is not None:
        merged_key = prefix + (value,)
        merged: set[PathPattern] = set()
        for key in [existing for existing in groups if starts_with(existing, merged_key)]:
            merged.update(groups.pop(key))
        groups[merged_key] = tuple(sorted(merged))

    return dict(sorted(groups.items()))


__all__ = [
    "optimization_point",
    "group_paths",
]
