"""Revision-pinned recursive discovery of heads.

The crawler walks only the directories that the include patterns can reach.
At each level it lists one directory, matches its child directories against
the next pattern segment, prunes excluded subtrees, and either offers a fully
matched directory to the acceptance criteria or descends into it.

Every descent reads the child "as of" the last-changed revision reported by
the parent listing, so each visited subtree is internally consistent even
while the repository keeps receiving commits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from .errors import NodeNotFoundError
from .patterns import PathPattern, group_paths, is_match, wildcard_starts_with, wildcard_starts_with_any
from .repository import LATEST_REVISION, ChildEntry, NodeKind, RepositoryView, join_path, revision_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateHead:
    """A directory accepted as a head, at the revision it last changed."""

    name: str
    revision: int
    last_modified: int | None = None


@dataclass(frozen=True)
class Probe:
    """Read-only view of one candidate directory for acceptance criteria."""

    name: str
    root_path: str
    revision: int
    last_modified: int | None
    view: RepositoryView = field(repr=False, compare=False)

    def exists(self, relative_path: str) -> bool:
        """Return whether ``relative_path`` exists under the candidate at its revision."""
        kind = self.view.check_path(join_path(self.root_path, relative_path), self.revision)
        return kind is not NodeKind.NONE


class Criteria(Protocol):
    def is_head(self, probe: Probe, log: logging.Logger) -> bool: ...


class Observer(Protocol):
    def observe(self, head: CandidateHead, revision: int) -> None: ...

    def is_observing(self) -> bool: ...


def _child_order(child: ChildEntry) -> tuple[int, str]:
    return (-child.revision, child.name)


def crawl(
    view: RepositoryView,
    revision: int,
    base_path: str,
    patterns: tuple[PathPattern, ...],
    match_prefix: PathPattern,
    real_path: PathPattern,
    exclude_patterns: tuple[PathPattern, ...],
    criteria: Criteria | None,
    observer: Observer,
    *,
    log: logging.Logger | None = None,
) -> bool:
    """Discover heads below ``base_path/real_path`` and report them to ``observer``.

    Returns ``False`` once the observer has stopped observing, in which case
    the caller must unwind without further repository calls. A directory that
    is missing (or is not a directory) at ``revision`` yields nothing.
    ``RemoteAccessError`` from the view propagates unchanged.
    """
    assert len(match_prefix) == len(real_path)
    assert wildcard_starts_with(real_path, match_prefix)
    log = log or logger

    if not observer.is_observing():
        return False

    path = join_path(base_path, *real_path)
    log.info("Checking directory %s@%s", path or "/", revision_label(revision))
    try:
        node = view.get_node(path, revision)
    except NodeNotFoundError:
        log.debug("%s vanished at %s", path or "/", revision_label(revision))
        return True
    if node.kind is not NodeKind.DIR or node.children is None:
        return True

    directories = sorted((child for child in node.children if child.kind is NodeKind.DIR), key=_child_order)
    depth = len(match_prefix)
    emitted: set[PathPattern] = set()
    descended: set[tuple[PathPattern, PathPattern]] = set()

    for group in group_paths(patterns, match_prefix).values():
        for pattern in group:
            wanted = pattern[depth]
            for child in directories:
                if not is_match(child.name, wanted):
                    continue
                child_match = match_prefix + (wanted,)
                child_real = real_path + (child.name,)
                if wildcard_starts_with_any(child_real, exclude_patterns):
                    continue

                if pattern == child_match:
                    if child_real in emitted:
                        continue
                    emitted.add(child_real)
                    if not _offer(view, base_path, child, child_real, criteria, observer, log):
                        return False
                    continue

                if (child_match, child_real) in descended:
                    continue
                descended.add((child_match, child_real))
                keep_going = crawl(
                    view,
                    child.revision,
                    base_path,
                    patterns,
                    child_match,
                    child_real,
                    exclude_patterns,
                    criteria,
                    observer,
                    log=log,
                )
                if not keep_going:
                    return False
    return True


def _offer(
    view: RepositoryView,
    base_path: str,
    child: ChildEntry,
    child_real: PathPattern,
    criteria: Criteria | None,
    observer: Observer,
    log: logging.Logger,
) -> bool:
    """Run criteria for one fully matched directory; return whether to continue."""
    name = "/".join(child_real)
    probe = Probe(
        name=name,
        root_path=join_path(base_path, name),
        revision=child.revision,
        last_modified=child.last_modified,
        view=view,
    )
    log.info("Checking candidate branch %s@%s", probe.root_path, probe.revision)
    if criteria is not None and not criteria.is_head(probe, log):
        log.info("Does not meet criteria")
        return True

    log.info("Met criteria")
    observer.observe(CandidateHead(name, child.revision, child.last_modified), child.revision)
    return observer.is_observing()


def crawl_heads(
    view: RepositoryView,
    base_path: str,
    includes: tuple[PathPattern, ...],
    excludes: tuple[PathPattern, ...],
    criteria: Criteria | None,
    observer: Observer,
    *,
    log: logging.Logger | None = None,
) -> bool:
    """Crawl from ``base_path`` at the latest revision with empty prefixes."""
    return crawl(
        view,
        LATEST_REVISION,
        base_path,
        includes,
        (),
        (),
        excludes,
        criteria,
        observer,
        log=log,
    )


__all__ = [
    "CandidateHead",
    "Probe",
    "Criteria",
    "Observer",
    "crawl",
    "crawl_heads",
]
