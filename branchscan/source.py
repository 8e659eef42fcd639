"""Head source: one remote base plus include/exclude patterns.

Owns session scoping for each operation. ``fetch`` crawls for every head,
``fetch_head`` resolves the revision of one named head, and ``uuid`` reports
the repository identity used to correlate post-commit notifications.
"""

from __future__ import annotations

import logging
import threading
from typing import TypeVar

from .crawler import CandidateHead, Criteria, Observer, crawl_heads
from .errors import HeadNotFoundError, NodeNotFoundError, RemoteAccessError
from .patterns import resolve_excludes, resolve_includes, split_cludes, to_paths
from .repository import LATEST_REVISION, NodeKind, SvnRepositoryView, ViewFactory, join_path, open_session

logger = logging.getLogger(__name__)

ObserverT = TypeVar("ObserverT", bound=Observer)


class HeadSource:
    """Discovers heads under ``remote_base``."""

    def __init__(
        self,
        remote_base: str,
        includes: str | None = None,
        excludes: str | None = None,
        criteria: Criteria | None = None,
        view_factory: ViewFactory = SvnRepositoryView.open,
    ) -> None:
        self.remote_base = remote_base.rstrip("/") + "/"
        self.includes = resolve_includes(includes)
        self.excludes = resolve_excludes(excludes)
        self.criteria = criteria
        self.view_factory = view_factory
        self._uuid: str | None = None
        self._uuid_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"HeadSource({self.remote_base!r}, includes={self.includes!r}, excludes={self.excludes!r})"

    def fetch(self, observer: ObserverT) -> ObserverT:
        """Crawl for heads, reporting each to ``observer``; return the observer.

        Heads already delivered stand when the crawl fails part way; the
        failure is re-raised as ``RemoteAccessError``.
        """
        logger.info("Opening connection to %s", self.remote_base)
        try:
            with open_session(self.view_factory, self.remote_base) as view:
                base_path = view.relative_path(self.remote_base)
                crawl_heads(
                    view,
                    base_path,
                    to_paths(split_cludes(self.includes)),
                    to_paths(split_cludes(self.excludes)),
                    self.criteria,
                    observer,
                )
        except RemoteAccessError:
            logger.exception("Could not communicate with Subversion server")
            raise
        return observer

    def fetch_head(self, name: str) -> CandidateHead:
        """Resolve the current revision of the head called ``name``."""
        logger.info("Opening connection to %s", self.remote_base)
        with open_session(self.view_factory, self.remote_base) as view:
            path = join_path(view.relative_path(self.remote_base), name)
            try:
                node = view.get_node(path, LATEST_REVISION)
            except NodeNotFoundError as exc:
                raise HeadNotFoundError(name) from exc
        if node.kind is NodeKind.NONE:
            raise HeadNotFoundError(name)
        return CandidateHead(name.strip("/"), node.revision)

    @property
    def uuid(self) -> str | None:
        """Repository UUID, fetched once; ``None`` while the repository is unreachable."""
        with self._uuid_lock:
            if self._uuid is None:
                try:
                    with open_session(self.view_factory, self.remote_base) as view:
                        self._uuid = view.get_uuid()
                except RemoteAccessError:
                    logger.warning(
                        "Could not connect to remote repository %s to determine UUID",
                        self.remote_base,
                        exc_info=True,
                    )
            return self._uuid


__all__ = ["HeadSource"]
