"""Repository view backed by the ``svn`` command line client.

Every query is one ``svn info --xml`` call against a peg-revisioned URL, so a
listing is always read "as of" an exact revision. Missing-path diagnostics
are mapped to ``NodeNotFoundError``; everything else becomes
``RemoteAccessError``.
"""

from __future__ import annotations

import logging
import re
import subprocess
import xml.etree.ElementTree as ElementTree
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote, unquote

from ..errors import NodeNotFoundError, RemoteAccessError
from .types import ChildEntry, NodeEntry, NodeKind, join_path, revision_label

logger = logging.getLogger(__name__)

DEFAULT_SVN_BINARY = "svn"
DEFAULT_TIMEOUT_SECONDS = 60.0

# svn diagnostics meaning "no such path"; E170000 also covers bad URL schemes
_NOT_FOUND_RE = re.compile(
    r"\b(?:[EW](?:160013|155010|200009)|W170000)\b"
    r"|\bE170000\b.*(?:non-existent|doesn't exist|not found)"
)


def _parent_url(url: str) -> str | None:
    """Return ``url`` minus its last path segment, or ``None`` at the host."""
    host_start = url.find("://") + 3
    cut = url.rfind("/")
    if cut <= host_start:
        return None
    return url[:cut]


@dataclass(frozen=True)
class _InfoEntry:
    kind: NodeKind
    url: str
    root: str
    uuid: str
    commit_revision: int
    last_modified: int | None


def _parse_kind(raw: str | None) -> NodeKind:
    try:
        return NodeKind(raw or "unknown")
    except ValueError:
        return NodeKind.UNKNOWN


def parse_svn_date(raw: str | None) -> int | None:
    """Convert an svn XML ``<date>`` into epoch milliseconds."""
    if not raw:
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return int(datetime.fromisoformat(text).timestamp() * 1000)
    except ValueError:
        return None


def parse_info_xml(payload: str) -> list[_InfoEntry]:
    """Parse ``svn info --xml`` output into entries in document order."""
    try:
        root = ElementTree.fromstring(payload)
    except ElementTree.ParseError as exc:
        raise RemoteAccessError(f"malformed svn info output: {exc}") from exc

    entries: list[_InfoEntry] = []
    for element in root.iter("entry"):
        commit = element.find("commit")
        commit_revision = element.get("revision", "-1")
        last_modified: int | None = None
        if commit is not None:
            commit_revision = commit.get("revision", commit_revision)
            last_modified = parse_svn_date(commit.findtext("date"))
        entries.append(
            _InfoEntry(
                kind=_parse_kind(element.get("kind")),
                url=(element.findtext("url") or "").rstrip("/"),
                root=(element.findtext("repository/root") or "").rstrip("/"),
                uuid=element.findtext("repository/uuid") or "",
                commit_revision=int(commit_revision),
                last_modified=last_modified,
            )
        )
    return entries


class SvnRepositoryView:
    """Repository view that shells out to ``svn``.

    Use ``SvnRepositoryView.open(url)`` to probe the repository root and UUID
    before issuing path queries, which are relative to that root.
    """

    def __init__(
        self,
        root_url: str,
        uuid: str,
        *,
        svn_binary: str = DEFAULT_SVN_BINARY,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.root_url = root_url.rstrip("/")
        self.uuid = uuid
        self.svn_binary = svn_binary
        self.timeout_seconds = timeout_seconds
        self.closed = False

    @classmethod
    def open(
        cls,
        url: str,
        *,
        svn_binary: str = DEFAULT_SVN_BINARY,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "SvnRepositoryView":
        """Probe the repository holding ``url``.

        ``url`` itself need not exist at HEAD: the nearest existing ancestor
        is probed instead, and queries for the missing path then report it
        as not found.
        """
        target = url.rstrip("/")
        while True:
            try:
                entries = _run_info(svn_binary, target, "empty", timeout_seconds)
                break
            except NodeNotFoundError as exc:
                parent = _parent_url(target)
                if parent is None:
                    raise RemoteAccessError(f"no repository found at {url}") from exc
                logger.debug("%s not found, probing parent %s", target, parent)
                target = parent
        if not entries or not entries[0].root:
            raise RemoteAccessError(f"could not determine repository root for {url}")
        logger.debug("opened %s (root %s)", url, entries[0].root)
        return cls(
            entries[0].root,
            entries[0].uuid,
            svn_binary=svn_binary,
            timeout_seconds=timeout_seconds,
        )

    def _target(self, path: str, revision: int) -> str:
        path = join_path(path)
        url = f"{self.root_url}/{quote(path, safe='/')}" if path else self.root_url
        return f"{url}@{revision_label(revision)}"

    def _info(self, path: str, revision: int, depth: str) -> list[_InfoEntry]:
        if self.closed:
            raise RemoteAccessError("session is closed")
        target = self._target(path, revision)
        entries = _run_info(self.svn_binary, target, depth, self.timeout_seconds)
        if not entries:
            raise NodeNotFoundError(join_path(path), revision)
        return entries

    def get_node(self, path: str, revision: int) -> NodeEntry:
        entries = self._info(path, revision, "immediates")
        node, rest = entries[0], entries[1:]
        if node.kind is not NodeKind.DIR:
            return NodeEntry(kind=node.kind, revision=node.commit_revision)

        children = tuple(
            ChildEntry(
                name=unquote(entry.url.rsplit("/", 1)[-1]),
                kind=entry.kind,
                revision=entry.commit_revision,
                last_modified=entry.last_modified,
            )
            for entry in rest
            if entry.url != node.url
        )
        return NodeEntry(kind=NodeKind.DIR, revision=node.commit_revision, children=children)

    def check_path(self, path: str, revision: int) -> NodeKind:
        try:
            entries = self._info(path, revision, "empty")
        except NodeNotFoundError:
            return NodeKind.NONE
        return entries[0].kind

    def get_uuid(self) -> str:
        return self.uuid

    def relative_path(self, url: str) -> str:
        """Return ``url`` as a path relative to the repository root."""
        trimmed = url.rstrip("/")
        if trimmed != self.root_url and not trimmed.startswith(self.root_url + "/"):
            raise RemoteAccessError(f"{url} is not inside repository {self.root_url}")
        return join_path(unquote(trimmed[len(self.root_url):]))

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "SvnRepositoryView":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()


def _run_info(svn_binary: str, target: str, depth: str, timeout_seconds: float) -> list[_InfoEntry]:
    """Run ``svn info --xml`` and map failures onto branchscan errors."""
    args = [svn_binary, "info", "--xml", "--non-interactive", "--depth", depth, target]
    logger.debug("running %s", " ".join(args))
    try:
        proc = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except FileNotFoundError as exc:
        raise RemoteAccessError(f"svn client not found: {svn_binary}") from exc
    except subprocess.TimeoutExpired as exc:
        raise RemoteAccessError(f"svn info timed out after {timeout_seconds}s: {target}") from exc
    except OSError as exc:
        raise RemoteAccessError(f"could not run svn: {exc}") from exc

    if proc.returncode != 0:
        stderr = proc.stderr.strip()
        if _NOT_FOUND_RE.search(stderr):
            path, _, rev = target.rpartition("@")
            if not rev.isdigit():
                raise NodeNotFoundError(path or target, -1)
            raise NodeNotFoundError(path, int(rev))
        raise RemoteAccessError(stderr or f"svn info failed with exit status {proc.returncode}")
    return parse_info_xml(proc.stdout)


__all__ = [
    "DEFAULT_SVN_BINARY",
    "DEFAULT_TIMEOUT_SECONDS",
    "SvnRepositoryView",
    "parse_info_xml",
    "parse_svn_date",
]
