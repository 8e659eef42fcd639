"""Stock acceptance criteria for candidate heads."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .crawler import Criteria, Probe


@dataclass(frozen=True)
class RequiredPathsCriteria:
    """Accept a candidate only when marker paths exist beneath it.

    ``match="all"`` needs every path, ``match="any"`` needs at least one. An
    empty path list accepts everything.
    """

    paths: tuple[str, ...]
    match: str = "all"

    def __post_init__(self) -> None:
        if self.match not in ("all", "any"):
            raise ValueError(f"match must be 'all' or 'any', not {self.match!r}")

    def is_head(self, probe: Probe, log: logging.Logger) -> bool:
        if not self.paths:
            return True
        for path in self.paths:
            found = probe.exists(path)
            log.debug("%s: %s %s", probe.name, path, "found" if found else "missing")
            if found and self.match == "any":
                return True
            if not found and self.match == "all":
                return False
        return self.match == "all"


@dataclass(frozen=True)
class AllOfCriteria:
    """Accept a candidate only when every member criteria accepts it."""

    members: tuple[Criteria, ...]

    @classmethod
    def of(cls, members: Iterable[Criteria | None]) -> "AllOfCriteria":
        return cls(tuple(member for member in members if member is not None))

    def is_head(self, probe: Probe, log: logging.Logger) -> bool:
        return all(member.is_head(probe, log) for member in self.members)


__all__ = [
    "RequiredPathsCriteria",
    "AllOfCriteria",
]
