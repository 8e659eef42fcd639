"""Stock observers that receive discovered heads."""

from __future__ import annotations

from .crawler import CandidateHead


class CollectingObserver:
    """Collect every head, keyed by name in discovery order."""

    def __init__(self) -> None:
        self.heads: dict[str, CandidateHead] = {}

    def observe(self, head: CandidateHead, revision: int) -> None:
        self.heads[head.name] = head

    def is_observing(self) -> bool:
        return True

    def result(self) -> list[CandidateHead]:
        return list(self.heads.values())


class LimitObserver(CollectingObserver):
    """Collect heads until ``limit`` have been seen, then stop the crawl."""

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        super().__init__()
        self.limit = limit

    def is_observing(self) -> bool:
        return len(self.heads) < self.limit


class HeadSelectingObserver:
    """Wait for one named head and stop the crawl as soon as it shows up."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.head: CandidateHead | None = None

    def observe(self, head: CandidateHead, revision: int) -> None:
        if head.name == self.name:
            self.head = head

    def is_observing(self) -> bool:
        return self.head is None


__all__ = [
    "CollectingObserver",
    "LimitObserver",
    "HeadSelectingObserver",
]
