# link_scout/crawler/frontier.py
"""
Crawl state owned by the control loop: the pending-page queue and the visited sets.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, Iterable, Iterator, Set

from link_scout.crawler.models import CheckResult, Failed

if TYPE_CHECKING:
    from link_scout.crawler.classifier import Classification

__all__ = ("PageQueue", "FrontierState")


class PageQueue:
    """FIFO queue of page URLs with O(1) membership and no duplicates."""

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._order: Deque[str] = deque()
        self._members: Set[str] = set()
        for url in urls:
            self.push(url)

    def push(self, url: str) -> bool:
        """Enqueue *url*; return False if it is already pending."""
        if url in self._members:
            return False
        self._order.append(url)
        self._members.add(url)
        return True

    def pop(self) -> str:
        url = self._order.popleft()
        self._members.discard(url)
        return url

    def __contains__(self, url: object) -> bool:
        return url in self._members

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)


@dataclass(slots=True)
class FrontierState:
    """The four core collections of a run, plus ``unreachable``: the URLs whose
    check already failed at the transport level.

    ``pending_pages`` and ``visited_pages`` never overlap; a page moves from the
    first to the second exactly once, in :meth:`fold`.
    """

    pending_pages: PageQueue = field(default_factory=PageQueue)
    visited_pages: Set[str] = field(default_factory=set)
    visited_links: Set[str] = field(default_factory=set)
    results: Set[CheckResult] = field(default_factory=set)
    unreachable: Set[str] = field(default_factory=set)

    @classmethod
    def seeded(cls, root: str) -> FrontierState:
        return cls(pending_pages=PageQueue([root]))

    @property
    def failures(self) -> list[Failed]:
        return [r for r in self.results if isinstance(r, Failed)]

    def fold(
        self,
        page: str,
        classification: Classification,
        results: Iterable[CheckResult],
    ) -> None:
        """Merge the outcome of processing *page* into the state."""
        for result in results:
            self.results.add(result)
            if isinstance(result, Failed) and result.status is None:
                self.unreachable.add(result.url)
        for url in sorted(classification.new_pages):
            if url not in self.visited_pages:
                self.pending_pages.push(url)
        self.visited_links.update(classification.new_links)
        self.visited_pages.add(page)
