# File: link_scout/aggregator.py
"""link_scout.aggregator: turns the final crawl state into a CheckReport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from link_scout.crawler.frontier import FrontierState
from link_scout.crawler.models import Failed


@dataclass(slots=True)
class CheckReport:
    """Outcome of one run: pages crawled, links checked and broken URLs."""

    pages: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    failures: List[Failed] = field(default_factory=list)
    elapsed: Optional[float] = None

    @property
    def success(self) -> bool:
        return not self.failures


def aggregate_results(state: FrontierState, elapsed: Optional[float] = None) -> CheckReport:
    """Collect the sorted contents of *state* into a CheckReport."""
    failures = sorted(
        state.failures,
        key=lambda f: (f.url, f.page, f.status or 0, f.error or ""),
    )
    return CheckReport(
        pages=sorted(state.visited_pages),
        links=sorted(state.visited_links),
        failures=failures,
        elapsed=elapsed,
    )
