# link_scout/crawler/classifier.py
"""
Partition the hrefs of one page into new internal pages and new external links.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set

from link_scout.crawler.frontier import FrontierState
from link_scout.crawler.models import MalformedReference
from link_scout.crawler.normalizer import Origin, is_http_url, is_same_origin, normalize_url
from link_scout.logger import logger

__all__ = ("Classification", "classify")


@dataclass(frozen=True, slots=True)
class Classification:
    new_pages: frozenset[str]
    new_links: frozenset[str]

    @property
    def batch(self) -> list[str]:
        """Pages then links, each sorted, as one validation batch."""
        return sorted(self.new_pages) + sorted(self.new_links)


def classify(
    hrefs: Iterable[str],
    *,
    page: str,
    origin: Origin,
    state: FrontierState,
    base: Optional[str] = None,
) -> Classification:
    """
    Split *hrefs* found on *page* into pages and links not seen before.

    References resolve against *base* (where a redirect from *page* ended),
    defaulting to *page* itself.

    A page shares the site's *origin* (or carries no scheme at all); a link is
    any other http(s) URL. Everything else (``mailto:``, ``javascript:``,
    malformed references, the page itself) is dropped.
    """
    new_pages: Set[str] = set()
    new_links: Set[str] = set()
    for href in hrefs:
        resolved = normalize_url(href, base or page)
        if isinstance(resolved, MalformedReference):
            logger.debug("Discarding malformed reference %r on %s: %s", href, page, resolved.error)
            continue
        url = resolved.url
        if not url or url == page:
            continue
        if is_same_origin(url, origin) or ":" not in url:
            if url not in state.visited_pages and url not in state.pending_pages:
                new_pages.add(url)
        elif is_http_url(url):
            if url not in state.visited_links:
                new_links.add(url)
    return Classification(frozenset(new_pages), frozenset(new_links))
