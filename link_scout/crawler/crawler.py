# === FILE: link_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from link_scout.config import CheckerConfig
from link_scout.crawler.classifier import classify
from link_scout.crawler.fetcher import Fetcher, FetchError, SleepT
from link_scout.crawler.frontier import FrontierState
from link_scout.crawler.link_extractor import fetch_hrefs
from link_scout.crawler.models import CheckResult, Failed, NormalizedUrl, result_for_status
from link_scout.crawler.normalizer import normalize_url, site_origin
from link_scout.logger import logger

__all__ = ("LinkChecker",)

ProgressT = Callable[[FrontierState], None]


class LinkChecker:
    """Breadth-first checker of every page and external link of one site.

    Pages are processed one at a time; only the validation batch of a single
    page runs concurrently. The frontier is touched exclusively by
    :meth:`crawl`, never by the fetch tasks.
    """

    def __init__(
        self,
        config: CheckerConfig,
        *,
        on_progress: Optional[ProgressT] = None,
        sleep: SleepT = asyncio.sleep,
    ) -> None:
        self.config = config
        root = normalize_url(config.base_url, config.base_url)
        if not isinstance(root, NormalizedUrl):
            raise ValueError(f"{config.base_url} is not a valid url: {root.error}")
        self.root: str = root.url
        self.origin = site_origin(self.root)
        self.on_progress = on_progress
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self._sleep = sleep

    async def __aenter__(self) -> LinkChecker:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers=self.config.headers,
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config, sleep=self._sleep)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> FrontierState:
        """Run until no pending page is left and return the final state."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        logger.info("Start checking: %s", self.root)
        state = FrontierState.seeded(self.root)
        self._progress(state)
        while state.pending_pages:
            await self._check_page(state)
            self._progress(state)
        logger.info(
            "Done: %d pages, %d external links, %d broken",
            len(state.visited_pages), len(state.visited_links), len(state.failures),
        )
        return state

    async def _check_page(self, state: FrontierState) -> None:
        assert self.fetcher is not None
        page = state.pending_pages.pop()
        logger.debug("Start checking %s, remaining %d", page, len(state.pending_pages))

        own_results: list[CheckResult] = []
        hrefs: Set[str] = set()
        base = page
        if page in state.unreachable:
            logger.debug("Skipping extraction of %s: already unreachable", page)
        else:
            try:
                page_data, hrefs = await fetch_hrefs(self.fetcher, page)
            except FetchError as exc:
                own_results.append(Failed(page, page, error=exc.error))
            else:
                base = page_data.final_url
                # the root is never part of a validation batch
                if page == self.root:
                    own_results.append(result_for_status(page, page, page_data.status))
        _log_items(hrefs, "hrefs")

        classification = classify(hrefs, page=page, base=base, origin=self.origin, state=state)
        _log_items(classification.new_pages, "new_pages")
        _log_items(classification.new_links, "new_links")

        results = await self.fetcher.check_batch(classification.batch, page)
        state.fold(page, classification, [*own_results, *results])
        logger.debug("End checking %s", page)

    def _progress(self, state: FrontierState) -> None:
        if self.on_progress is not None:
            self.on_progress(state)


def _log_items(items: Iterable[str], name: str) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    items = sorted(items)
    if items:
        logger.debug("%s (%d): %s", name, len(items), ", ".join(items))
    else:
        logger.debug("no %s", name)
