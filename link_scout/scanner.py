# === FILE: link_scout/scanner.py ===
"""
Wrapper that runs one link check and times it.
"""
import time
from typing import Optional

from link_scout.aggregator import CheckReport, aggregate_results
from link_scout.config import CheckerConfig
from link_scout.crawler.crawler import LinkChecker, ProgressT


async def start_scan(cfg: CheckerConfig, on_progress: Optional[ProgressT] = None) -> CheckReport:
    """
    Run the LinkChecker inside its session context and aggregate the result.

    Parameters
    ----------
    cfg : CheckerConfig
        Checker configuration.
    on_progress : callable, optional
        Called with the FrontierState before the crawl and after every page.

    Returns
    -------
    CheckReport
        Pages, links and failures of the run, with the elapsed seconds.
    """
    start = time.monotonic()
    async with LinkChecker(cfg, on_progress=on_progress) as checker:
        state = await checker.crawl()
    return aggregate_results(state, elapsed=time.monotonic() - start)

__all__ = ["start_scan"]
