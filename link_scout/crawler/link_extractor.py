# link_scout/crawler/link_extractor.py
"""
Link extraction for LinkScout: raw ``href`` values of every anchor on a page.
"""
from __future__ import annotations

from typing import Set, Tuple

from bs4 import BeautifulSoup, SoupStrainer
from bs4.element import Tag

from link_scout.crawler.fetcher import Fetcher
from link_scout.crawler.models import PageData

__all__ = ("extract_hrefs", "fetch_hrefs")

# only <a> tags are parsed; the rest of the document is skipped
ANCHOR_STRAINER = SoupStrainer("a")


def extract_hrefs(markup: str) -> Set[str]:
    """
    Return the set of raw href values of all ``<a>`` elements in *markup*.

    Anchors without a usable href contribute ``""``; filtering is left to the
    classifier.
    """
    soup = BeautifulSoup(markup, "html.parser", parse_only=ANCHOR_STRAINER)
    hrefs: Set[str] = set()
    for tag in soup.find_all("a"):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        hrefs.add(href_val if isinstance(href_val, str) else "")
    return hrefs


async def fetch_hrefs(fetcher: Fetcher, url: str) -> Tuple[PageData, Set[str]]:
    """Fetch *url* through *fetcher*; return the page and its hrefs.

    Raises :class:`~link_scout.crawler.fetcher.FetchError` if the page cannot
    be downloaded.
    """
    page = await fetcher.fetch_page(url)
    if not page.content:
        return page, set()
    return page, extract_hrefs(page.content)
