# link_scout/crawler/fetcher.py
"""
Fetcher module: HTTP requests with bounded concurrency, pacing, retry/backoff and timeout.
"""
from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, Iterable, List

from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

from link_scout.config import CheckerConfig
from link_scout.crawler.models import CheckResult, Failed, PageData, result_for_status
from link_scout.logger import logger

__all__ = ("Fetcher", "FetchError")

SleepT = Callable[[float], Awaitable[None]]


class FetchError(Exception):
    """Raised when every attempt to reach *url* failed at the transport level."""

    def __init__(self, url: str, attempts: int, error: str) -> None:
        super().__init__(f"{url}: {error} (after {attempts} attempt(s))")
        self.url = url
        self.attempts = attempts
        self.error = error


def _describe(exc: BaseException, timeout: float) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return f"timeout after {timeout:g}s"
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


class Fetcher:
    """Shared HTTP front-end for page extraction and URL validation.

    At most ``config.concurrency`` requests are in flight at once. Transport
    failures are retried with exponential backoff; HTTP statuses never are.
    Instances hold no crawl state, so ``check`` can run concurrently.
    """

    def __init__(
        self,
        session: ClientSession,
        config: CheckerConfig,
        sleep: SleepT = asyncio.sleep,
    ) -> None:
        self.session = session
        self.config = config
        self._sleep = sleep
        self._slots = asyncio.Semaphore(config.concurrency)

    async def check(self, url: str, page: str) -> CheckResult:
        """Validate *url* (found on *page*) and return its CheckResult."""
        try:
            response = await self._request(url, read_body=False)
        except FetchError as exc:
            return Failed(url, page, error=exc.error)
        result = result_for_status(url, page, response.status)
        if isinstance(result, Failed):
            logger.debug("ERROR %s: %s", url, result.reason)
        else:
            logger.debug("%s: success %d", url, response.status)
        return result

    async def check_batch(self, urls: Iterable[str], page: str) -> List[CheckResult]:
        """Validate all *urls* concurrently; order of results follows *urls*."""
        return list(await asyncio.gather(*(self.check(url, page) for url in urls)))

    async def fetch_page(self, url: str) -> PageData:
        """Download *url* with the same retry policy as ``check``.

        Raises :class:`FetchError` once all attempts are exhausted.
        """
        return await self._request(url, read_body=True)

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after failed attempt number *attempt* (1-based)."""
        exp = min(self.config.backoff_max, self.config.backoff_base * 2 ** (attempt - 1))
        return exp + random.uniform(0, self.config.backoff_jitter)

    async def _pace(self) -> None:
        if self.config.pacing_max > 0:
            await self._sleep(random.uniform(self.config.pacing_min, self.config.pacing_max))

    async def _request(self, url: str, *, read_body: bool) -> PageData:
        timeout = self.config.timeout_for(url)
        max_attempts = self.config.max_attempts
        attempt = 0
        while True:
            attempt += 1
            try:
                async with self._slots:
                    await self._pace()
                    async with self.session.get(
                        url,
                        timeout=ClientTimeout(total=timeout),
                        allow_redirects=self.config.follow_redirects,
                    ) as resp:
                        content = ""
                        if read_body:
                            ctype = resp.headers.get("Content-Type", "text/html").lower()
                            if "html" in ctype:
                                content = await resp.text(errors="replace")
                        return PageData(url, resp.status, content, final_url=str(resp.url))
            except (InvalidURL, ValueError) as exc:
                raise FetchError(url, attempt, _describe(exc, timeout)) from exc
            except (ClientError, asyncio.TimeoutError) as exc:
                error = _describe(exc, timeout)
                if attempt >= max_attempts:
                    logger.warning("Giving up on %s after %d attempt(s): %s", url, attempt, error)
                    raise FetchError(url, attempt, error) from exc
                delay = self.backoff_delay(attempt)
                logger.debug(
                    "Retry %d/%d for %s after %.2f s (%s)", attempt, max_attempts - 1, url, delay, error
                )
                await self._sleep(delay)
