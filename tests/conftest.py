# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web

from link_scout.config import CheckerConfig
from link_scout.logger import setup_logging


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner swaps stdout; drop handlers bound to it after each test."""
    yield
    setup_logging()


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def make_config() -> Callable[..., CheckerConfig]:
    """
    Return a factory for fast CheckerConfig objects: no pacing, tiny backoff.
    """

    def _make(base_url: str, **overrides: Any) -> CheckerConfig:
        params: dict[str, Any] = dict(
            base_url=base_url,
            timeout=2.0,
            pacing_min=0.0,
            pacing_max=0.0,
            backoff_base=0.01,
            backoff_jitter=0.0,
            max_attempts=3,
        )
        params.update(overrides)
        return CheckerConfig(**params)

    return _make


@pytest_asyncio.fixture
async def serve_app(
    unused_tcp_port_factory: Callable[[], int],
) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free local ports; yields ``start(app) -> base URL``."""
    runners: list[web.AppRunner] = []

    async def start(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    try:
        yield start
    finally:
        for runner in runners:
            await runner.cleanup()

