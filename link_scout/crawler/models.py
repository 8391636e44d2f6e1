# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

#: statuses counted as a successful check; redirects are followed before classifying
HEALTHY_STATUS = range(200, 300)


@dataclass(frozen=True, slots=True)
class NormalizedUrl:
    """Canonical absolute URL produced by the normalizer."""

    url: str


@dataclass(frozen=True, slots=True)
class MalformedReference:
    """A reference that could not be resolved; carries the parser error."""

    reference: str
    error: str


@dataclass(slots=True)
class PageData:
    """Fetched page: final status and HTML body (empty for non-HTML responses).

    ``final_url`` is where redirects ended; relative hrefs resolve against it.
    """

    url: str
    status: int
    content: str
    final_url: str = ""

    def __post_init__(self) -> None:
        if not self.final_url:
            self.final_url = self.url


@dataclass(frozen=True, slots=True)
class Ok:
    url: str


@dataclass(frozen=True, slots=True)
class Failed:
    """A broken URL found on *page*: either a bad *status* or a transport *error*."""

    url: str
    page: str
    status: Optional[int] = None
    error: Optional[str] = None

    @property
    def reason(self) -> str:
        if self.status is not None:
            return f"status {self.status}"
        return f"error: {self.error}"

    def __str__(self) -> str:
        return f"{self.url} on {self.page} gave {self.reason}"


CheckResult = Union[Ok, Failed]
ResolvedReference = Union[NormalizedUrl, MalformedReference]


def result_for_status(url: str, page: str, status: int) -> CheckResult:
    """Map a received HTTP status onto a check result."""
    if status in HEALTHY_STATUS:
        return Ok(url)
    return Failed(url, page, status=status)
