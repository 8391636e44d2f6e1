# link_scout/crawler/normalizer.py
"""
URL normalization: resolve a raw ``href`` against the page it was found on.
"""
from __future__ import annotations

from typing import Tuple
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from link_scout.crawler.models import MalformedReference, NormalizedUrl, ResolvedReference

__all__ = ("normalize_url", "site_origin", "is_same_origin", "is_http_url")

Origin = Tuple[str, str]

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _netloc(parts: SplitResult) -> str:
    """Lower-cased netloc of *parts* without the scheme's default port."""
    netloc = parts.netloc.lower()
    port = parts.port
    if port is not None and port == _DEFAULT_PORTS.get(parts.scheme.lower()):
        netloc = netloc.rsplit(":", 1)[0]
    return netloc


def normalize_url(href: str, base: str) -> ResolvedReference:
    """
    Resolve *href* against *base* (RFC 3986) and canonicalise the result.

    Lower-cases scheme and host, drops a default port (80 for http, 443 for
    https) and the fragment, and strips one trailing slash, so
    ``http://x:80/y/`` and ``http://x/y`` compare equal. Never raises:
    unparsable input comes back as :class:`MalformedReference`.
    """
    raw = href.strip()
    try:
        parts = urlsplit(urljoin(base, raw))
        netloc = _netloc(parts)
    except ValueError as exc:
        return MalformedReference(reference=href, error=str(exc))

    url = urlunsplit((parts.scheme.lower(), netloc, parts.path, parts.query, ""))
    if url.endswith("/"):
        url = url[:-1]
    return NormalizedUrl(url)


def site_origin(url: str) -> Origin:
    """Return ``(scheme, netloc)`` of *url*, lower-cased and without a default port."""
    parts = urlsplit(url)
    return parts.scheme.lower(), _netloc(parts)


def is_same_origin(url: str, origin: Origin) -> bool:
    """True if *url* has exactly *origin*'s scheme, host and port."""
    try:
        return site_origin(url) == origin
    except ValueError:
        return False


def is_http_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))
