# === FILE: link_scout/config.py ===
"""
Loading and validation of the LinkScout checker configuration.
Pydantic describes the schema and validates the data.
"""
from __future__ import annotations

import errno
import json
import os
import re
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, Union
from urllib.parse import urlsplit

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

__all__ = ["CheckerConfig", "DEFAULT_HEADERS", "load_config", "validate_base_url"]

_BASE_URL_RE = re.compile(r"^https?://[0-9A-Za-z.:/_-]+$")

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:108.0) Gecko/20100101 Firefox/108.0"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "nl,en-US;q=0.7,en;q=0.3",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


def validate_base_url(url: str) -> str:
    """Return *url* unchanged if it looks like an absolute http(s) URL, else raise ValueError."""
    if not _BASE_URL_RE.match(url):
        raise ValueError(f"{url} is not a valid url.")
    return url


class CheckerConfig(BaseModel):
    """Configuration for a single link-check run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Root URL of the site under test.")
    timeout: float = Field(30.0, gt=0, description="Per-request timeout (seconds).")
    host_timeouts: Dict[str, float] = Field(
        default_factory=dict,
        description="Host pattern (fnmatch) -> timeout override for known-slow hosts.",
    )
    concurrency: int = Field(5, ge=1, description="Max requests in flight.")
    max_attempts: int = Field(5, ge=1, description="Attempts per URL on transport failure.")
    backoff_base: float = Field(2.0, ge=0, description="First retry delay (seconds).")
    backoff_jitter: float = Field(2.0, ge=0, description="Upper bound of random jitter added to a retry delay.")
    backoff_max: float = Field(60.0, ge=0, description="Cap on the exponential part of a retry delay.")
    pacing_min: float = Field(0.2, ge=0, description="Min random delay before each request.")
    pacing_max: float = Field(0.5, ge=0, description="Max random delay before each request.")
    follow_redirects: bool = Field(True, description="Follow 3xx responses before classifying the status.")
    headers: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        description="Headers sent with every request.",
    )

    @field_validator("base_url", mode="before")
    def _check_base_url(cls, v: Any) -> Any:
        if not isinstance(v, str):
            raise ValueError("base_url must be a string")
        return validate_base_url(v).rstrip("/")

    @field_validator("host_timeouts")
    def _check_host_timeouts(cls, v: Dict[str, float]) -> Dict[str, float]:
        bad = [pattern for pattern, seconds in v.items() if seconds <= 0]
        if bad:
            raise ValueError(f"host timeout must be > 0 for: {', '.join(bad)}")
        return v

    @model_validator(mode="after")
    def _check_pacing(self) -> CheckerConfig:
        if self.pacing_min > self.pacing_max:
            raise ValueError("pacing_min must not exceed pacing_max")
        return self

    def timeout_for(self, url: str) -> float:
        """Timeout for *url*: the first matching host pattern wins, otherwise ``timeout``."""
        host = (urlsplit(url).hostname or "").lower()
        for pattern, seconds in self.host_timeouts.items():
            if fnmatch(host, pattern.lower()):
                return seconds
        return self.timeout


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CheckerConfig:
    """
    Read YAML or JSON and return a validated CheckerConfig.

    Without *path* the default config is used if present, otherwise built-in
    defaults. Keyword *overrides* (e.g. ``base_url`` from the command line) win
    over file values.
    """
    data: dict[str, Any] = {}
    if path is None:
        path_obj = _DEFAULT_CFG if _DEFAULT_CFG.is_file() else None
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    if path_obj is not None:
        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CheckerConfig(**data)
