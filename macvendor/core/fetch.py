"""HTTP (and local file) fetching for registry sources."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, NamedTuple, Optional
from urllib.parse import unquote, urlsplit

import requests

from macvendor.config import DEFAULT_USER_AGENT
from macvendor.core.errors import NetworkError

logger = logging.getLogger(__name__)


class FetchResult(NamedTuple):
    content: bytes
    content_type: str | None = None


# fetch(url, params=None) -> FetchResult, raising NetworkError
Fetcher = Callable[..., FetchResult]


def is_local_source(url: str) -> bool:
    """True for ``file://`` URLs and plain filesystem paths."""
    scheme = urlsplit(url).scheme.lower()
    # Single-letter schemes are Windows drive letters
    return scheme in ("", "file") or len(scheme) == 1


def _local_path(url: str) -> Path:
    parts = urlsplit(url)
    if parts.scheme.lower() == "file":
        return Path(unquote(parts.path))
    return Path(url).expanduser()


def read_local(url: str) -> FetchResult:
    path = _local_path(url)
    try:
        return FetchResult(path.read_bytes(), None)
    except OSError as exc:
        raise NetworkError(url, str(exc)) from exc


class HttpFetcher:
    """Fetch collaborator backed by a ``requests.Session``."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    @classmethod
    def from_settings(cls, settings: Any) -> HttpFetcher:
        return cls(timeout=settings.timeout, user_agent=settings.user_agent)

    def __call__(self, url: str, params: dict[str, str] | None = None) -> FetchResult:
        return self.fetch(url, params=params)

    def fetch(self, url: str, params: dict[str, str] | None = None) -> FetchResult:
        if is_local_source(url):
            logger.debug("Reading local source %s", url)
            return read_local(url)

        logger.debug("Fetching %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(url, str(exc)) from exc

        return FetchResult(response.content, response.headers.get("Content-Type"))

    def close(self) -> None:
        self.session.close()
