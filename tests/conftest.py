"""Shared fixtures and registry samples for the macvendor tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from macvendor.config import Settings, get_settings
from macvendor.core.cache import MemoryCacheStore
from macvendor.core.errors import NetworkError
from macvendor.core.fetch import FetchResult
from macvendor.core.resolver import VendorResolver

APPLE_BLOCK = (
    "00-03-93   (hex)        Apple Computer, Inc.\n"
    "000393     (base 16)    Apple Computer, Inc.\n"
    "                         20650 Valley Green Dr.\n"
    "                         Cupertino CA 95014\n"
    "                         UNITED STATES\n"
)

APPLE_RECORD = [
    "Apple Computer, Inc.",
    "20650 Valley Green Dr.",
    "Cupertino CA 95014",
    "UNITED STATES",
]

REGISTRY_DUMP = (
    "OUI/MA-L                                                    Organization                                 \n"
    "company_id                                                  Organization                                 \n"
    "                                                            Address                                      \n"
    "\n"
    + APPLE_BLOCK
    + "\n"
    "00-0D-93   (hex)\t\tApple Computer\n"
    "000D93     (base 16)\t\tApple Computer\n"
    "\t\t\t\t1 Infinite Loop\n"
    "\t\t\t\tCupertino CA 95014\n"
    "\t\t\t\tUS\n"
    "\n"
    "00-50-C2   (hex)\t\tIEEE REGISTRATION AUTHORITY\n"
    "0050C2     (base 16)\t\tIEEE REGISTRATION AUTHORITY\n"
    "\t\t\t\t445 Hoes Lane\n"
    "\t\t\t\tPiscataway NJ 08854\n"
    "\t\t\t\tUS\n"
    "\n"
    "3C-D9-2B   (hex)\t\tPrivate\n"
    "3CD92B     (base 16)\t\tPrivate\n"
    "\n"
)

SEARCH_PAGE = """<!DOCTYPE html>
<html>
<head><title>IEEE-SA - Registration Authority</title></head>
<body class="results">
  <h1>Search results</h1>
  <p>Here are the results of your search through the public section of the IEEE Standards OUI database report for <b>00-0D-93</b>:</p>
  <hr>
  <p><pre style="font-family: monospace">
<b>00-0D-93</b>   (hex)\t\tApple Computer
000D93     (base 16)\t\tApple Computer
\t\t\t\t1 Infinite Loop
\t\t\t\tCupertino CA 95014
\t\t\t\tUNITED STATES
</pre></p>
  <hr>
</body>
</html>
"""

APPLE_0D93 = ["Apple Computer", "1 Infinite Loop", "Cupertino CA 95014", "UNITED STATES"]

EMPTY_SEARCH_PAGE = """<html><body>
  <p>Sorry! <b>AA-BB-CC</b> was not found in the public listing.</p>
</body></html>
"""


class FakeFetcher:
    """Fetch callable serving canned responses and recording every request."""

    def __init__(self, responses: dict | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, dict | None]] = []

    def __call__(self, url: str, params: dict | None = None) -> FetchResult:
        self.calls.append((url, params))
        response = self.responses.get(url)
        if response is None:
            raise NetworkError(url, "connection refused")
        if isinstance(response, Exception):
            raise response
        if isinstance(response, FetchResult):
            return response
        if isinstance(response, str):
            response = response.encode("utf-8")
        return FetchResult(response, None)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's home config and MACVENDOR_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    for name in (
        "MACVENDOR_OUI_URL",
        "MACVENDOR_OUI_SOURCE",
        "MACVENDOR_SEARCH_URL",
        "MACVENDOR_TIMEOUT",
        "MACVENDOR_USER_AGENT",
        "MACVENDOR_LOG_LEVEL",
        "MACVENDOR_CACHE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def cache() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def resolver(cache, fetcher, settings) -> VendorResolver:
    return VendorResolver(cache=cache, fetcher=fetcher, settings=settings)
