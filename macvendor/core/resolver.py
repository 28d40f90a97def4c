"""Vendor resolution: cache, then custom source, then the IEEE registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, Union

from macvendor.config import Settings, get_settings
from macvendor.core.cache import CacheStore, MemoryCacheStore
from macvendor.core.compression import decompress
from macvendor.core.errors import (
    MacVendorError,
    NetworkError,
    NotFoundError,
    UnsupportedEncodingError,
)
from macvendor.core.fetch import Fetcher, HttpFetcher
from macvendor.core.models import OuiKey, VendorRecord
from macvendor.core.normalize import normalize_mac
from macvendor.core.parser import extract_oui_from_html, parse_oui, split_records

logger = logging.getLogger(__name__)

Sink = Union[str, Path, IO[bytes]]

# Registry search parameters for the 24-bit (MA-L) assignments
_SEARCH_REGISTRY = "MA-L"


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _looks_like_html(text: str, content_type: str | None) -> bool:
    if content_type and "html" in content_type.lower():
        return True
    head = text[:1024].lower()
    return "<html" in head or "<pre" in head or "<!doctype" in head


def _write_sink(dest: Sink, data: bytes) -> None:
    if isinstance(dest, (str, Path)):
        path = Path(dest).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    else:
        dest.write(data)


class VendorResolver:
    """Resolves MAC addresses to vendor records.

    Lookups consult the cache first and only go to the network on a miss.
    Successful fetches are written through to the cache. The cache and
    the fetch callable are injected so callers can swap either one.
    """

    def __init__(
        self,
        cache: CacheStore | None = None,
        fetcher: Fetcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else MemoryCacheStore()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or HttpFetcher.from_settings(self.settings)

    def close(self) -> None:
        """Release the HTTP session if this resolver created it."""
        if self._owns_fetcher:
            self.fetcher.close()

    def __enter__(self) -> VendorResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Cache hooks
    # ------------------------------------------------------------------

    def add_to_cache(self, key: OuiKey, record: VendorRecord) -> None:
        self.cache.put(key, record)

    def get_from_cache(self, key: OuiKey) -> VendorRecord | None:
        return self.cache.get(key)

    def get_cache_hash(self) -> dict[OuiKey, VendorRecord]:
        """Snapshot of the whole cache as a plain dict."""
        return dict(self.cache.items())

    # ------------------------------------------------------------------
    # Single lookups
    # ------------------------------------------------------------------

    def lookup(self, mac: str, source: str | None = None) -> VendorRecord:
        """Return the vendor record for ``mac``.

        Raises:
            FormatError: ``mac`` cannot be normalized.
            NetworkError: the registry could not be reached and no other
                source had data.
            NotFoundError: every source answered but none had the OUI.
        """
        oui = normalize_mac(mac)

        record = self.fetch_oui_from_cache(oui)
        if record is not None:
            return record

        source = source or self.settings.oui_source
        if source:
            try:
                record = self.fetch_oui_from_custom(oui, source)
            except (NetworkError, UnsupportedEncodingError) as exc:
                logger.warning("Custom source failed for %s, trying registry: %s", oui, exc)
            else:
                if record:
                    return record
                logger.debug("Custom source %s has no record for %s", source, oui)

        record = self.fetch_oui_from_ieee(oui)
        if record:
            return record

        raise NotFoundError(oui)

    fetch_oui = lookup

    def fetch_oui_from_cache(self, mac: str) -> VendorRecord | None:
        oui = normalize_mac(mac)
        record = self.cache.get(oui)
        if record is None:
            logger.debug("Cache miss for %s", oui)
        else:
            logger.debug("Cache hit for %s", oui)
        return record

    def fetch_oui_from_custom(self, mac: str, source: str | None = None) -> VendorRecord:
        """Fetch ``mac``'s record from an operator-supplied source.

        The source may hold a single record, a full dump, or a search
        page, optionally compressed. A ``{oui}`` placeholder in the URL is
        replaced by the OUI key. Returns an empty record when the source
        has nothing for this OUI.
        """
        oui = normalize_mac(mac)
        source = source or self.settings.oui_source
        if not source:
            return []

        url = source.replace("{oui}", oui)
        result = self.fetcher(url)
        text = _decode(decompress(result.content, url))

        if _looks_like_html(text, result.content_type):
            extracted = extract_oui_from_html(text, oui)
            if not extracted:
                return []
            record = parse_oui(extracted)
        else:
            blocks = dict(split_records(text))
            if blocks:
                record = parse_oui(blocks.get(oui, ""))
            else:
                record = parse_oui(text)

        if record:
            self.cache.put(oui, record)
        return record

    def fetch_oui_from_ieee(self, mac: str) -> VendorRecord:
        """Fetch ``mac``'s record from the registry's search endpoint.

        Returns an empty record when the page has no entry for the OUI.
        """
        oui = normalize_mac(mac)
        url = self.settings.search_url
        result = self.fetcher(url, params={"registry": _SEARCH_REGISTRY, "text": oui})

        extracted = extract_oui_from_html(_decode(result.content), oui)
        if not extracted:
            return []

        record = parse_oui(extracted)
        if record:
            self.cache.put(oui, record)
        return record

    def lookup_many(self, macs: Iterable[str]) -> dict[str, VendorRecord | MacVendorError]:
        """Look up several addresses, collecting failures instead of raising."""
        results: dict[str, VendorRecord | MacVendorError] = {}
        for mac in macs:
            try:
                results[mac] = self.lookup(mac)
            except MacVendorError as exc:
                results[mac] = exc
        return results

    # ------------------------------------------------------------------
    # Bulk population
    # ------------------------------------------------------------------

    def load_cache(self, source: str | None = None, dest: Sink | None = None) -> int | None:
        """Populate the cache from a full registry dump.

        ``source`` defaults to the configured OUI URL and may also be a
        local path. If ``dest`` is given, the raw fetched bytes are saved
        there. Returns the number of records loaded, or ``None`` when the
        dump could not be fetched or decompressed.
        """
        source = source or self.settings.oui_url

        try:
            raw = self.fetcher(source).content
        except NetworkError as exc:
            logger.warning("Could not load OUI data from %s: %s", source, exc)
            return None

        if dest is not None:
            try:
                _write_sink(dest, raw)
            except OSError as exc:
                logger.warning("Could not save OUI data to %s: %s", dest, exc)

        try:
            data = decompress(raw, source)
        except UnsupportedEncodingError as exc:
            logger.warning("Could not load OUI data from %s: %s", source, exc)
            return None

        loaded = skipped = 0
        for oui, block in split_records(_decode(data)):
            record = parse_oui(block)
            if not record or not record[0]:
                logger.debug("Skipping malformed record for %s", oui)
                skipped += 1
                continue
            self.cache.put(oui, record)
            loaded += 1

        if skipped:
            logger.warning("Skipped %d malformed records from %s", skipped, source)
        if not loaded:
            logger.warning("No OUI records found in %s", source)
        logger.info("Loaded %d OUI records from %s", loaded, source)
        return loaded
