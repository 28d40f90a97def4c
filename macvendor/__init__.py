"""Resolve MAC addresses to the vendor that registered their OUI."""

from macvendor.core.cache import CacheStore, JsonFileCacheStore, MemoryCacheStore
from macvendor.core.compression import decompress
from macvendor.core.errors import (
    FormatError,
    MacVendorError,
    NetworkError,
    NotFoundError,
    UnsupportedEncodingError,
)
from macvendor.core.models import SourceDescriptor, Vendor
from macvendor.core.normalize import normalize_mac
from macvendor.core.parser import extract_oui_from_html, parse_oui, split_records
from macvendor.core.resolver import VendorResolver

__version__ = "1.0.0"

normalize = normalize_mac

__all__ = [
    "CacheStore",
    "FormatError",
    "JsonFileCacheStore",
    "MacVendorError",
    "MemoryCacheStore",
    "NetworkError",
    "NotFoundError",
    "SourceDescriptor",
    "UnsupportedEncodingError",
    "Vendor",
    "VendorResolver",
    "decompress",
    "extract_oui_from_html",
    "normalize",
    "normalize_mac",
    "parse_oui",
    "split_records",
]
