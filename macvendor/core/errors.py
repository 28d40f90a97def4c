"""Exception hierarchy for vendor resolution."""

from __future__ import annotations


class MacVendorError(Exception):
    """Base exception for all vendor-resolution errors."""


class FormatError(MacVendorError, ValueError):
    """Raised when a MAC address cannot be normalized to an OUI."""

    def __init__(self, value: str, reason: str = "") -> None:
        self.value = value
        message = f"Could not normalize MAC [{value}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NetworkError(MacVendorError):
    """Raised when fetching a source fails at the transport level."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        super().__init__(f"Failed to fetch {url}" + (f": {reason}" if reason else ""))


class NotFoundError(MacVendorError, LookupError):
    """Raised when every source was consulted and none had data for an OUI."""

    def __init__(self, oui: str) -> None:
        self.oui = oui
        super().__init__(f"No vendor data found for OUI {oui}")


class UnsupportedEncodingError(MacVendorError):
    """Raised when a payload with a recognized compression suffix is corrupt."""

    def __init__(self, url: str, compression: str, reason: str = "") -> None:
        self.url = url
        self.compression = compression
        message = f"Could not decompress {compression} data from {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
