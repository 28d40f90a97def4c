"""Data types shared across the resolution pipeline."""

from __future__ import annotations

from enum import Enum
from urllib.parse import urlsplit

from pydantic import BaseModel, Field

# Canonical OUI form: "00-0D-93"
OuiKey = str

# Line 0 is the organization, remaining lines are the postal address.
VendorRecord = list[str]


class CompressionKind(str, Enum):
    NONE = "none"
    GZIP = "gzip"
    BZIP2 = "bzip2"
    XZ = "xz"


# Recognized filename suffixes (lowercase, with the dot)
_SUFFIXES: dict[str, CompressionKind] = {
    ".gz": CompressionKind.GZIP,
    ".gzip": CompressionKind.GZIP,
    ".bz2": CompressionKind.BZIP2,
    ".bzip2": CompressionKind.BZIP2,
    ".xz": CompressionKind.XZ,
    ".lzma": CompressionKind.XZ,
}


def compression_for(url: str) -> CompressionKind:
    """Infer the compression kind from the filename suffix of a URL or path."""
    path = urlsplit(url).path if "://" in url else url
    name = path.rsplit("/", 1)[-1].lower()
    for suffix, kind in _SUFFIXES.items():
        if name.endswith(suffix):
            return kind
    return CompressionKind.NONE


class SourceDescriptor(BaseModel):
    """A fetchable source and the compression its suffix implies."""

    url: str
    compression: CompressionKind = CompressionKind.NONE

    @classmethod
    def from_url(cls, url: str) -> SourceDescriptor:
        return cls(url=url, compression=compression_for(url))

    @property
    def is_compressed(self) -> bool:
        return self.compression is not CompressionKind.NONE


class Vendor(BaseModel):
    """A vendor record paired with its OUI, for display and export."""

    oui: OuiKey
    organization: str | None = None
    address: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, oui: OuiKey, record: VendorRecord) -> Vendor:
        if not record:
            return cls(oui=oui)
        return cls(oui=oui, organization=record[0], address=list(record[1:]))

    @property
    def lines(self) -> VendorRecord:
        """The record back in its line-sequence form."""
        if self.organization is None:
            return []
        return [self.organization, *self.address]
