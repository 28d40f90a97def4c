"""Transparent decompression of fetched registry data, keyed by URL suffix."""

from __future__ import annotations

import bz2
import gzip
import logging
import lzma
import zlib
from typing import Callable

from macvendor.core.errors import UnsupportedEncodingError
from macvendor.core.models import CompressionKind, SourceDescriptor

logger = logging.getLogger(__name__)

Decompressor = Callable[[bytes], bytes]

_DECOMPRESSORS: dict[CompressionKind, Decompressor] = {
    CompressionKind.GZIP: gzip.decompress,
    CompressionKind.BZIP2: bz2.decompress,
    CompressionKind.XZ: lzma.decompress,
}

_DECOMPRESS_ERRORS = (OSError, EOFError, ValueError, zlib.error, lzma.LZMAError)


def register_decompressor(kind: CompressionKind, func: Decompressor) -> None:
    """Install or replace the decompressor used for ``kind``."""
    _DECOMPRESSORS[kind] = func


def decompress(data: bytes, source_url: str) -> bytes:
    """Decompress ``data`` according to the suffix of ``source_url``.

    Unrecognized suffixes mean no compression and the data is returned
    unchanged.
    """
    source = SourceDescriptor.from_url(source_url)
    func = _DECOMPRESSORS.get(source.compression)
    if func is None:
        return data

    logger.debug("Decompressing %d bytes of %s data from %s", len(data), source.compression.value, source_url)
    try:
        return func(data)
    except _DECOMPRESS_ERRORS as exc:
        raise UnsupportedEncodingError(source_url, source.compression.value, str(exc)) from exc
