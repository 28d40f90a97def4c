"""Tests for macvendor.core.compression and source descriptors."""

from __future__ import annotations

import bz2
import gzip
import lzma

import pytest
from conftest import APPLE_BLOCK

from macvendor.core.compression import decompress, register_decompressor
from macvendor.core.errors import UnsupportedEncodingError
from macvendor.core.models import CompressionKind, SourceDescriptor

DATA = APPLE_BLOCK.encode("utf-8")


class TestSourceDescriptor:
    @pytest.mark.parametrize(
        "url, kind",
        [
            ("https://example.test/oui.txt", CompressionKind.NONE),
            ("https://example.test/oui.txt.gz", CompressionKind.GZIP),
            ("https://example.test/OUI.TXT.GZ", CompressionKind.GZIP),
            ("https://example.test/oui.txt.bz2", CompressionKind.BZIP2),
            ("https://example.test/oui.txt.xz", CompressionKind.XZ),
            ("https://example.test/oui.txt.gz?version=2#top", CompressionKind.GZIP),
            ("https://example.test/oui.gz/download", CompressionKind.NONE),
            ("/var/cache/oui.txt.bz2", CompressionKind.BZIP2),
            ("https://example.test/oui.zip", CompressionKind.NONE),
        ],
    )
    def test_kind_from_suffix(self, url, kind):
        source = SourceDescriptor.from_url(url)
        assert source.compression is kind
        assert source.is_compressed is (kind is not CompressionKind.NONE)


class TestDecompress:
    @pytest.mark.parametrize(
        "url, compress",
        [
            ("https://example.test/oui.txt.gz", gzip.compress),
            ("https://example.test/oui.txt.bz2", bz2.compress),
            ("https://example.test/oui.txt.xz", lzma.compress),
        ],
    )
    def test_recognized_suffixes(self, url, compress):
        assert decompress(compress(DATA), url) == DATA

    def test_plain_passes_through(self):
        assert decompress(DATA, "https://example.test/oui.txt") == DATA

    def test_unrecognized_suffix_passes_through(self):
        payload = b"PK\x03\x04 not really a zip"
        assert decompress(payload, "https://example.test/oui.zip") == payload

    @pytest.mark.parametrize("url", ["https://example.test/oui.txt.gz", "https://example.test/oui.txt.bz2"])
    def test_corrupt_payload_raises(self, url):
        with pytest.raises(UnsupportedEncodingError) as excinfo:
            decompress(b"definitely not compressed", url)
        assert excinfo.value.url == url

    def test_truncated_gzip_raises(self):
        with pytest.raises(UnsupportedEncodingError):
            decompress(gzip.compress(DATA)[:-10], "oui.txt.gz")

    def test_register_decompressor(self, monkeypatch):
        from macvendor.core import compression

        monkeypatch.setattr(compression, "_DECOMPRESSORS", dict(compression._DECOMPRESSORS))
        register_decompressor(CompressionKind.XZ, lambda data: data.upper())
        assert decompress(b"abc", "oui.txt.xz") == b"ABC"
