"""Parsing of registry OUI records, plain text or embedded in a search page."""

from __future__ import annotations

import html
import logging
import re
from html.parser import HTMLParser
from typing import Iterator

from macvendor.core.models import OuiKey, VendorRecord

logger = logging.getLogger(__name__)

_TAGS = re.compile(r"</?b\s*>", re.IGNORECASE)
# "00-0D-93   (hex)" and "000D93     (base 16)" columns in front of the vendor name
_HEX_COLUMN = re.compile(r"^[0-9A-F]{2}-[0-9A-F]{2}-[0-9A-F]{2}\s*\(hex\)\s*", re.IGNORECASE)
_BASE16_COLUMN = re.compile(r"^[0-9A-F]{6}\s*\(base 16\)\s*", re.IGNORECASE)
_HEADER = re.compile(
    r"^\s*(?P<oui>[0-9A-F]{2}-[0-9A-F]{2}-[0-9A-F]{2})\s+\(hex\)", re.IGNORECASE
)


def _strip_boilerplate(line: str) -> str:
    line = _HEX_COLUMN.sub("", line)
    return _BASE16_COLUMN.sub("", line)


def parse_oui(text: str) -> VendorRecord:
    """Parse one registry record block into a vendor record.

    The block's first line repeats the OUI in hex notation and is dropped;
    the ``(base 16)`` line that follows becomes the organization name once
    its leading column is stripped. Remaining lines are the address, with
    leading whitespace removed. Empty input gives an empty record.
    """
    if not text:
        return []

    text = html.unescape(_TAGS.sub("", text))
    lines = [line.lstrip() for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    if len(lines) == 1:
        return [_strip_boilerplate(lines[0]).rstrip()]

    if not _BASE16_COLUMN.match(lines[1]) and _HEX_COLUMN.match(lines[0]):
        # No "(base 16)" line; the name only appears on the header
        name, address = lines[0], lines[1:]
    else:
        name, address = lines[1], lines[2:]

    return [_strip_boilerplate(name).rstrip(), *address]


def split_records(text: str) -> Iterator[tuple[OuiKey, str]]:
    """Yield ``(oui, block)`` for every record in a full registry dump.

    A record starts at a ``XX-XX-XX  (hex)`` header line and runs until a
    blank line or the next header. Anything before the first header
    (the file preamble) is skipped.
    """
    key: OuiKey | None = None
    block: list[str] = []

    for line in text.splitlines():
        match = _HEADER.match(line)
        if match:
            if key is not None:
                yield key, "\n".join(block)
            key = match.group("oui").upper()
            block = [line]
        elif not line.strip():
            if key is not None:
                yield key, "\n".join(block)
            key, block = None, []
        elif key is not None:
            block.append(line)

    if key is not None:
        yield key, "\n".join(block)


class _PreTextCollector(HTMLParser):
    """Collects the text content of every <pre> element."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: list[str] = []
        self._depth = 0
        self._buf: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "pre":
            self._depth += 1
        elif tag == "br" and self._depth:
            self._buf.append("\n")

    def handle_endtag(self, tag: str) -> None:
        if tag == "pre" and self._depth:
            self._depth -= 1
            if not self._depth:
                self.blocks.append("".join(self._buf))
                self._buf = []

    def handle_data(self, data: str) -> None:
        if self._depth:
            self._buf.append(data)


def extract_oui_from_html(html_text: str, oui: OuiKey) -> str | bool:
    """Pull the record for ``oui`` out of a registry search-result page.

    The record is located by the ``<pre>`` element holding a ``(hex)``
    header for the OUI, not by position. Returns ``False`` when no such
    header exists, even if the page mentions the OUI elsewhere.
    """
    if not html_text or not isinstance(html_text, str):
        return False

    collector = _PreTextCollector()
    collector.feed(html_text)
    collector.close()

    hex_form = oui.upper()
    base16_form = hex_form.replace("-", "")
    for block in collector.blocks:
        upper = block.upper()
        if hex_form not in upper and base16_form not in upper:
            continue
        # A result page may list neighbours; keep only the requested record
        for key, record in split_records(block):
            if key == hex_form:
                return record

    logger.warning("No record for %s found in registry page", oui)
    return False
