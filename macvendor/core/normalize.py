"""MAC address normalization to the canonical OUI key."""

from __future__ import annotations

import re

from macvendor.core.errors import FormatError
from macvendor.core.models import OuiKey

_HEX_DIGIT = re.compile(r"[0-9A-F]")
_SEPARATOR = re.compile(r"[:\-]")
_OUI_BYTE = re.compile(r"[0-9A-F]{0,2}")
# Device-specific bytes may be masked, as in "00:03:93:xx:xx:xx"
_DEVICE_BYTE = re.compile(r"[0-9A-FX]{0,2}")
_OUI_KEY = re.compile(r"[0-9A-F]{2}-[0-9A-F]{2}-[0-9A-F]{2}")

_MAX_BYTES = 6


def _split_bytes(mac: str, value: str) -> list[str]:
    """Split a MAC string into its byte components."""
    if _SEPARATOR.search(value):
        return _SEPARATOR.split(value)

    # Without separators the bytes must all be two digits wide
    if len(value) % 2 or len(value) < 6:
        raise FormatError(mac, "cannot split into bytes without separators")
    return [value[i:i + 2] for i in range(0, len(value), 2)]


def normalize_mac(mac: str) -> OuiKey:
    """Return the OUI key (``XX-XX-XX``) for a MAC address.

    Colons and hyphens are both accepted as separators. Bytes given as a
    single hex digit are zero-padded, and an empty component (e.g. the
    leading one in ``:d:93``) counts as a zero byte. Only the first three
    bytes are kept.

    Raises:
        FormatError: no hex digits, more than six bytes, fewer than three,
            or a byte that is not one or two hex digits.
    """
    if not isinstance(mac, str):
        raise FormatError(repr(mac), "not a string")

    value = mac.strip().upper()
    if not _HEX_DIGIT.search(value):
        raise FormatError(mac, "no hex digits")

    components = _split_bytes(mac, value)
    if len(components) > _MAX_BYTES:
        raise FormatError(mac, f"more than {_MAX_BYTES} bytes")
    if len(components) < 3:
        raise FormatError(mac, "fewer than 3 bytes")

    for component in components[3:]:
        if not _DEVICE_BYTE.fullmatch(component):
            raise FormatError(mac, f"invalid byte {component!r}")

    octets = []
    for component in components[:3]:
        if not _OUI_BYTE.fullmatch(component):
            raise FormatError(mac, f"invalid byte {component!r}")
        octets.append(component.rjust(2, "0"))
    return "-".join(octets)


def is_oui_key(value: str) -> bool:
    """True if ``value`` is already in canonical ``XX-XX-XX`` form."""
    return bool(_OUI_KEY.fullmatch(value))
