"""Stable per-message identities used for deduplication."""

from __future__ import annotations

import string
from typing import Any

from .constants import HASH_PREFIX_LENGTH, IDENTITY_ATTRIBUTES
from .page import PageAdapter

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def content_hash(text: str) -> str:
    """Rolling 32-bit hash (h * 31 + unit) of the first 200 UTF-16 code units.

    The signed 32-bit result is made non-negative with abs() and base-36
    encoded. Distinct texts can collide.
    """
    data = text.encode("utf-16-le", "surrogatepass")[: 2 * HASH_PREFIX_LENGTH]
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return _to_base36(abs(h))


def identify(node: Any, adapter: PageAdapter) -> str:
    """Return the node's identity, preferring host-provided identifiers."""
    for attribute, prefix in IDENTITY_ATTRIBUTES:
        value = adapter.attribute(node, attribute)
        if value:
            return f"{prefix}_{value}"

    text = adapter.text(node) or ""
    return f"content_{content_hash(text)}_{adapter.position(node)}"
