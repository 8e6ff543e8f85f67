"""Decoding of uploaded share documents.

Document format::

    {
      "keys": {"n": 4, "k": 3},
      "1": {"base": "10", "value": "3"},
      "2": {"base": "2",  "value": "101"},
      ...
    }

Each non-``keys`` entry is one share: its key is the share id and also
its x coordinate, its value is y written in the given base (2..36).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from shareguard.config import MAX_BASE, MIN_BASE
from shareguard.detector.models import Share
from shareguard.errors import ShareDecodeError

log = logging.getLogger(__name__)

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
# well under the default 4300-digit str() limit
_DIRECT_BITS = 8000


def parse_base(raw: Any) -> int:
    """Validate a base given as int or numeric string."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        base = raw
    else:
        text = str(raw).strip()
        if not text.isdigit() or len(text) > 2:
            raise ShareDecodeError(f"Unsupported base: {text[:16]!r}")
        base = int(text)
    if not MIN_BASE <= base <= MAX_BASE:
        raise ShareDecodeError(f"Unsupported base, expected {MIN_BASE}..{MAX_BASE}")
    return base


def decode_value(text: str, base: int) -> int:
    """Decode non-negative *text* written in *base* into an int.

    Digits are ``0-9`` then ``a-z`` (case-insensitive); surrounding
    whitespace is ignored.  Signs, prefixes and separators are rejected.
    """
    base = parse_base(base)
    digits = str(text).strip().lower()
    if not digits:
        raise ShareDecodeError("Empty share value")
    result = 0
    for ch in digits:
        digit = _DIGITS.find(ch)
        if digit < 0:
            raise ShareDecodeError(f"Invalid digit {ch!r} for base {base}")
        if digit >= base:
            raise ShareDecodeError(f"Digit {ch!r} out of range for base {base}")
        result = result * base + digit
    return result


def parse_share_id(share_id: str) -> int:
    """The share id doubles as its x coordinate (optionally negative)."""
    text = share_id.strip()
    sign = 1
    if text.startswith("-"):
        sign, text = -1, text[1:]
    try:
        return sign * decode_value(text, 10)
    except ShareDecodeError:
        raise ShareDecodeError(
            f"Share id must be an integer x coordinate: {share_id[:32]!r}"
        ) from None


def encode_decimal(value: int) -> str:
    """Decimal string of *value* at any size.

    ``str(int)`` refuses values beyond ``sys.get_int_max_str_digits()``
    digits, so large values are split by powers of ten first.
    """
    if value < 0:
        return "-" + encode_decimal(-value)
    if value.bit_length() <= _DIRECT_BITS:
        return str(value)
    half = (value.bit_length() * 3 // 10) // 2  # about half the decimal digits
    high, low = divmod(value, 10**half)
    return encode_decimal(high) + encode_decimal(low).zfill(half)


def decode_share(share_id: str, base: Any, value: Any) -> Share:
    try:
        y = decode_value(str(value), parse_base(base))
    except ShareDecodeError as exc:
        raise ShareDecodeError(f"Share {share_id}: {exc}") from None
    return Share(id=share_id, x=parse_share_id(share_id), y=y)


def parse_document(doc: Dict[str, Any]) -> Tuple[List[Share], int, int]:
    """Return ``(shares, n, k)`` from an uploaded document."""
    if not isinstance(doc, dict):
        raise ShareDecodeError("Document must be a JSON object")
    keys = doc.get("keys")
    if not isinstance(keys, dict):
        raise ShareDecodeError("Invalid or missing keys.n / keys.k")
    n, k = keys.get("n"), keys.get("k")
    if not _is_int(n) or not _is_int(k):
        raise ShareDecodeError("Invalid or missing keys.n / keys.k")

    shares: List[Share] = []
    for share_id, entry in doc.items():
        if share_id == "keys":
            continue
        if not isinstance(entry, dict) or "base" not in entry or "value" not in entry:
            raise ShareDecodeError(f"Invalid share format for id {share_id}")
        shares.append(decode_share(share_id, entry["base"], entry["value"]))

    if len(shares) != n:
        # tolerated: detection runs on the shares actually present
        log.warning("document declares n=%d but holds %d shares", n, len(shares))
    return shares, n, k


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
