"""
Units — Sizes, intervals, speeds and base32 as typed by users

Everything the command layer accepts as a quantity goes through here:
- Sizes: "700M", "4GiB", "512k", "1024" (binary units, bytes when bare)
- Intervals: "1h 30m", "2d", "45" (seconds when bare)
- Base32 (RFC 4648 alphabet, no padding) for TTH roots and keyprints

Parsers return None on malformed input rather than raising; callers
decide which message the user sees.
"""

import base64
import re
from typing import Optional


KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB

_SIZE_RE = re.compile(r'^([0-9]+)(?:([kKmMgG])(b|B|ib|iB|Ib|IB)?)?$')
_SIZE_MULT = {'k': KIB, 'm': MIB, 'g': GIB}

_INTERVAL_TOKEN_RE = re.compile(r'([0-9]+)([sSmMhHdD]?)')
_INTERVAL_MULT = {'': 1, 's': 1, 'm': 60, 'h': 3600, 'd': 86400}

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
TTH_LENGTH = 39
KEYPRINT_LENGTH = 52


# =============================================================================
# Sizes
# =============================================================================

def parse_size(text: str) -> Optional[int]:
    """
    Parse a size with an optional binary suffix.

    Args:
        text: Decimal number, optionally followed by K, M or G and
              optionally "B" or "iB" (case-insensitive)

    Returns:
        Size in bytes, or None if the text is not a size
    """
    match = _SIZE_RE.match(text or "")
    if not match:
        return None
    num = int(match.group(1))
    if match.group(2):
        num *= _SIZE_MULT[match.group(2).lower()]
    return num


def format_size(size: int) -> str:
    """Human-readable size, e.g. '  1.50 MiB'."""
    value = float(size)
    unit = ' '
    for limit, letter, divisor in (
        (1000.0, ' ', 1),
        (1023e3, 'K', KIB),
        (1023e6, 'M', MIB),
        (1023e9, 'G', GIB),
        (1023e12, 'T', GIB * KIB),
    ):
        if value < limit:
            unit = letter
            value /= divisor
            break
    else:
        unit = 'P'
        value /= GIB * MIB
    # fixed width: bytes are padded to line up with "KiB"
    suffix = ' B' if unit == ' ' else 'iB'
    return f"{value:6.2f} {unit}{suffix}"


# =============================================================================
# Intervals
# =============================================================================

def parse_interval(text: str) -> Optional[int]:
    """
    Parse an interval made of <num>[s|m|h|d] tokens.

    Tokens may be separated by spaces or written back to back ("1h30m").
    A bare number counts as seconds. Returns None on malformed input.
    """
    if text is None:
        return None
    total = 0
    pos = 0
    while pos < len(text):
        if text[pos] == ' ':
            pos += 1
            continue
        match = _INTERVAL_TOKEN_RE.match(text, pos)
        if not match:
            return None
        total += int(match.group(1)) * _INTERVAL_MULT[match.group(2).lower()]
        pos = match.end()
    return total


def format_interval(seconds: int) -> str:
    """Format seconds as '1d 2h 3m 4s', dropping zero parts ('0s' for zero)."""
    parts = []
    for letter, span in (('d', 86400), ('h', 3600), ('m', 60)):
        if seconds >= span:
            parts.append(f"{seconds // span}{letter}")
            seconds %= span
    if seconds or not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def connection_to_speed(connection: Optional[str]) -> int:
    """
    Estimate upload speed in bytes/s from a `connection` setting.

    A bare number is taken as Mbit/s, "<n> KiB/s" as KiB/s.
    Anything else yields 0 (unknown).
    """
    if not connection:
        return 0
    match = re.match(r'^\s*([0-9]*\.?[0-9]+)\s*(KiB/s)?\s*$', connection, re.IGNORECASE)
    if not match:
        return 0
    value = float(match.group(1))
    if match.group(2):
        return int(value * 1024)
    return int(value * 1024 * 1024 / 8)


# =============================================================================
# Base32
# =============================================================================

def is_base32(text: str) -> bool:
    """True if every character is an ASCII base32 letter or digit (either case)."""
    return text.isascii() and all(c in BASE32_ALPHABET for c in text.upper())


def is_tth(text: str) -> bool:
    """True for a 39-character base32 TTH root."""
    return len(text) == TTH_LENGTH and is_base32(text)


def base32_encode(data: bytes) -> str:
    """Encode bytes as unpadded upper-case base32."""
    return base64.b32encode(data).decode('ascii').rstrip('=')


def base32_decode(text: str) -> bytes:
    """Decode unpadded base32 text (case-insensitive)."""
    padding = '=' * (-len(text) % 8)
    return base64.b32decode(text + padding, casefold=True)
