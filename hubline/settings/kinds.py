"""
Value kinds — Parse, format and suggest functions for settings

Every setting stores a canonical text ("raw") value. A kind supplies:
- parse(text) -> raw, raising SettingError with a user-facing message
- format(raw) -> display text
- suggest(old_raw, partial) -> candidate values (optional)

All functions here are pure: no storage access, no filesystem listing.
Cross-setting checks (e.g. hub name uniqueness) live with the store.
"""

import codecs
import ipaddress
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..core.units import (
    KIB, MIB,
    parse_size, format_size, parse_interval, format_interval,
)


# Logs keep at most this many lines; backlog must stay below it.
LOG_BUFFER_LINES = 1023

# Smallest unit the downloader splits files into.
DOWNLOAD_CHUNK_SIZE = MIB

NICK_MAX_LENGTH = 32
NICK_FORBIDDEN = "$| <>"
HUBNAME_MAX_LENGTH = 25


class SettingError(Exception):
    """A value could not be parsed or stored. str(exc) is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValueKind(Enum):
    """What kind of value a setting holds; drives help text and parsing."""
    BOOL = "boolean"
    INT = "integer"
    STRING = "string"
    FLAGS = "flags"
    PATH = "path"
    REGEX = "regex"
    INTERVAL = "interval"
    SPEED = "speed"
    SIZE = "size"
    COLOR = "color"

    @property
    def label(self) -> str:
        """Placeholder shown in help, e.g. '<boolean>'."""
        return f"<{self.value}>"


# =============================================================================
# Identity
# =============================================================================

def parse_text(text: str) -> str:
    return text


def format_text(raw: str) -> str:
    return raw


def format_password(raw: str) -> str:
    """Never echo a stored password."""
    return "*" * len(raw)


# =============================================================================
# Booleans
# =============================================================================

TRUE_WORDS = ("1", "t", "y", "true", "yes", "on")
FALSE_WORDS = ("0", "f", "n", "false", "no", "off")


def parse_bool(text: str) -> str:
    if text in TRUE_WORDS:
        return "true"
    if text in FALSE_WORDS:
        return "false"
    raise SettingError("Unrecognized boolean value.")


def raw_bool(raw: Optional[str]) -> bool:
    return raw == "true"


def suggest_bool(old: Optional[str], partial: str) -> List[str]:
    """
    Always offer both states; the one the input leans towards comes first.

    Empty input, or input starting like a true-word, puts "true" first.
    """
    if not partial or partial[0] in "1tyo":
        return ["true", "false"]
    return ["false", "true"]


# =============================================================================
# Integers
# =============================================================================

def parse_int(text: str) -> str:
    """Non-negative decimal integer."""
    text = text.strip()
    if not text.isdigit():
        raise SettingError("Invalid number.")
    return str(int(text))


def raw_int(raw: Optional[str]) -> int:
    try:
        return int(raw) if raw else 0
    except ValueError:
        return 0


def parse_int_ge1(text: str) -> str:
    raw = parse_int(text)
    if int(raw) < 1:
        raise SettingError("Invalid value.")
    return raw


def int_range(low: int, high: int, message: str):
    """Build a parser accepting integers in [low, high]."""
    def parse(text: str) -> str:
        raw = parse_int(text)
        if not low <= int(raw) <= high:
            raise SettingError(message)
        return raw
    return parse


parse_port = int_range(0, 65535, "Port number must be between 1 and 65535.")
parse_backlog = int_range(0, LOG_BUFFER_LINES - 1, f"Maximum value is {LOG_BUFFER_LINES - 1}.")


def format_backlog(raw: str) -> str:
    return "0 (disabled)" if raw == "0" else raw


def parse_minislot_size(text: str) -> str:
    """Input in KiB, stored in bytes."""
    kib = int(parse_int(text))
    if kib < 64:
        raise SettingError("Minislot size must be at least 64 KiB.")
    return str(kib * KIB)


def format_minislot_size(raw: str) -> str:
    return f"{raw_int(raw) // KIB} KiB"


# =============================================================================
# Intervals, sizes, speeds
# =============================================================================

def parse_interval_value(text: str) -> str:
    seconds = parse_interval(text)
    if seconds is None:
        raise SettingError("Invalid interval.")
    return str(seconds)


def format_interval_value(raw: str) -> str:
    return format_interval(raw_int(raw))


def parse_autorefresh(text: str) -> str:
    raw = parse_interval_value(text)
    if raw != "0" and int(raw) < 600:
        raise SettingError("Interval between automatic refreshes should be at least 10 minutes.")
    return raw


def format_autorefresh(raw: str) -> str:
    if raw_int(raw) == 0:
        return f"{format_interval(0)} (disabled)"
    return format_interval_value(raw)


def parse_speed(text: str) -> str:
    """A size per second; a trailing '/s' is optional."""
    if len(text) > 3 and text.endswith("/s"):
        text = text[:-2]
    size = parse_size(text)
    if size is None:
        raise SettingError("Invalid speed.")
    return str(size)


def format_speed(raw: str) -> str:
    return f"{format_size(raw_int(raw))}/s"


def parse_download_segment(text: str) -> str:
    """0 disables segmenting; anything else is rounded up to one chunk."""
    size = parse_size(text)
    if size is None:
        raise SettingError("Invalid size.")
    if size and size < DOWNLOAD_CHUNK_SIZE:
        size = DOWNLOAD_CHUNK_SIZE
    return str(size)


def format_download_segment(raw: str) -> str:
    if raw == "0":
        return "0 (disable segmented downloading)"
    return format_size(raw_int(raw))


# =============================================================================
# Regex, IP, encoding
# =============================================================================

def parse_regex(text: str) -> str:
    try:
        re.compile(text)
    except re.error as e:
        raise SettingError(f"Invalid regular expression: {e}")
    return text


def parse_ip(text: str) -> str:
    """
    One or two addresses, at most one per family.

    Stored as "<v4>,<v6>" with the unspecified address filling the gap.
    """
    v4 = ipaddress.IPv4Address("0.0.0.0")
    v6 = ipaddress.IPv6Address("::")
    parts = [p.strip() for p in text.split(",", 1)]
    seen_v4 = seen_v6 = False
    for part in parts:
        try:
            addr = ipaddress.ip_address(part)
        except ValueError:
            raise SettingError("Invalid IP.")
        if addr.version == 4 and not seen_v4:
            v4, seen_v4 = addr, True
        elif addr.version == 6 and not seen_v6:
            v6, seen_v6 = addr, True
        else:
            raise SettingError("Invalid IP.")
    return f"{v4},{v6}"


def parse_active_ip(text: str) -> str:
    if text == "local":
        return text
    return parse_ip(text)


ENCODINGS = (
    "CP1250", "CP1251", "CP1252", "ISO-2022-JP", "ISO-8859-2", "ISO-8859-7",
    "ISO-8859-8", "ISO-8859-9", "KOI8-R", "LATIN1", "SJIS", "UTF-8",
    "WINDOWS-1250", "WINDOWS-1251", "WINDOWS-1252",
)


def parse_encoding(text: str) -> str:
    try:
        codecs.lookup(text)
    except LookupError:
        raise SettingError("Invalid encoding.")
    return text


def suggest_encoding(old: Optional[str], partial: str) -> List[str]:
    return [e for e in ENCODINGS if e.startswith(partial)]


# =============================================================================
# Names
# =============================================================================

def parse_nick(text: str) -> str:
    if len(text) > NICK_MAX_LENGTH:
        raise SettingError("Too long nick name.")
    if not text:
        raise SettingError("Too short nick name.")
    if any(c in NICK_FORBIDDEN for c in text):
        raise SettingError("Invalid character in nick name.")
    return text


def is_valid_hubname(name: str) -> bool:
    """Alphanumerics plus '_', '-' and '.', not leading with '-' or '_', 1-25 chars."""
    if not name or len(name) > HUBNAME_MAX_LENGTH or name[0] in "-_":
        return False
    return all(c.isalnum() or c in "_-." for c in name)


def parse_hubname(text: str) -> str:
    """Normalise to '#name'. Uniqueness is checked by the store."""
    name = text[1:] if text.startswith("#") else text
    if not is_valid_hubname(name):
        raise SettingError("Illegal characters or too long.")
    return f"#{name}"


# =============================================================================
# Flags
# =============================================================================

@dataclass(frozen=True)
class FlagSet:
    """
    A fixed vocabulary of comma-separated flags.

    Attributes:
        options: Valid flag names, in canonical order
        multi: Whether more than one flag may be given
        exclusive: Flag that overrides all others when present
    """
    options: Tuple[str, ...]
    multi: bool = False
    exclusive: Optional[str] = None

    def parse(self, text: str) -> str:
        given = []
        for item in text.split(","):
            item = item.strip()
            if not item:
                continue
            if item not in self.options:
                raise SettingError(f"Unknown flag: {item}")
            given.append(item)
        if len(given) > 1 and not self.multi:
            raise SettingError("Too many flags.")
        if not given:
            raise SettingError("Not enough flags given.")
        if self.exclusive and self.exclusive in given:
            return self.exclusive
        return ",".join(o for o in self.options if o in given)

    def suggest(self, old: Optional[str], partial: str) -> List[str]:
        return complete_last_item(self.options, partial)


def complete_last_item(options, partial: str) -> List[str]:
    """Complete the last item of a comma list, keeping the earlier items."""
    head, sep, last = partial.rpartition(",")
    last = last.strip()
    matches = [o for o in options if o.startswith(last)]
    if sep:
        return [f"{head},{m}" for m in matches]
    return matches


POLICY_FLAGS = FlagSet(("disabled", "allow", "prefer"))
NOTIFY_BELL_FLAGS = FlagSet(("disabled", "low", "medium", "high"))
FLUSH_CACHE_FLAGS = FlagSet(("none", "download", "upload", "hash"), multi=True, exclusive="none")


# =============================================================================
# Colors
# =============================================================================

# name -> True for colors, False for attributes; table order is canonical
COLOR_NAMES = {
    "black": True, "blink": False, "blue": True, "bold": False,
    "cyan": True, "default": True, "green": True, "magenta": True,
    "red": True, "reverse": False, "underline": False, "white": True,
    "yellow": True,
}


def parse_color(text: str) -> str:
    """
    Parse '<fg>[,<bg>][,<attr>...]' in any order.

    The first color is the foreground, the second the background.
    Canonical output drops a default background and sorts attributes.
    """
    fg, bg = "default", "default"
    colors = 0
    attrs = set()
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        if item not in COLOR_NAMES:
            raise SettingError(f"Unknown color or attribute: {item}")
        if not COLOR_NAMES[item]:
            attrs.add(item)
        elif colors == 0:
            fg, colors = item, 1
        elif colors == 1:
            bg, colors = item, 2
        else:
            raise SettingError(f"Don't know what to do with a third color: {item}")
    parts = [fg]
    if bg != "default":
        parts.append(bg)
    parts.extend(a for a in COLOR_NAMES if a in attrs)
    return ",".join(parts)


def suggest_color(old: Optional[str], partial: str) -> List[str]:
    return complete_last_item(tuple(COLOR_NAMES), partial)


# =============================================================================
# Generic suggesters
# =============================================================================

def suggest_old(old: Optional[str], partial: str) -> List[str]:
    """Offer the current value when it extends what was typed."""
    if old and old.startswith(partial):
        return [old]
    return []


def suggest_path(old: Optional[str], partial: str) -> List[str]:
    """
    Expand a leading '~' or '.' into an absolute path.

    Directory contents are not listed: suggesters run on every keystroke
    and must not touch the filesystem.
    """
    if partial.startswith("~"):
        expanded = os.path.expanduser(partial)
        return [expanded] if expanded != partial else []
    if partial in (".", "./") or partial.startswith("./"):
        return [os.path.abspath(partial) + ("/" if partial.endswith("/") else "")]
    return suggest_old(old, partial)
