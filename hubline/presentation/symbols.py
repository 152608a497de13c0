"""
Symbols — Terminal-safe output for the interactive shell

Progressive enhancement: Unicode prompt glyphs when the terminal can show
them, ASCII otherwise. Configurable via the display.symbols setting.

Also provides safe output utilities:
- safe_print(): Encoding-safe printing for text received from hubs
- sanitize_control_chars(): Strips terminal control sequences from
  nicks and chat before they reach the screen
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Safe output
# =============================================================================
# Text from hubs is stripped of control characters before it is stored;
# safe_print() only deals with what the terminal can encode.

UNICODE_TO_ASCII = {
    '→': '->',
    '›': '>',
    '…': '...',
    '–': '-',
    '—': '--',
    '•': '*',
    '·': '.',
    '│': '|',
}


def sanitize_control_chars(text: str) -> str:
    """
    Remove control characters from untrusted text.

    Anyone on a hub picks their own nick and chat text; escape sequences
    in either could repaint or retitle the terminal.

    Preserves: newlines (\\n), tabs (\\t), carriage returns (\\r)
    """
    if not text:
        return text
    return ''.join(c for c in text if ord(c) >= 32 or c in '\t\n\r')


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print, degrading characters the output encoding cannot represent.

    Replaces unencodable characters with ASCII equivalents, or '?' as a
    last resort, instead of raising UnicodeEncodeError mid-listing.

    Args:
        text: Text to print (may contain any Unicode)
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)
        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


# =============================================================================
# Symbol sets
# =============================================================================

@dataclass(frozen=True)
class SymbolSet:
    """Glyphs used by the shell around (never inside) command output."""
    prompt: str


UNICODE = SymbolSet(prompt='›')
ASCII = SymbolSet(prompt='>')


def supports_unicode() -> bool:
    """
    Check if the terminal likely renders Unicode.

    Conservative: defaults to ASCII if uncertain.
    """
    encoding = getattr(sys.stdout, 'encoding', None) or ''
    normalized = encoding.lower().replace('-', '').replace('_', '')
    if normalized.startswith('utf'):
        return True
    if normalized.startswith('cp') or normalized in ('ascii', 'latin1', 'iso88591'):
        return False
    for var in ('LC_ALL', 'LANG'):
        value = os.environ.get(var, '').lower()
        if 'utf-8' in value or 'utf8' in value:
            return True
    return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
