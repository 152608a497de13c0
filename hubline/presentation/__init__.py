"""
Presentation — Terminal output for hubline

- Symbols: prompt glyphs (unicode/ascii)
- Safe output: encoding-safe printing, control character stripping
"""

from .symbols import (
    SymbolSet, get_symbols, supports_unicode,
    safe_print, sanitize_control_chars,
)

__all__ = [
    "SymbolSet", "get_symbols", "supports_unicode",
    "safe_print", "sanitize_control_chars",
]
