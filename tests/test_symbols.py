"""
Tests for Symbols — prompt glyphs and terminal-safe output
"""

import io
from unittest.mock import patch

from hubline.presentation.symbols import (
    ASCII, UNICODE, get_symbols, safe_print, sanitize_control_chars, supports_unicode,
)


class TestGetSymbols:

    def test_explicit_preference(self):
        assert get_symbols("unicode") is UNICODE
        assert get_symbols("ascii") is ASCII

    def test_auto_follows_terminal(self):
        with patch("hubline.presentation.symbols.supports_unicode", return_value=False):
            assert get_symbols("auto") is ASCII
            assert get_symbols(None) is ASCII

    def test_ascii_prompt_is_plain(self):
        assert ASCII.prompt.isascii()


class TestSupportsUnicode:

    def test_utf8_stdout(self):
        stream = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        with patch("sys.stdout", stream):
            assert supports_unicode() is True

    def test_codepage_stdout(self):
        stream = io.TextIOWrapper(io.BytesIO(), encoding="cp1252")
        with patch("sys.stdout", stream):
            assert supports_unicode() is False


class TestSanitize:

    def test_strips_escape_sequences(self):
        assert sanitize_control_chars("bob\x1b[2Jx") == "bob[2Jx"

    def test_keeps_whitespace(self):
        assert sanitize_control_chars("a\tb\nc") == "a\tb\nc"

    def test_empty(self):
        assert sanitize_control_chars("") == ""


class TestSafePrint:

    def test_plain(self):
        out = io.StringIO()
        safe_print("hello", file=out)
        assert out.getvalue() == "hello\n"

    def test_ascii_fallback(self):
        raw = io.BytesIO()
        out = io.TextIOWrapper(raw, encoding="ascii")
        safe_print("#hub › x…", file=out)
        out.flush()
        assert raw.getvalue() == b"#hub > x...\n"

    def test_replacement_last_resort(self):
        raw = io.BytesIO()
        out = io.TextIOWrapper(raw, encoding="ascii")
        safe_print("café", file=out)
        out.flush()
        assert raw.getvalue() == b"caf?\n"
