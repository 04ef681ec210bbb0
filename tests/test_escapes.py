"""Test escape decoding of string contents."""

import pytest

from rex.errors import EscapeError
from rex.scanner import tokenize
from rex.strings import decode_escapes, find_escape_errors


class TestSimpleEscapes:
    def test_no_escapes(self):
        assert decode_escapes("hello") == "hello"

    def test_newline_tab_cr(self):
        assert decode_escapes("a\\nb\\tc\\rd") == "a\nb\tc\rd"

    def test_backslash(self):
        assert decode_escapes("a\\\\b") == "a\\b"

    def test_quote(self):
        assert decode_escapes('\\"') == '"'

    def test_nul(self):
        assert decode_escapes("\\0") == "\0"


class TestUnicodeEscapes:
    def test_short(self):
        assert decode_escapes("\\u{41}") == "A"

    def test_six_digits(self):
        assert decode_escapes("\\u{01F642}") == "\U0001f642"

    def test_lowercase_hex(self):
        assert decode_escapes("\\u{e9}") == "é"

    def test_out_of_range(self):
        with pytest.raises(EscapeError, match="out of range"):
            decode_escapes("\\u{110000}")

    @pytest.mark.parametrize("digits", ["D800", "dbff", "DC00", "DFFF"])
    def test_surrogate_rejected(self, digits):
        with pytest.raises(EscapeError, match="surrogate"):
            decode_escapes(f"\\u{{{digits}}}")

    def test_around_surrogates(self):
        assert decode_escapes("\\u{D7FF}\\u{E000}") == "\ud7ff\ue000"

    def test_missing_brace(self):
        with pytest.raises(EscapeError, match="expected '\\{'"):
            decode_escapes("\\u41")

    def test_unterminated(self):
        with pytest.raises(EscapeError, match="unterminated"):
            decode_escapes("\\u{41")

    def test_empty_digits(self):
        with pytest.raises(EscapeError):
            decode_escapes("\\u{}")

    def test_too_many_digits(self):
        with pytest.raises(EscapeError):
            decode_escapes("\\u{1234567}")

    def test_non_hex(self):
        with pytest.raises(EscapeError):
            decode_escapes("\\u{12G}")


class TestInvalidEscapes:
    def test_unknown_escape(self):
        with pytest.raises(EscapeError) as exc_info:
            decode_escapes("ab\\q")
        assert exc_info.value.offset == 2
        assert "\\q" in exc_info.value.message

    def test_trailing_backslash(self):
        with pytest.raises(EscapeError, match="unexpected end"):
            decode_escapes("abc\\")


class TestFindEscapeErrors:
    def test_collects_all(self):
        token = tokenize('"\\q and \\z"')[0]
        errors = find_escape_errors(token)
        assert [e.offset for e in errors] == [0, 7]

    def test_valid_string(self):
        token = tokenize('"ok\\n"')[0]
        assert find_escape_errors(token) == []

    def test_non_string_ignored(self):
        token = tokenize("`\\q`")[0]
        assert find_escape_errors(token) == []
