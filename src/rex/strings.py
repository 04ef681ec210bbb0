"""Escape decoding for string literal contents.

The scanner keeps string bodies exactly as written; escapes are resolved
afterwards by whichever stage needs the literal's value.

Supported escapes: ``\\n \\r \\t \\0 \\\\ \\"`` and ``\\u{X}`` with one to six
hex digits naming a non-surrogate codepoint up to U+10FFFF.
"""

from __future__ import annotations

from rex.errors import EscapeError
from rex.tokens import Token, TokenType

_SIMPLE = {"n": "\n", "r": "\r", "t": "\t", "0": "\0", "\\": "\\", '"': '"'}


def decode_escapes(text: str) -> str:
    """Return text with escapes resolved. Raises EscapeError on the first bad one."""
    decoded, errors = _decode(text)
    if errors:
        raise errors[0]
    return decoded


def find_escape_errors(token: Token) -> list[EscapeError]:
    """Return every invalid escape in a STRING token (empty for other kinds)."""
    if token.type != TokenType.STRING:
        return []
    _, errors = _decode(token.value)
    return errors


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"


def _decode(text: str) -> tuple[str, list[EscapeError]]:
    out: list[str] = []
    errors: list[EscapeError] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        if i + 1 >= len(text):
            errors.append(EscapeError("unexpected end of string after '\\'", i))
            out.append(ch)
            break

        nxt = text[i + 1]
        if nxt in _SIMPLE:
            out.append(_SIMPLE[nxt])
            i += 2
            continue

        if nxt == "u":
            try:
                value, i = _decode_unicode(text, i)
            except EscapeError as exc:
                errors.append(exc)
                out.append(text[i : i + 2])
                i += 2
            else:
                out.append(value)
            continue

        errors.append(EscapeError(f"invalid escape sequence '\\{nxt}'", i))
        out.append(text[i : i + 2])
        i += 2

    return "".join(out), errors


def _decode_unicode(text: str, start: int) -> tuple[str, int]:
    """Decode ``\\u{...}`` at start; return (resolved char, offset after it)."""
    brace = start + 2
    if brace >= len(text) or text[brace] != "{":
        raise EscapeError("expected '{' after '\\u'", start)

    close = text.find("}", brace + 1)
    if close == -1:
        raise EscapeError("unterminated unicode escape", start)

    digits = text[brace + 1 : close]
    if not 1 <= len(digits) <= 6 or not all(is_hex_digit(c) for c in digits):
        raise EscapeError(f"invalid unicode escape '\\u{{{digits}}}'", start)

    codepoint = int(digits, 16)
    if codepoint > 0x10FFFF:
        raise EscapeError(f"Unicode codepoint U+{digits.upper()} is out of range", start)
    if 0xD800 <= codepoint <= 0xDFFF:
        raise EscapeError(f"Unicode codepoint U+{digits.upper()} is a surrogate", start)
    return chr(codepoint), close + 1
