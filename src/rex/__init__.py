"""Rex language scanner."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rex.tokens import Token

__version__ = "0.1.0"


def check(source: str, filename: str = "<input>") -> list[Token]:
    """Scan source and return its tokens, raising ScanError on the first ILLEGAL token."""
    from rex.errors import ScanError
    from rex.scanner import Scanner
    from rex.tokens import TokenType

    scanner = Scanner(source, filename)
    tokens = []
    for token in scanner:
        if token.type == TokenType.ILLEGAL:
            raise ScanError(
                f"illegal character {token.value!r}",
                token,
                scanner.source,
                line_offset=scanner.leading_lines,
            )
        tokens.append(token)
    return tokens
