"""Human-readable token dumps."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from rex.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr, positions: bool = True) -> None:
    """Print one line per token to *file*."""
    for token in tokens:
        file.write(format_token(token, positions=positions) + "\n")


def format_token(token: Token, *, positions: bool = True) -> str:
    line = f"{token.type.name:<18} {token.value!r}"
    if positions:
        where = f"{token.position.line}:{token.position.column}"
        line = f"{where:<8} {line}"
    return line.rstrip()
