"""Error types with formatted source context."""

from __future__ import annotations

from pathlib import Path

from rex.tokens import Position, Token


def _snippet(
    message: str, filename: str, position: Position, source: str, width: int, line_offset: int = 0
) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = position.line - 1
    col = position.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline at least one char, but stay within the line when possible
    underline_len = max(1, min(width, len(source_line) - col + 1))

    pad = " " * (col - 1)
    carets = "^" * underline_len

    # source may be trimmed; line_offset maps back to the file on disk
    line_no = position.line + line_offset
    line_num = str(line_no)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line_no}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class SourceFileError(Exception):
    """Raised when a source file has the wrong extension or cannot be read."""

    def __init__(self, message: str, path: Path) -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n  --> {self.path}"


class ScanError(Exception):
    """Raised by consumers that reject an ILLEGAL token, with source context."""

    def __init__(self, message: str, token: Token, source: str, line_offset: int = 0) -> None:
        self.message = message
        self.token = token
        self.source = source
        self.line_offset = line_offset
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        return self.token.position

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.token.filename
        width = max(1, len(self.token.value))
        return _snippet(
            self.message, filename, self.token.position, self.source, width, self.line_offset
        )


class EscapeError(Exception):
    """Raised on an invalid escape sequence in string contents."""

    def __init__(self, message: str, offset: int) -> None:
        self.message = message
        self.offset = offset
        super().__init__(message)
