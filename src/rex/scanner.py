"""Rex scanner: converts source text into a lazy stream of tokens."""

from __future__ import annotations

from rex.tokens import (
    Position,
    Token,
    TokenType,
    is_alphabetical,
    is_alphanumeric,
    is_integer,
    keyword_of,
    type_of_char,
)

_NUL = "\0"

# No construct needs to consume more than three characters at once.
_MAX_ADVANCE = 3

_Rules = tuple[tuple[str, TokenType], ...]

# Per leading character: ordered (next char, kind) rules and the one-char default.
# First match wins.
_COMPOUND_RULES: dict[str, tuple[_Rules, TokenType]] = {
    "=": (
        ((">", TokenType.FAT_ARROW), ("~", TokenType.PATTERN_MATCH), ("=", TokenType.EQUAL)),
        TokenType.ASSIGN,
    ),
    "+": ((("+", TokenType.INCREMENT),), TokenType.PLUS),
    "*": ((("*", TokenType.POWER),), TokenType.ASTERISK),
    "-": (((">", TokenType.ARROW), ("-", TokenType.DECREMENT)), TokenType.MINUS),
    "<": ((("=", TokenType.LESSER_EQ), ("<", TokenType.LSHIFT)), TokenType.LESSER),
    ">": ((("=", TokenType.GREATER_EQ), (">", TokenType.RSHIFT)), TokenType.GREATER),
    "!": ((("=", TokenType.NOT_EQUAL), ("~", TokenType.PATTERN_NOT_MATCH)), TokenType.BANG),
    ":": ((("=", TokenType.ASSIGN_EXP),), TokenType.COLON),
    "|": (((">", TokenType.PIPELINE),), TokenType.PIPE),
    ".": (((".", TokenType.RANGE_EXC),), TokenType.DOT),
}

# Three-char operators, tried before the two-char rules of the same lead.
_THREE_CHAR_RULES: dict[str, tuple[tuple[str, str, TokenType], ...]] = {
    ".": ((".", ".", TokenType.RANGE_INC),),
}


class Scanner:
    """Produce Rex tokens one at a time from an owned source buffer.

    The scanner is its own iterator: each ``next()`` scans exactly one token,
    the last one being EOF, after which iteration stops. ``reset()`` rewinds
    to the start of the buffer for another pass.
    """

    def __init__(self, source: str, filename: str = "<input>") -> None:
        trimmed = source.lstrip("\r\n")
        self._source = trimmed
        self._filename = filename
        self._leading_lines = source.count("\n", 0, len(source) - len(trimmed))
        self.reset()

    @property
    def source(self) -> str:
        """The scanned text, after leading newlines were trimmed."""
        return self._source

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def leading_lines(self) -> int:
        """Number of lines trimmed from the front of the original text."""
        return self._leading_lines

    def reset(self) -> None:
        """Rewind to the start of the buffer."""
        self._read = 0
        self._char = self._char_at(0)
        self._line = 1
        self._col = 1
        self._finished = False

    def __iter__(self) -> Scanner:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Token | None:
        """Scan and return the next token, or None once EOF has been returned."""
        if self._finished:
            return None

        self.skip_whitespace()
        while self._char == "#" and not self._at_end():
            self.skip_comment()
            self.skip_whitespace()

        return self._scan_token()

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def _char_at(self, offset: int) -> str:
        if offset < len(self._source):
            return self._source[offset]
        return _NUL

    def _at_end(self) -> bool:
        return self._read >= len(self._source)

    def _position(self) -> Position:
        return Position(self._line, self._col)

    def advance(self, count: int = 1) -> None:
        """Consume up to three characters, keeping line and column in step."""
        count = max(0, min(count, _MAX_ADVANCE))
        for _ in range(count):
            if self._at_end():
                return
            consumed = self._source[self._read]
            self._read += 1
            if consumed == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
            self._char = self._char_at(self._read)

    def peek(self) -> str:
        """Return the character after the current one, NUL past the end."""
        return self._char_at(self._read + 1)

    def peek_plus(self, count: int) -> str:
        return self._char_at(self._read + 1 + count)

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and carriage returns. Newlines are tokens."""
        while self._char in (" ", "\t", "\r"):
            self.advance()

    def skip_comment(self) -> None:
        """Skip from # up to, but not including, the end of the line."""
        while not self._at_end() and self._char != "\n":
            self.advance()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _emit(self, tt: TokenType, start: Position, value: str | None = None) -> Token:
        if value is None:
            value = tt.text or ""
        return Token(tt, value, start, self._filename)

    def _scan_token(self) -> Token:
        if self._at_end():
            self._finished = True
            return self._emit(TokenType.EOF, self._position())

        ch = self._char

        if is_alphabetical(ch):
            return self._read_tag()

        if is_integer(ch):
            return self._read_number()

        if ch == '"':
            return self._read_delimited(TokenType.STRING, '"')

        if ch == "\\" and self.peek() == "\\":
            return self._read_multistring()

        if ch == "`":
            return self._read_delimited(TokenType.REGEX, "`")

        if ch in _COMPOUND_RULES:
            return self._read_compound(ch)

        start = self._position()
        self.advance()
        tt = type_of_char(ch)
        if tt is TokenType.EOF:
            # A NUL inside the buffer is not the end of input
            tt = TokenType.ILLEGAL
        if tt is TokenType.ILLEGAL:
            return self._emit(tt, start, ch)
        return self._emit(tt, start)

    # ------------------------------------------------------------------
    # Lexeme readers
    # ------------------------------------------------------------------

    def _read_tag(self) -> Token:
        start = self._position()
        begin = self._read
        while is_alphanumeric(self._char):
            self.advance()
        if self._char in ("?", "!"):
            self.advance()

        text = self._source[begin : self._read]
        keyword = keyword_of(text)
        if keyword is not None:
            return self._emit(keyword, start)
        return self._emit(TokenType.TAG, start, text)

    def _read_number(self) -> Token:
        """Read an integer, or a float if a '.' is met.

        Only digits follow the '.', so ``12.2.4`` stops before the second dot.
        """
        start = self._position()
        begin = self._read
        seen_dot = False
        while True:
            if self._char == "." and not seen_dot:
                seen_dot = True
                self.advance()
            elif is_integer(self._char):
                self.advance()
            else:
                break

        text = self._source[begin : self._read]
        return self._emit(TokenType.FLOAT if seen_dot else TokenType.INTEGER, start, text)

    def _read_delimited(self, tt: TokenType, delimiter: str) -> Token:
        """Read a string or regex body. Escapes are left untouched."""
        start = self._position()
        self.advance()  # opening delimiter
        begin = self._read
        while not self._at_end() and self._char != delimiter:
            self.advance()

        text = self._source[begin : self._read]
        if not self._at_end():
            self.advance()  # closing delimiter
        return self._emit(tt, start, text)

    def _read_multistring(self) -> Token:
        r"""Read consecutive lines that each start with ``\\``.

        The segments are joined with newlines, each dropping one trailing
        carriage return. The line break after the last segment is consumed
        with it.
        """
        start = self._position()
        self.advance(2)
        segments: list[str] = []
        begin = self._read

        while True:
            while not self._at_end() and self._char != "\n":
                self.advance()
            segments.append(self._source[begin : self._read].removesuffix("\r"))
            if self._at_end():
                break

            self.advance()  # newline
            self.skip_whitespace()
            if self._char != "\\" or self.peek() != "\\":
                break
            segments.append("\n")
            self.advance(2)
            begin = self._read

        return self._emit(TokenType.STRING, start, "".join(segments))

    # ------------------------------------------------------------------
    # Compound operators
    # ------------------------------------------------------------------

    def _read_compound(self, lead: str) -> Token:
        start = self._position()
        tt = self._compound_three(_THREE_CHAR_RULES.get(lead, ()))
        if tt is None:
            rules, default = _COMPOUND_RULES[lead]
            tt = self._compound_or_else(rules, default)
        return self._emit(tt, start)

    def _compound_or_else(self, rules: _Rules, default: TokenType) -> TokenType:
        self.advance()
        for next_char, tt in rules:
            if self._char == next_char:
                self.advance()
                return tt
        return default

    def _compound_three(self, rules: tuple[tuple[str, str, TokenType], ...]) -> TokenType | None:
        for second, third, tt in rules:
            if self.peek() == second and self.peek_plus(1) == third:
                self.advance(3)
                return tt
        return None


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Convenience function: scan source text and return every token, EOF included."""
    return list(Scanner(source, filename))
