"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Literals (text carried on Token.value)
    TAG = auto()
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    REGEX = auto()

    # Keywords
    CONST = auto()
    LET = auto()
    RETURN = auto()
    FN = auto()
    RECORD = auto()
    ENUM = auto()
    TRAIT = auto()
    MODULE = auto()
    DEFER = auto()
    WHEN = auto()
    INLINE = auto()
    TRUE = auto()
    FALSE = auto()
    FOR = auto()
    WHILE = auto()
    BREAK = auto()
    CONTINUE = auto()
    MATCH = auto()
    IF = auto()
    ELSE = auto()
    AS = auto()
    AND = auto()
    OR = auto()
    DYN = auto()
    ANYTYPE = auto()

    # Modes
    MUTABLE = auto()  # mut
    MOVE = auto()  # mov
    LOCAL = auto()  # loc
    COMPTIME = auto()  # ctime

    # Assignment
    ASSIGN = auto()  # =
    ASSIGN_EXP = auto()  # :=

    # Punctuation
    DOT = auto()  # .
    COMMA = auto()  # ,
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    COLON = auto()  # :
    SEMICOLON = auto()  # ;
    ARROW = auto()  # ->
    FAT_ARROW = auto()  # =>

    # Operators
    ADDRESS = auto()  # @
    CASH = auto()  # $
    POUND = auto()  # #
    BANG = auto()  # !
    QUESTION = auto()  # ?
    RANGE_EXC = auto()  # ..
    RANGE_INC = auto()  # ...
    PIPELINE = auto()  # |>

    # Arithmetic
    PLUS = auto()  # +
    MINUS = auto()  # -
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    PERCENT = auto()  # %
    INCREMENT = auto()  # ++
    DECREMENT = auto()  # --
    POWER = auto()  # **

    # Bitwise
    AMPERSAND = auto()  # &
    PIPE = auto()  # |
    CARET = auto()  # ^
    TILDE = auto()  # ~
    LSHIFT = auto()  # <<
    RSHIFT = auto()  # >>

    # Comparison and pattern matching
    LESSER = auto()  # <
    LESSER_EQ = auto()  # <=
    GREATER = auto()  # >
    GREATER_EQ = auto()  # >=
    EQUAL = auto()  # ==
    NOT_EQUAL = auto()  # !=
    PATTERN_MATCH = auto()  # =~
    PATTERN_NOT_MATCH = auto()  # !~

    # Sentinels
    NEWLINE = auto()
    ILLEGAL = auto()
    EOF = auto()

    @property
    def text(self) -> str | None:
        """Canonical rendering, or None for kinds whose text is the lexeme."""
        return _RENDERINGS.get(self)

    @property
    def is_literal(self) -> bool:
        return self in _LITERALS

    @property
    def is_keyword(self) -> bool:
        return self in _KEYWORD_TYPES


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanner token.

    ``value`` holds the lexeme for literal kinds (tags, numbers, strings,
    regexes, illegal characters) and the canonical rendering otherwise.
    """

    type: TokenType
    value: str
    position: Position
    filename: str


_LITERALS = frozenset(
    {TokenType.TAG, TokenType.INTEGER, TokenType.FLOAT, TokenType.STRING, TokenType.REGEX}
)

KEYWORDS: dict[str, TokenType] = {
    "const": TokenType.CONST,
    "let": TokenType.LET,
    "return": TokenType.RETURN,
    "fn": TokenType.FN,
    "record": TokenType.RECORD,
    "enum": TokenType.ENUM,
    "trait": TokenType.TRAIT,
    "module": TokenType.MODULE,
    "defer": TokenType.DEFER,
    "when": TokenType.WHEN,
    "inline": TokenType.INLINE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "match": TokenType.MATCH,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "as": TokenType.AS,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "dyn": TokenType.DYN,
    "anytype": TokenType.ANYTYPE,
    "mut": TokenType.MUTABLE,
    "mov": TokenType.MOVE,
    "loc": TokenType.LOCAL,
    "ctime": TokenType.COMPTIME,
}

_KEYWORD_TYPES = frozenset(KEYWORDS.values())

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    ".": TokenType.DOT,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "@": TokenType.ADDRESS,
    "$": TokenType.CASH,
    "#": TokenType.POUND,
    "!": TokenType.BANG,
    "?": TokenType.QUESTION,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
    "~": TokenType.TILDE,
    "<": TokenType.LESSER,
    ">": TokenType.GREATER,
    "\n": TokenType.NEWLINE,
    "\0": TokenType.EOF,
}

_RENDERINGS: dict[TokenType, str] = {tt: word for word, tt in KEYWORDS.items()}
_RENDERINGS.update((tt, ch) for ch, tt in SINGLE_CHAR_TOKENS.items())
_RENDERINGS.update(
    {
        TokenType.ASSIGN_EXP: ":=",
        TokenType.ARROW: "->",
        TokenType.FAT_ARROW: "=>",
        TokenType.RANGE_EXC: "..",
        TokenType.RANGE_INC: "...",
        TokenType.PIPELINE: "|>",
        TokenType.INCREMENT: "++",
        TokenType.DECREMENT: "--",
        TokenType.POWER: "**",
        TokenType.LSHIFT: "<<",
        TokenType.RSHIFT: ">>",
        TokenType.LESSER_EQ: "<=",
        TokenType.GREATER_EQ: ">=",
        TokenType.EQUAL: "==",
        TokenType.NOT_EQUAL: "!=",
        TokenType.PATTERN_MATCH: "=~",
        TokenType.PATTERN_NOT_MATCH: "!~",
        TokenType.ILLEGAL: "illegal",
    }
)


def keyword_of(text: str) -> TokenType | None:
    """Return the keyword kind for an exact match of text, else None."""
    return KEYWORDS.get(text)


def type_of_char(ch: str) -> TokenType:
    """Classify a single character; anything unrecognized is ILLEGAL."""
    return SINGLE_CHAR_TOKENS.get(ch, TokenType.ILLEGAL)


# ASCII only: non-ASCII letters are legal inside strings, regexes, and
# comments, but not in bare words.
_ALPHABETICAL = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_DIGITS = frozenset("0123456789")


def is_alphabetical(ch: str) -> bool:
    """Return True if ch is an ASCII letter or underscore."""
    return ch in _ALPHABETICAL


def is_integer(ch: str) -> bool:
    """Return True if ch is an ASCII digit."""
    return ch in _DIGITS


def is_alphanumeric(ch: str) -> bool:
    return ch in _ALPHABETICAL or ch in _DIGITS
