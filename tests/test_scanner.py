"""Test the scanner cursor, iteration protocol, reset, comments and positions."""

import pytest

from rex.scanner import Scanner, tokenize
from rex.tokens import TokenType

from .conftest import assert_types, positions

_SOURCES = [
    "",
    "\n\n\r\n",
    "   \t ",
    "+-*/<>!@$%&^=|;:?,.",
    "()[]{}~",
    "<==>->!!=..:=...=~!~",
    "a ... b => c",
    ".....",
    "+++",
    "1234",
    "12.4",
    "12.2.4",
    "12.",
    "1..2",
    "\n# imma comment\n1234\n12.4 # Another Comment\n12.2.4\n",
    "\nhello\nhey?\nyo!\nlet\n",
    "what?? ? !",
    '"hello" ""',
    '"a\nb" c',
    '"abc',
    "`rex(lang|xer)` `abc",
    '"hello"\n\\\\hello, world\n\\\\!\n',
    "    \\\\first\n    \\\\second\n    \\\\third\nx",
    "\\\\a\r\n\\\\b\r\nx",
    "\\\\abc",
    "\nlet x: int = 12\nconst y: regex = `rex(lang|xer)`\nlet z: string = \"rexlang\"\nz =~ y\n",
    "a # comment\nb",
    "# one\n# two\nx",
    "a \t\r b\r\nc",
    "\n\n  x",
    "let x\n  y := 1.5\nz",
    '"ünï" x',
    "a ' b\nc ' d",
    "a\0b é",
    'let x = "a"\n\\\\m\n\\\\n\n# c\n12.2.4 |> f?\n',
]


class TestIteration:
    def test_eof_then_exhausted(self):
        scanner = Scanner("x", "f.rx")
        assert scanner.next_token().type == TokenType.TAG
        assert scanner.next_token().type == TokenType.EOF
        assert scanner.next_token() is None
        assert scanner.next_token() is None

    def test_iterator_stops_after_eof(self):
        scanner = Scanner("a b")
        tokens = list(scanner)
        assert_types(tokens, [TokenType.TAG, TokenType.TAG, TokenType.EOF])
        with pytest.raises(StopIteration):
            next(scanner)

    def test_lazy(self):
        scanner = Scanner("a b c")
        first = next(scanner)
        assert first.value == "a"
        assert [t.value for t in scanner][:2] == ["b", "c"]

    def test_filename_shared(self):
        tokens = tokenize("a b", "main.rx")
        assert all(t.filename == "main.rx" for t in tokens)
        assert tokens[0].filename is tokens[1].filename

    def test_default_filename(self):
        assert tokenize("a")[0].filename == "<input>"


class TestEmptyInput:
    def test_empty(self, scan):
        tokens = scan("")
        assert_types(tokens, [TokenType.EOF])
        assert positions(tokens) == [(1, 1)]

    def test_only_newlines(self, scan):
        tokens = scan("\n\n\r\n")
        assert_types(tokens, [TokenType.EOF])

    def test_only_whitespace(self, scan):
        tokens = scan("   \t ")
        assert_types(tokens, [TokenType.EOF])
        assert positions(tokens) == [(1, 6)]


class TestReset:
    def test_rescan_identical(self):
        source = 'let x = "a"\n\\\\m\n\\\\n\n# c\n12.2.4 |> f?\n'
        scanner = Scanner(source, "f.rx")
        first = list(scanner)
        scanner.reset()
        second = list(scanner)
        assert first == second

    def test_reset_mid_scan(self):
        scanner = Scanner("a b c")
        next(scanner)
        next(scanner)
        scanner.reset()
        assert next(scanner).value == "a"

    def test_reset_keeps_filename(self):
        scanner = Scanner("a", "keep.rx")
        list(scanner)
        scanner.reset()
        assert scanner.filename == "keep.rx"
        assert next(scanner).filename == "keep.rx"


class TestComments:
    def test_comment_dropped_newline_kept(self, scan):
        tokens = scan("a # comment\nb")
        assert_types(tokens, [TokenType.TAG, TokenType.NEWLINE, TokenType.TAG, TokenType.EOF])

    def test_comment_at_end_of_input(self, scan):
        tokens = scan("a # trailing")
        assert_types(tokens, [TokenType.TAG, TokenType.EOF])

    def test_comment_only(self, scan):
        tokens = scan("# nothing here")
        assert_types(tokens, [TokenType.EOF])

    def test_comment_does_not_merge(self, lex):
        tokens = lex("x#y\nz")
        assert_types(tokens, [TokenType.TAG, TokenType.NEWLINE, TokenType.TAG])
        assert tokens[0].value == "x"

    def test_consecutive_comment_lines(self, lex):
        tokens = lex("# one\n# two\nx")
        assert_types(tokens, [TokenType.NEWLINE, TokenType.NEWLINE, TokenType.TAG])

    def test_pound_never_emitted(self, lex):
        tokens = lex("#")
        assert tokens == []


class TestWhitespace:
    def test_spaces_tabs_cr_skipped(self, lex):
        tokens = lex("a \t\r b")
        assert_types(tokens, [TokenType.TAG, TokenType.TAG])

    def test_crlf_gives_newline(self, lex):
        tokens = lex("a\r\nb")
        assert_types(tokens, [TokenType.TAG, TokenType.NEWLINE, TokenType.TAG])

    def test_newline_value(self, lex):
        tokens = lex("a\nb")
        assert tokens[1].value == "\n"

    def test_leading_newlines_trimmed(self, scan):
        tokens = scan("\n\n  x")
        assert positions(tokens)[0] == (1, 3)

    def test_leading_lines_counted(self):
        scanner = Scanner("\n\r\n\nx")
        assert scanner.leading_lines == 3
        assert scanner.source == "x"


class TestPositions:
    def test_multi_line_positions(self, scan):
        tokens = scan("let x\n  y := 1.5\nz")
        assert positions(tokens) == [
            (1, 1),
            (1, 5),
            (1, 6),
            (2, 3),
            (2, 5),
            (2, 8),
            (2, 11),
            (3, 1),
            (3, 2),
        ]

    def test_unicode_columns_count_characters(self, scan):
        tokens = scan('"ünï" x')
        assert positions(tokens)[1] == (1, 7)

    @pytest.mark.parametrize("source", _SOURCES)
    def test_every_source_monotonic_and_one_based(self, scan, source):
        seen = positions(scan(source))
        assert seen == sorted(seen)
        assert all(line >= 1 and col >= 1 for line, col in seen)

    def test_monotonic_and_one_based(self, scan):
        source = (
            "fn main() -> int {\n"
            "    let xs = [1, 2.5, 3] # numbers\n"
            '    \\\\multi\n'
            '    \\\\line\n'
            "    xs |> map(`\\d`) ... \"s\"\n"
            "    x != y and a =~ b\n"
            "}\n"
        )
        tokens = scan(source)
        seen = positions(tokens)
        assert seen == sorted(seen)
        assert all(line >= 1 and col >= 1 for line, col in seen)


class TestCursorPrimitives:
    def test_peek_does_not_move(self):
        scanner = Scanner("abc")
        assert scanner.peek() == "b"
        assert scanner.peek_plus(1) == "c"
        assert scanner.peek() == "b"

    def test_peek_past_end_is_nul(self):
        scanner = Scanner("a")
        assert scanner.peek() == "\0"
        assert scanner.peek_plus(5) == "\0"

    def test_advance_is_clamped(self):
        scanner = Scanner("abcdef")
        scanner.advance(10)
        assert scanner.peek() == "e"

    def test_advance_negative_is_noop(self):
        scanner = Scanner("ab")
        scanner.advance(-1)
        assert scanner.peek() == "b"

    def test_advance_past_end_is_noop(self):
        scanner = Scanner("a")
        scanner.advance(3)
        assert next(scanner).type == TokenType.EOF
