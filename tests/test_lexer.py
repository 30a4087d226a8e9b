# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Teeny Tiny lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords, identifiers, numbers and strings
#   - One- and two-character operators
#   - Newline tokens, whitespace and comments
#   - End-of-input behavior
#   - Position tracking
#   - Error conditions
# =============================================================================

import pytest
from teenytiny.lexer import Lexer, Token, TokenType, KEYWORDS
from teenytiny.errors import (
    TinyLexicalError,
    InvalidCharacterError,
    IllegalStringCharacterError,
    UnterminatedStringError,
    MalformedNumberError,
    MalformedOperatorError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list[Token]:
    """
    Tokenize and drop structural tokens (NEWLINE, EOF).

    Tests here focus on meaningful tokens; the trailing newline the lexer
    appends would otherwise show up in every result.
    """
    return [
        t for t in Lexer(source, "<test>").tokenize()
        if t.kind not in (TokenType.NEWLINE, TokenType.EOF)
    ]


def kinds(source: str) -> list[TokenType]:
    """Return the kinds of every token, including NEWLINE and EOF."""
    return [t.kind for t in Lexer(source, "<test>").tokenize()]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source yields the appended newline, then EOF."""
        assert kinds("") == [TokenType.NEWLINE, TokenType.EOF]

    def test_whitespace_only(self):
        """Spaces, tabs and carriage returns are skipped."""
        assert kinds("  \t \r ") == [TokenType.NEWLINE, TokenType.EOF]

    def test_newlines_are_tokens(self):
        """Every newline is a token of its own."""
        assert kinds("\n\n") == [
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_let_statement(self):
        """A complete statement tokenizes in order."""
        assert kinds("LET a = 5") == [
            TokenType.LET,
            TokenType.IDENT,
            TokenType.EQ,
            TokenType.NUMBER,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]


class TestKeywordsAndIdentifiers:
    """Test keyword recognition and identifier scanning."""

    @pytest.mark.parametrize("word,kind", list(KEYWORDS.items()))
    def test_keywords(self, word, kind):
        """Each reserved word has its own token kind."""
        tokens = tokenize(word)
        assert len(tokens) == 1
        assert tokens[0].kind == kind
        assert tokens[0].text == word

    def test_keywords_are_case_sensitive(self):
        """Lowercase keywords are plain identifiers."""
        tokens = tokenize("print Print PRINT")
        assert [t.kind for t in tokens] == [
            TokenType.IDENT,
            TokenType.IDENT,
            TokenType.PRINT,
        ]

    def test_identifier_with_digits(self):
        """Identifiers may contain digits after the first letter."""
        tokens = tokenize("abc123")
        assert tokens[0].kind == TokenType.IDENT
        assert tokens[0].text == "abc123"

    def test_keyword_prefix_is_identifier(self):
        """Only an exact match produces a keyword."""
        tokens = tokenize("PRINTX LETTER")
        assert [t.kind for t in tokens] == [TokenType.IDENT, TokenType.IDENT]

    def test_underscore_is_rejected(self):
        """Identifiers are letters and digits only."""
        with pytest.raises(InvalidCharacterError):
            tokenize("_name")


class TestNumbers:
    """Test numeric literal scanning."""

    @pytest.mark.parametrize("text", ["0", "5", "42", "12345", "3.14", "0.5", "10.25"])
    def test_valid_numbers(self, text):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenType.NUMBER
        assert tokens[0].text == text

    def test_trailing_dot_at_end_of_input(self):
        """'12.' is rejected."""
        with pytest.raises(MalformedNumberError):
            tokenize("12.")

    def test_dot_followed_by_letter(self):
        with pytest.raises(MalformedNumberError) as exc_info:
            tokenize("LET a = 1.x")
        assert exc_info.value.found == "x"

    def test_malformed_number_is_lexical_error(self):
        with pytest.raises(TinyLexicalError):
            tokenize("PRINT 7.")

    def test_number_followed_by_identifier(self):
        """Digits stop at the first non-digit."""
        tokens = tokenize("12ab")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenType.NUMBER, "12"),
            (TokenType.IDENT, "ab"),
        ]


class TestStrings:
    """Test string literal scanning."""

    def test_simple_string(self):
        """Token text excludes the quotes."""
        tokens = tokenize('"hello, world!"')
        assert len(tokens) == 1
        assert tokens[0].kind == TokenType.STRING
        assert tokens[0].text == "hello, world!"

    def test_empty_string(self):
        tokens = tokenize('""')
        assert tokens[0].kind == TokenType.STRING
        assert tokens[0].text == ""

    def test_string_keeps_keywords_and_hash(self):
        """Keywords and '#' inside a string are plain text."""
        tokens = tokenize('"PRINT # not a comment"')
        assert tokens[0].text == "PRINT # not a comment"

    @pytest.mark.parametrize("char", ["%", "\\", "\t", "\r"])
    def test_forbidden_characters(self, char):
        with pytest.raises(IllegalStringCharacterError) as exc_info:
            tokenize(f'"bad {char} string"')
        assert exc_info.value.char == char

    @pytest.mark.parametrize("position", ["start", "middle", "end"])
    def test_percent_rejected_anywhere(self, position):
        text = {"start": '"%d"', "middle": '"a%b"', "end": '"100%"'}[position]
        with pytest.raises(TinyLexicalError):
            tokenize(f"PRINT {text}")

    def test_newline_in_string(self):
        """A line break before the closing quote is an error."""
        with pytest.raises(UnterminatedStringError):
            tokenize('PRINT "broken\nstring"')

    def test_unterminated_at_end_of_input(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('PRINT "no end')


class TestOperators:
    """Test operator scanning."""

    @pytest.mark.parametrize("text,kind", [
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("*", TokenType.ASTERISK),
        ("/", TokenType.SLASH),
        ("=", TokenType.EQ),
        ("==", TokenType.EQEQ),
        ("!=", TokenType.NOTEQ),
        ("<", TokenType.LT),
        ("<=", TokenType.LTEQ),
        (">", TokenType.GT),
        (">=", TokenType.GTEQ),
    ])
    def test_operators(self, text, kind):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].kind == kind
        assert tokens[0].text == text

    def test_adjacent_operators(self):
        """'=' followed by '==' splits greedily from the left."""
        tokens = tokenize("===")
        assert [t.kind for t in tokens] == [TokenType.EQEQ, TokenType.EQ]

    def test_comparison_without_spaces(self):
        tokens = tokenize("a>=5")
        assert [t.text for t in tokens] == ["a", ">=", "5"]
        assert tokens[1].is_comparison_operator()

    def test_bang_alone_is_error(self):
        with pytest.raises(MalformedOperatorError) as exc_info:
            tokenize("a ! b")
        assert exc_info.value.expected == "!="

    def test_unknown_character(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("LET a = 5 ; 6")
        assert exc_info.value.char == ";"


# =============================================================================
# Comments
# =============================================================================

class TestComments:
    """Test '#' line comments."""

    def test_comment_line(self):
        """A comment discards the rest of the line but not the newline."""
        assert kinds("# a comment") == [TokenType.NEWLINE, TokenType.EOF]

    def test_comment_after_statement(self):
        tokens = tokenize("PRINT 1 # say one")
        assert [t.kind for t in tokens] == [TokenType.PRINT, TokenType.NUMBER]

    def test_comment_keeps_newline(self):
        assert kinds("# one\nPRINT 1") == [
            TokenType.NEWLINE,
            TokenType.PRINT,
            TokenType.NUMBER,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_comment_may_contain_anything(self):
        """Characters that are errors elsewhere are fine in a comment."""
        assert kinds('# 100% "\\ ! ;') == [TokenType.NEWLINE, TokenType.EOF]


# =============================================================================
# End of Input and Positions
# =============================================================================

class TestEndOfInput:
    """Test end-of-input behavior."""

    def test_eof_is_idempotent(self):
        """Once reached, EOF is returned on every call."""
        lexer = Lexer("PRINT 1")
        for _ in range(3):
            lexer.next_token()
        for _ in range(5):
            assert lexer.next_token().kind == TokenType.EOF

    def test_tokenize_stops_after_eof(self):
        tokens = list(Lexer("LET a = 1").tokenize())
        assert tokens[-1].kind == TokenType.EOF
        assert sum(1 for t in tokens if t.kind == TokenType.EOF) == 1

    def test_trailing_newline_appended(self):
        lexer = Lexer("PRINT 1")
        assert lexer.source == "PRINT 1\n"

    def test_token_count(self):
        """token_count counts everything before end of input."""
        lexer = Lexer("LET a = 5")
        list(lexer.tokenize())
        assert lexer.token_count == 5  # LET a = 5 NEWLINE

    def test_cur_char_past_end(self):
        lexer = Lexer("")
        list(lexer.tokenize())
        assert lexer.cur_char == ""


class TestPositions:
    """Test line/column tracking."""

    def test_columns(self):
        tokens = tokenize("LET abc = 12")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 5), (1, 9), (1, 11)]

    def test_lines(self):
        tokens = tokenize("PRINT 1\n\nPRINT 2")
        assert [t.line for t in tokens] == [1, 1, 3, 3]

    def test_filename_in_location(self):
        token = Lexer("PRINT 1", "prog.tt").next_token()
        assert str(token.location) == "prog.tt:1:1"

    def test_error_location(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("PRINT 1\nLET a = $")
        error = exc_info.value
        assert error.location.line == 2
        assert error.location.column == 9
        assert error.source_line == "LET a = $"
        assert "<test>:2:9: error:" in str(error)
