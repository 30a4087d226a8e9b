"""
Teeny Tiny Lexer (Tokenizer)
============================

This module implements the character-level scanner for the Teeny Tiny
language. The parser pulls tokens from it one at a time through
``next_token()``; nothing is buffered ahead of the parser's own one-token
lookahead.

Token Categories
----------------
- Structure: end of input, newline (newlines terminate statements)
- Literals: numbers (``12``, ``3.25``) and strings (``"hello"``)
- Identifiers: a letter followed by letters or digits
- Keywords: LABEL GOTO PRINT INPUT LET IF THEN ENDIF WHILE REPEAT ENDWHILE
- Operators: = + - * / == != < <= > >=

Keywords are case-sensitive: ``PRINT`` is a keyword, ``print`` is an
identifier.

Comments
--------
``#`` discards everything up to (not including) the end of the line.

String Restrictions
-------------------
String literals are copied verbatim into a C ``printf()`` format string, so
they may not contain ``%``, backslashes, tabs or line breaks.

Example Usage
-------------
>>> from teenytiny.lexer import Lexer
>>> lexer = Lexer('LET a = 5\\n', "test.tt")
>>> for token in lexer.tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENT, 'a', 1:5)
Token(EQ, '=', 1:7)
Token(NUMBER, '5', 1:9)
Token(NEWLINE, 1:10)
Token(NEWLINE, 2:1)
Token(EOF, 3:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from teenytiny.errors import (
    SourceLocation,
    InvalidCharacterError,
    IllegalStringCharacterError,
    UnterminatedStringError,
    MalformedNumberError,
    MalformedOperatorError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token kinds for the Teeny Tiny language.

    Every keyword and operator has its own variant so the parser can
    dispatch on the kind alone.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input (repeats forever once reached)
    NEWLINE = auto()        # Statement terminator

    # === Identifiers and Literals ===
    NUMBER = auto()         # 12, 3.25
    IDENT = auto()          # Variable and label names
    STRING = auto()         # "..." (text excludes the quotes)

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

    # === Operators ===
    EQ = auto()             # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /
    EQEQ = auto()           # ==
    NOTEQ = auto()          # !=
    LT = auto()             # <
    LTEQ = auto()           # <=
    GT = auto()             # >
    GTEQ = auto()           # >=


# =============================================================================
# Keyword and Operator Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "LABEL": TokenType.LABEL,
    "GOTO": TokenType.GOTO,
    "PRINT": TokenType.PRINT,
    "INPUT": TokenType.INPUT,
    "LET": TokenType.LET,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ENDIF": TokenType.ENDIF,
    "WHILE": TokenType.WHILE,
    "REPEAT": TokenType.REPEAT,
    "ENDWHILE": TokenType.ENDWHILE,
}

COMPARISON_OPERATORS = frozenset({
    TokenType.EQEQ,
    TokenType.NOTEQ,
    TokenType.LT,
    TokenType.LTEQ,
    TokenType.GT,
    TokenType.GTEQ,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Teeny Tiny source code.

    Attributes:
        kind: The TokenType classification
        text: The lexeme as it appears in the source (strings without quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenType
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.kind in (TokenType.EOF, TokenType.NEWLINE):
            return f"Token({self.kind.name}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Human-readable description used in parser error messages."""
        if self.kind == TokenType.EOF:
            return "end of input"
        if self.kind == TokenType.NEWLINE:
            return "newline"
        if self.kind == TokenType.STRING:
            return f'string "{self.text}"'
        return f"'{self.text}'"

    def is_comparison_operator(self) -> bool:
        """Return True for ==, !=, <, <=, > and >=."""
        return self.kind in COMPARISON_OPERATORS


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Teeny Tiny source code on demand.

    A newline is appended to the source at construction so the last
    statement is always terminated. The cursor only moves forward; once the
    end is reached every call to ``next_token()`` returns an EOF token.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()

    Attributes:
        source: The source code being tokenized (with trailing newline)
        filename: Name of the source file (for error reporting)
        token_count: Number of tokens produced before end of input
    """

    NEWLINE = "\n"
    COMMENT = "#"
    QUOTE = '"'
    DECIMAL_POINT = "."

    # Skipped between tokens; newlines are significant and never skipped
    WHITESPACE = frozenset(" \t\r")

    DIGITS = frozenset(string.digits)
    IDENT_START = frozenset(string.ascii_letters)
    IDENT_CHARS = frozenset(string.ascii_letters + string.digits)

    # Characters with special meaning inside a printf() format string
    STRING_FORBIDDEN = frozenset("\r\t\\%")

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The Teeny Tiny source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source + self.NEWLINE
        self.filename = filename
        self.token_count = 0

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    @property
    def cur_char(self) -> str:
        """Character under the cursor, or "" once past the end."""
        return self._peek()

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next Token; an EOF token once the input is exhausted

        Raises:
            TinyLexicalError: If the input cannot be tokenized
        """
        self._skip_whitespace()
        self._skip_comment()

        if self._at_end():
            return self._make_token(TokenType.EOF, "", self._line, self._column)

        token = self._scan_token()
        self.token_count += 1
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EOF token.

        Raises:
            TinyLexicalError: If the input cannot be tokenized
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenType.EOF:
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at the character at cursor + offset; "" if past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == self.NEWLINE:
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume the next character if it equals ``expected``."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        kind: TokenType,
        text: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            kind=kind,
            text=text,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _location(
        self,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> SourceLocation:
        return SourceLocation(
            self.filename,
            line if line is not None else self._line,
            column if column is not None else self._column,
        )

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find(self.NEWLINE, self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while self._peek() in self.WHITESPACE:
            self._advance()

    def _skip_comment(self) -> None:
        if self._peek() == self.COMMENT:
            while not self._at_end() and self._peek() != self.NEWLINE:
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char == self.NEWLINE:
            self._advance()
            return self._make_token(TokenType.NEWLINE, char, start_line, start_column)

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in self.DIGITS:
            return self._scan_number(start_line, start_column)

        if char == self.QUOTE:
            return self._scan_string(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        The lexeme is looked up in the keyword table; only an exact
        (case-sensitive) match produces a keyword token.
        """
        chars = []
        while self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        kind = KEYWORDS.get(name, TokenType.IDENT)
        return self._make_token(kind, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal: digits, optionally '.' and more digits.

        Raises:
            MalformedNumberError: If the decimal point has no digits after it
        """
        chars = []
        while self._peek() in self.DIGITS:
            chars.append(self._advance())

        if self._peek() == self.DECIMAL_POINT:
            chars.append(self._advance())
            if self._peek() not in self.DIGITS:
                raise MalformedNumberError(
                    self._peek() or "end of input",
                    self._location(),
                    self._get_current_line(),
                )
            while self._peek() in self.DIGITS:
                chars.append(self._advance())

        return self._make_token(TokenType.NUMBER, "".join(chars), start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a double-quoted string literal.

        The token text is the content between the quotes. There are no
        escape sequences.

        Raises:
            UnterminatedStringError: If the line ends before the closing quote
            IllegalStringCharacterError: On '%', backslash, tab or CR
        """
        self._advance()  # consume opening "

        chars = []
        while not self._at_end():
            char = self._peek()

            if char == self.QUOTE:
                self._advance()  # consume closing "
                return self._make_token(
                    TokenType.STRING,
                    "".join(chars),
                    start_line,
                    start_column,
                )

            if char == self.NEWLINE:
                raise UnterminatedStringError(
                    self._location(start_line, start_column),
                    self._get_current_line(),
                )

            if char in self.STRING_FORBIDDEN:
                raise IllegalStringCharacterError(
                    char,
                    self._location(),
                    self._get_current_line(),
                )

            chars.append(self._advance())

        raise UnterminatedStringError(self._location(start_line, start_column))

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """
        Scan a one- or two-character operator.

        Raises:
            MalformedOperatorError: If '!' is not followed by '='
            InvalidCharacterError: If the character starts no token
        """
        source_line = self._get_current_line()
        char = self._advance()

        if char == "+":
            return self._make_token(TokenType.PLUS, char, start_line, start_column)
        if char == "-":
            return self._make_token(TokenType.MINUS, char, start_line, start_column)
        if char == "*":
            return self._make_token(TokenType.ASTERISK, char, start_line, start_column)
        if char == "/":
            return self._make_token(TokenType.SLASH, char, start_line, start_column)

        if char == "=":
            if self._match("="):
                return self._make_token(TokenType.EQEQ, "==", start_line, start_column)
            return self._make_token(TokenType.EQ, "=", start_line, start_column)

        if char == ">":
            if self._match("="):
                return self._make_token(TokenType.GTEQ, ">=", start_line, start_column)
            return self._make_token(TokenType.GT, ">", start_line, start_column)

        if char == "<":
            if self._match("="):
                return self._make_token(TokenType.LTEQ, "<=", start_line, start_column)
            return self._make_token(TokenType.LT, "<", start_line, start_column)

        if char == "!":
            if self._match("="):
                return self._make_token(TokenType.NOTEQ, "!=", start_line, start_column)
            raise MalformedOperatorError(
                "!=",
                "!" + self._peek(),
                self._location(start_line, start_column),
                source_line,
            )

        raise InvalidCharacterError(
            char,
            self._location(start_line, start_column),
            source_line,
        )
