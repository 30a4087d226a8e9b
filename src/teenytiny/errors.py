"""
Teeny Tiny Compiler Error Hierarchy
===================================

This module defines the exception hierarchy for the Teeny Tiny compiler.
All exceptions inherit from TeenyTinyError, allowing callers to catch every
compiler-related error with a single except clause.

Exception Hierarchy
-------------------
TeenyTinyError (base)
├── TinyLexicalError - characters the lexer cannot classify
│   ├── InvalidCharacterError - unexpected character in source
│   ├── IllegalStringCharacterError - forbidden character inside a string
│   ├── UnterminatedStringError - newline before the closing quote
│   ├── MalformedNumberError - '.' not followed by a digit
│   └── MalformedOperatorError - '!' not followed by '='
├── TinySyntaxError - token sequence does not match the grammar
│   ├── UnexpectedTokenError - token cannot start/continue a rule
│   ├── MissingTokenError - required token is absent
│   └── MissingComparisonError - condition without a comparison operator
├── TinySemanticError - grammatical but meaningless programs
│   ├── UndeclaredVariableError - variable used before LET/INPUT
│   ├── DuplicateLabelError - LABEL declared twice
│   └── UndeclaredLabelError - GOTO to a label that never appears
└── TinyIOError - file handling around the compiler
    ├── SourceExtensionError - input file lacks the .tt extension
    ├── SourceReadError - input file cannot be read
    └── OutputWriteError - output file cannot be written

Error Message Format
--------------------
Compiler errors include source location information when it is known:

    hello.tt:3:7: error: referencing variable before assignment: 'totl'
        PRINT totl
              ^
    hint: assign it with LET or read it with INPUT first
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in a source file, used for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class TeenyTinyError(Exception):
    """
    Base exception for all Teeny Tiny compiler errors.

    Provides the common message layout: location prefix, the offending
    source line with a caret under the error column, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class TinyLexicalError(TeenyTinyError):
    """
    Lexical error in Teeny Tiny source code.

    Raised when the lexer meets a character sequence that cannot be turned
    into a token. Lexing stops at the first such error.
    """
    pass


class InvalidCharacterError(TinyLexicalError):
    """Character that cannot start any token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token: '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class IllegalStringCharacterError(TinyLexicalError):
    """
    Forbidden character inside a string literal.

    Strings are pasted verbatim into a printf() format string, so carriage
    returns, tabs, backslashes and '%' are not allowed.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"illegal character in string: {char!r}",
            location=location,
            hint="strings may not contain '%', '\\', tabs or line breaks",
            source_line=source_line,
        )


class UnterminatedStringError(TinyLexicalError):
    """String literal not closed before the end of the line."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class MalformedNumberError(TinyLexicalError):
    """Number literal with a decimal point but no fractional digits."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"illegal character in number: {found!r}",
            location=location,
            hint="a decimal point must be followed by at least one digit",
            source_line=source_line,
        )


class MalformedOperatorError(TinyLexicalError):
    """Incomplete two-character operator, e.g. '!' without '='."""

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected '{expected}', got {found!r}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class TinySyntaxError(TeenyTinyError):
    """
    Syntax error in Teeny Tiny source code.

    Raised when the parser finds a token sequence that does not match the
    grammar production it is recognizing.
    """
    pass


class UnexpectedTokenError(TinySyntaxError):
    """Token that does not fit the grammar at this position."""

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(TinySyntaxError):
    """Required token is missing."""

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, got {found}",
            location=location,
            source_line=source_line,
        )


class MissingComparisonError(TinySyntaxError):
    """IF/WHILE condition without a comparison operator."""

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"expected comparison operator, got {found}",
            location=location,
            hint="conditions need one of ==, !=, <, <=, >, >=",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class TinySemanticError(TeenyTinyError):
    """
    Semantic error in Teeny Tiny source code.

    The program is grammatical but refers to names that do not exist or
    declares the same label twice.
    """
    pass


class UndeclaredVariableError(TinySemanticError):
    """Variable referenced before any LET or INPUT assigned it."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"referencing variable before assignment: '{name}'",
            location=location,
            hint="assign it with LET or read it with INPUT first",
            source_line=source_line,
        )


class DuplicateLabelError(TinySemanticError):
    """LABEL declared more than once."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"label already declared: '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndeclaredLabelError(TinySemanticError):
    """GOTO whose target label is not declared anywhere in the program."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"attempting to GOTO undeclared label: '{name}'",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# I/O Errors
# =============================================================================

class TinyIOError(TeenyTinyError):
    """
    Error reading source or writing output.

    These never carry a source location; the message names the file.
    """
    pass


class SourceExtensionError(TinyIOError):
    """Input filename does not carry the required extension."""

    def __init__(self, filename: str, extension: str):
        self.filename = filename
        self.extension = extension
        super().__init__(
            f"cannot compile '{filename}': expected a '{extension}' source file"
        )


class SourceReadError(TinyIOError):
    """Input file cannot be read."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot read file '{filename}': {reason}")


class OutputWriteError(TinyIOError):
    """Output file cannot be written (or was already written)."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot write file '{filename}': {reason}")
