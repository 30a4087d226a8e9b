"""
Teeny Tiny Recursive Descent Parser and Code Generator
======================================================

This module validates Teeny Tiny programs and translates them to C in the
same pass. There is no syntax tree: each grammar rule is one method that
checks the tokens it expects and hands the matching C text to the
emitter as soon as it has recognized it.

Grammar (EBNF)
--------------
program    ::= {statement}
statement  ::= "PRINT" (expression | string) nl
             | "IF" comparison "THEN" nl {statement} "ENDIF" nl
             | "WHILE" comparison "REPEAT" nl {statement} "ENDWHILE" nl
             | "LABEL" ident nl
             | "GOTO" ident nl
             | "LET" ident "=" expression nl
             | "INPUT" ident nl
comparison ::= expression (("==" | "!=" | ">" | ">=" | "<" | "<=") expression)+
expression ::= term {("+" | "-") term}
term       ::= unary {("*" | "/") unary}
unary      ::= ["+" | "-"] primary
primary    ::= number | ident
nl         ::= NEWLINE {NEWLINE}

Translation
-----------
| Teeny Tiny           | C                                          |
|----------------------|--------------------------------------------|
| PRINT "hi"           | printf("hi\\n");                            |
| PRINT a + 1          | printf("%.2f\\n", (float)(a+1));            |
| IF a > 5 THEN        | if(a>5){                                   |
| WHILE n < 10 REPEAT  | while(n<10){                               |
| ENDIF / ENDWHILE     | }                                          |
| LABEL top            | top:                                       |
| GOTO top             | goto top;                                  |
| LET a = 5            | a = 5;        (plus "float a;" in header)  |
| INPUT a              | guarded scanf() that zeroes a on bad input |

Semantic Checks
---------------
- A variable must be assigned by LET or INPUT before it is read.
- A label may be declared only once.
- Every GOTO target must be declared somewhere in the program. Labels may
  appear after the GOTO that uses them, so this is checked once the whole
  program has been parsed.

Example Usage
-------------
>>> from teenytiny.lexer import Lexer
>>> from teenytiny.emitter import Emitter
>>> from teenytiny.parser import Parser
>>> emitter = Emitter()
>>> context = Parser(Lexer("LET a = 5\\nPRINT a\\n"), emitter).parse()
>>> sorted(context.symbols)
['a']
>>> print(emitter.render(), end="")
#include <stdio.h>
int main(void){
float a;
a = 5;
printf("%.2f\\n", (float)(a));
return 0;
}
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from teenytiny.errors import (
    SourceLocation,
    UnexpectedTokenError,
    MissingTokenError,
    MissingComparisonError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)
from teenytiny.lexer import Lexer, Token, TokenType
from teenytiny.emitter import Emitter

logger = logging.getLogger(__name__)


# =============================================================================
# Parse Context
# =============================================================================

@dataclass
class ParseContext:
    """
    Mutable state of one compilation.

    The name collections only ever grow. Label collections map each name
    to where it was first declared or referenced.

    Attributes:
        cur_token: Token being examined
        peek_token: One-token lookahead
        symbols: Variables assigned so far by LET or INPUT
        labels_declared: Labels declared so far, with their locations
        labels_gotoed: Labels used by GOTO so far, in order of first use
    """
    cur_token: Optional[Token] = None
    peek_token: Optional[Token] = None
    symbols: set[str] = field(default_factory=set)
    labels_declared: dict[str, SourceLocation] = field(default_factory=dict)
    labels_gotoed: dict[str, SourceLocation] = field(default_factory=dict)


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Single-pass recursive descent parser emitting C.

    The parser pulls tokens from the lexer on demand, keeping the current
    token and one token of lookahead. The first error of any kind is raised
    immediately; there is no recovery.

    Attributes:
        lexer: Token source
        emitter: Destination for generated C text
        context: Tokens and name tables for this compilation
    """

    def __init__(self, lexer: Lexer, emitter: Emitter):
        self.lexer = lexer
        self.emitter = emitter
        self.context = ParseContext()
        self._source_lines = lexer.source.split(Lexer.NEWLINE)

        # Fill cur_token and peek_token
        self._next_token()
        self._next_token()

    def parse(self) -> ParseContext:
        """
        Parse the whole program, emitting C as it goes.

        Returns:
            The final ParseContext (declared variables and labels)

        Raises:
            TinyLexicalError: If the lexer rejects the input
            TinySyntaxError: If the tokens do not match the grammar
            TinySemanticError: On use-before-assignment or label errors
        """
        self._program()
        return self.context

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _check(self, kind: TokenType) -> bool:
        """Check if the current token is of the given kind."""
        return self.context.cur_token.kind == kind

    def _next_token(self) -> None:
        self.context.cur_token = self.context.peek_token
        self.context.peek_token = self.lexer.next_token()

    def _expect(self, kind: TokenType, description: str) -> Token:
        """
        Expect and consume a token of the given kind.

        Args:
            kind: The required token kind
            description: How to name the token in the error message

        Returns:
            The consumed token

        Raises:
            MissingTokenError: If the current token is of another kind
        """
        token = self.context.cur_token
        if token.kind != kind:
            raise MissingTokenError(
                description,
                token.describe(),
                token.location,
                self._get_source_line(token.line),
            )
        self._next_token()
        return token

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self._source_lines):
            return self._source_lines[line - 1]
        return None

    # =========================================================================
    # Program and Statements
    # =========================================================================

    def _program(self) -> None:
        """program ::= {statement}"""
        self.emitter.header_line("#include <stdio.h>")
        self.emitter.header_line("int main(void){")

        # Blank lines before the first statement
        while self._check(TokenType.NEWLINE):
            self._next_token()

        while not self._check(TokenType.EOF):
            self._statement()

        self._check_goto_targets()

        self.emitter.emit_line("return 0;")
        self.emitter.emit_line("}")

    def _statement(self) -> None:
        """Parse one statement and its terminating newline(s)."""
        token = self.context.cur_token

        if token.kind == TokenType.PRINT:
            self._print_statement()
        elif token.kind == TokenType.IF:
            self._if_statement()
        elif token.kind == TokenType.WHILE:
            self._while_statement()
        elif token.kind == TokenType.LABEL:
            self._label_statement()
        elif token.kind == TokenType.GOTO:
            self._goto_statement()
        elif token.kind == TokenType.LET:
            self._let_statement()
        elif token.kind == TokenType.INPUT:
            self._input_statement()
        else:
            raise UnexpectedTokenError(
                token.describe(),
                "a statement (PRINT, IF, WHILE, LABEL, GOTO, LET or INPUT)",
                token.location,
                self._get_source_line(token.line),
            )

        self._nl()

    def _print_statement(self) -> None:
        """PRINT (expression | string)"""
        self._next_token()

        if self._check(TokenType.STRING):
            self.emitter.emit_line(f'printf("{self.context.cur_token.text}\\n");')
            self._next_token()
        else:
            self.emitter.emit('printf("%.2f\\n", (float)(')
            self._expression()
            self.emitter.emit_line("));")

    def _if_statement(self) -> None:
        """IF comparison THEN nl {statement} ENDIF"""
        self._next_token()
        self.emitter.emit("if(")
        self._comparison()
        self._expect(TokenType.THEN, "'THEN'")
        self._nl()
        self.emitter.emit_line("){")

        self._block(TokenType.ENDIF)
        self.emitter.emit_line("}")

    def _while_statement(self) -> None:
        """WHILE comparison REPEAT nl {statement} ENDWHILE"""
        self._next_token()
        self.emitter.emit("while(")
        self._comparison()
        self._expect(TokenType.REPEAT, "'REPEAT'")
        self._nl()
        self.emitter.emit_line("){")

        self._block(TokenType.ENDWHILE)
        self.emitter.emit_line("}")

    def _block(self, terminator: TokenType) -> None:
        """
        Parse zero or more statements up to and including ``terminator``.

        Raises:
            MissingTokenError: If the input ends before the terminator
        """
        while not self._check(terminator):
            if self._check(TokenType.EOF):
                token = self.context.cur_token
                raise MissingTokenError(
                    f"'{terminator.name}'",
                    token.describe(),
                    token.location,
                    self._get_source_line(token.line),
                )
            self._statement()

        self._next_token()

    def _label_statement(self) -> None:
        """LABEL ident"""
        self._next_token()
        token = self._expect(TokenType.IDENT, "label name")
        name = token.text

        labels = self.context.labels_declared
        if name in labels:
            raise DuplicateLabelError(
                name,
                token.location,
                labels[name],
                self._get_source_line(token.line),
            )

        labels[name] = token.location
        logger.debug("Declared label '%s' at %s", name, token.location)
        self.emitter.emit_line(f"{name}:")

    def _goto_statement(self) -> None:
        """GOTO ident (target checked after the whole program)"""
        self._next_token()
        token = self._expect(TokenType.IDENT, "label name")

        self.context.labels_gotoed.setdefault(token.text, token.location)
        self.emitter.emit_line(f"goto {token.text};")

    def _let_statement(self) -> None:
        """
        LET ident = expression

        The right-hand side is parsed before the variable is declared, so a
        variable cannot be read in its own first assignment.
        """
        self._next_token()
        name = self._expect(TokenType.IDENT, "variable name").text
        self._expect(TokenType.EQ, "'='")

        self.emitter.emit(f"{name} = ")
        self._expression()
        self.emitter.emit_line(";")

        self._declare_variable(name)

    def _input_statement(self) -> None:
        """
        INPUT ident

        Reads a float with scanf(). On bad or missing input the variable is
        set to 0 and the rest of the input word is discarded.
        """
        self._next_token()
        name = self._expect(TokenType.IDENT, "variable name").text
        self._declare_variable(name)

        self.emitter.emit_line(f'if(0 == scanf("%f", &{name})) {{')
        self.emitter.emit_line(f"{name} = 0;")
        self.emitter.emit('scanf("%')
        self.emitter.emit_line('*s");')
        self.emitter.emit_line("}")

    # =========================================================================
    # Expressions
    # =========================================================================

    def _comparison(self) -> None:
        """comparison ::= expression (comparison_op expression)+"""
        self._expression()

        token = self.context.cur_token
        if not token.is_comparison_operator():
            raise MissingComparisonError(
                token.describe(),
                token.location,
                self._get_source_line(token.line),
            )

        while self.context.cur_token.is_comparison_operator():
            self.emitter.emit(self.context.cur_token.text)
            self._next_token()
            self._expression()

    def _expression(self) -> None:
        """expression ::= term {("+" | "-") term}"""
        self._term()
        while self._check(TokenType.PLUS) or self._check(TokenType.MINUS):
            self.emitter.emit(self.context.cur_token.text)
            self._next_token()
            self._term()

    def _term(self) -> None:
        """term ::= unary {("*" | "/") unary}"""
        self._unary()
        while self._check(TokenType.ASTERISK) or self._check(TokenType.SLASH):
            self.emitter.emit(self.context.cur_token.text)
            self._next_token()
            self._unary()

    def _unary(self) -> None:
        """unary ::= ["+" | "-"] primary"""
        if self._check(TokenType.PLUS) or self._check(TokenType.MINUS):
            self.emitter.emit(self.context.cur_token.text)
            self._next_token()
        self._primary()

    def _primary(self) -> None:
        """primary ::= number | ident"""
        token = self.context.cur_token

        if token.kind == TokenType.NUMBER:
            self.emitter.emit(token.text)
            self._next_token()
        elif token.kind == TokenType.IDENT:
            if token.text not in self.context.symbols:
                raise UndeclaredVariableError(
                    token.text,
                    token.location,
                    self._get_source_line(token.line),
                )
            self.emitter.emit(token.text)
            self._next_token()
        else:
            raise UnexpectedTokenError(
                token.describe(),
                "a number or variable",
                token.location,
                self._get_source_line(token.line),
            )

    def _nl(self) -> None:
        """nl ::= NEWLINE {NEWLINE}"""
        self._expect(TokenType.NEWLINE, "newline")
        while self._check(TokenType.NEWLINE):
            self._next_token()

    # =========================================================================
    # Semantic Helpers
    # =========================================================================

    def _declare_variable(self, name: str) -> None:
        """Record a variable and emit its declaration on first sight."""
        if name in self.context.symbols:
            return

        self.context.symbols.add(name)
        self.emitter.header_line(f"float {name};")
        logger.debug("Declared variable '%s'", name)

    def _check_goto_targets(self) -> None:
        """
        Verify every GOTO target was declared with LABEL.

        Raises:
            UndeclaredLabelError: For the first undeclared target, in order
                of first use
        """
        for name, location in self.context.labels_gotoed.items():
            if name not in self.context.labels_declared:
                raise UndeclaredLabelError(
                    name,
                    location,
                    self._get_source_line(location.line),
                )
