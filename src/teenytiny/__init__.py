"""
Teeny Tiny - A Compiler from Teeny Tiny to C
============================================

This package translates programs written in Teeny Tiny, a minimal
teaching language, into C source code that any C compiler can build.

Teeny Tiny has a single numeric type, variables created on first
assignment, IF/WHILE blocks, labels with GOTO, and formatted PRINT/INPUT:

    # Count to ten
    LET n = 1
    WHILE n <= 10 REPEAT
        PRINT n
        LET n = n + 1
    ENDWHILE

Main Components
---------------
- **lexer**: character scanner producing tokens on demand
- **parser**: recursive descent parser that validates and emits C in one pass
- **emitter**: header/body buffers written once at the end
- **compiler**: orchestration, options and convenience functions
- **cli**: the ``ttc`` command-line tool

Quick Start
-----------
Compile a string:
    >>> from teenytiny import compile_tt
    >>> c_code = compile_tt('PRINT "hello, world"\\n')

Compile a file (writes out.c):
    >>> from teenytiny import TeenyTinyCompiler
    >>> result = TeenyTinyCompiler().compile_file("hello.tt")

Or use the command-line tool:
    $ ttc -f hello.tt
    $ cc out.c -o hello
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from teenytiny.compiler import (
    TeenyTinyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_tt,
    compile_file,
)
from teenytiny.emitter import Emitter
from teenytiny.lexer import Lexer, Token, TokenType
from teenytiny.parser import Parser, ParseContext
from teenytiny.errors import (
    SourceLocation,
    TeenyTinyError,
    TinyLexicalError,
    TinySyntaxError,
    TinySemanticError,
    TinyIOError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)

__all__ = [
    # Version info
    "__version__",
    # Compiler
    "TeenyTinyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_tt",
    "compile_file",
    # Pipeline stages
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParseContext",
    "Emitter",
    # Exception hierarchy
    "SourceLocation",
    "TeenyTinyError",
    "TinyLexicalError",
    "TinySyntaxError",
    "TinySemanticError",
    "TinyIOError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndeclaredLabelError",
]
