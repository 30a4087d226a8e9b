"""
Teeny Tiny Compiler Main Module
===============================

This module provides the main compiler interface. It wires the three
pipeline stages together:

    Source → Lexer ⇄ Parser/CodeGenerator → Emitter → C source

The parser drives the pipeline: it pulls tokens from the lexer one at a
time and pushes C text into the emitter as it recognizes each rule.

Usage
-----
Command line:
    $ ttc -f hello.tt

Programmatic:
    >>> from teenytiny import compile_tt
    >>> c_code = compile_tt('PRINT "hello"\\n')

The generated C can be built with any C compiler:
    $ cc out.c -o hello

Error Handling
--------------
Compilation stops at the first error. Output is written only after the
entire program has been validated, so a failed compilation never leaves a
partial output file behind.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from teenytiny.emitter import SOURCE_ENCODING, Emitter
from teenytiny.errors import SourceExtensionError, SourceReadError
from teenytiny.lexer import Lexer
from teenytiny.parser import Parser

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".tt"
DEFAULT_OUTPUT = "out.c"


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        output_path: File written by compile_file() (default: out.c)
        source_extension: Extension every input file must carry
    """
    output_path: Union[str, Path] = DEFAULT_OUTPUT
    source_extension: str = SOURCE_EXTENSION


@dataclass
class CompilerResult:
    """
    Result of a successful compilation; failures raise instead.

    Attributes:
        filename: Source filename
        code: Generated C source
        token_count: Number of tokens lexed (excluding end of input)
        variables: Declared variable names, sorted
        labels: Declared label names, in declaration order
        output_path: Where the C source was written, if it was
    """
    filename: str = ""
    code: str = ""
    token_count: int = 0
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    output_path: Optional[Path] = None


class TeenyTinyCompiler:
    """
    Teeny Tiny to C compiler.

    Example:
        compiler = TeenyTinyCompiler()
        result = compiler.compile_file("hello.tt")
        print(result.code)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile Teeny Tiny source code to C without writing any file.

        Args:
            source: Teeny Tiny source code string
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the C output

        Raises:
            TeenyTinyError: If compilation fails
        """
        return self._compile(source, filename, Emitter())

    def compile_file(self, filepath: Union[str, Path]) -> CompilerResult:
        """
        Compile a source file and write the C output.

        The extension is checked before the file is read. The output file is
        written only once the whole program has compiled successfully.

        Args:
            filepath: Path to the .tt source file

        Returns:
            CompilerResult with output_path set

        Raises:
            SourceExtensionError: If the file lacks the source extension
            SourceReadError: If the file cannot be read
            OutputWriteError: If the output cannot be written
            TeenyTinyError: If compilation fails
        """
        path = Path(filepath)
        check_source_extension(path, self.options.source_extension)
        source = read_source(path)

        emitter = Emitter(self.options.output_path)
        result = self._compile(source, str(path), emitter)

        emitter.finalize()
        result.output_path = emitter.output_path
        logger.info("Wrote %s", emitter.output_path)
        return result

    def _compile(self, source: str, filename: str, emitter: Emitter) -> CompilerResult:
        logger.info("Compiling %s", filename)

        lexer = Lexer(source, filename)
        parser = Parser(lexer, emitter)
        context = parser.parse()

        result = CompilerResult(
            filename=filename,
            code=emitter.render(),
            token_count=lexer.token_count,
            variables=sorted(context.symbols),
            labels=list(context.labels_declared),
        )
        logger.info(
            "Compiled %s: %d tokens, %d variables, %d labels",
            filename,
            result.token_count,
            len(result.variables),
            len(result.labels),
        )
        return result


# =============================================================================
# File Helpers
# =============================================================================

def check_source_extension(path: Union[str, Path], extension: str = SOURCE_EXTENSION) -> None:
    """
    Reject input files that do not carry the source extension.

    The comparison is case-sensitive: ``prog.TT`` is rejected.

    Raises:
        SourceExtensionError: If the suffix does not match
    """
    path = Path(path)
    if path.suffix != extension:
        raise SourceExtensionError(str(path), extension)


def read_source(path: Union[str, Path]) -> str:
    """
    Read a source file into memory.

    Source is single-byte text: every byte maps to one character, so bytes
    outside ASCII in comments and strings pass through to the output
    unchanged.

    Raises:
        SourceReadError: If the file is missing or unreadable
    """
    path = Path(path)
    try:
        return path.read_text(encoding=SOURCE_ENCODING)
    except OSError as e:
        raise SourceReadError(str(path), e.strerror or str(e)) from e


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_tt(source: str, filename: str = "<input>") -> str:
    """
    Compile Teeny Tiny source code to C.

    Args:
        source: Teeny Tiny source code
        filename: Source filename for error messages

    Returns:
        Generated C source code

    Raises:
        TeenyTinyError: If compilation fails

    Example:
        >>> print(compile_tt("LET a = 5\\nPRINT a\\n"))
        #include <stdio.h>
        int main(void){
        float a;
        a = 5;
        printf("%.2f\\n", (float)(a));
        return 0;
        }
    """
    return TeenyTinyCompiler().compile_source(source, filename).code


def compile_file(
    filepath: Union[str, Path],
    output_path: Union[str, Path] = DEFAULT_OUTPUT,
) -> str:
    """
    Compile a .tt file and write the C output.

    Args:
        filepath: Path to the source file
        output_path: Where to write the C source (default: out.c)

    Returns:
        Generated C source code

    Raises:
        TeenyTinyError: If reading, compiling or writing fails
    """
    compiler = TeenyTinyCompiler(CompilerOptions(output_path=output_path))
    return compiler.compile_file(filepath).code
