"""
ttc - Teeny Tiny Compiler Command-Line Interface
================================================

This module implements the command-line interface for the Teeny Tiny
compiler. It translates a ``.tt`` program into C source that can then be
built with any C compiler.

Usage Examples
--------------
Basic compilation (writes out.c):
    $ ttc -f hello.tt

With output file:
    $ ttc -f hello.tt -o hello.c

Full pipeline to an executable:
    $ ttc -f hello.tt && cc out.c -o hello

Dump the token stream:
    $ ttc -f hello.tt --tokens

Verbose mode:
    $ ttc -v -f hello.tt
"""

import logging
from pathlib import Path
from typing import Optional

import click

from teenytiny import __version__
from teenytiny.cli.errors import handle_cli_exception
from teenytiny.compiler import (
    DEFAULT_OUTPUT,
    CompilerOptions,
    TeenyTinyCompiler,
    check_source_extension,
    read_source,
)
from teenytiny.lexer import Lexer


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def print_tokens(input_file: Path) -> None:
    """Print one token per line, ending with the EOF token."""
    check_source_extension(input_file)
    lexer = Lexer(read_source(input_file), str(input_file))
    for token in lexer.tokenize():
        click.echo(repr(token))


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-f", "--file", "input_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Teeny Tiny source file (.tt) to compile",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Output C file (default: {DEFAULT_OUTPUT})",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ttc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Compile a Teeny Tiny program to C.

    The generated C program declares one float per variable and can be
    built with any C compiler.

    \b
    Examples:
        ttc -f hello.tt              # Outputs out.c
        ttc -f hello.tt -o hello.c   # Specify output file
        ttc -f hello.tt --tokens     # Dump tokens
        ttc -v -f hello.tt           # Verbose output

    \b
    Language summary:
        PRINT expression | "string"
        INPUT var
        LET var = expression
        IF a > b THEN ... ENDIF
        WHILE a < b REPEAT ... ENDWHILE
        LABEL name / GOTO name
    """
    setup_logging(verbose)

    if output is None:
        output = Path(DEFAULT_OUTPUT)

    try:
        if tokens:
            print_tokens(input_file)
            return

        if verbose:
            click.echo(f"Compiling {input_file}...")

        compiler = TeenyTinyCompiler(CompilerOptions(output_path=output))
        result = compiler.compile_file(input_file)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")
            click.echo(f"Wrote {len(result.code)} bytes to {output}")

        click.echo(f"Compiling complete: {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
