"""
Teeny Tiny Command-Line Interface
=================================

This package provides the command-line front end of the compiler:

- **ttc**: Teeny Tiny to C compiler

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["ttc"]
