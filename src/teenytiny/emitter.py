"""
C Source Emitter
================

Accumulates the generated C program while the parser runs.

Two buffers are kept because declarations must precede their use in C,
yet a variable is only discovered when the parser reaches its first LET or
INPUT:

- the **header** holds the preamble and the ``float`` declarations
- the **body** holds the translated statements in source order

Nothing touches the disk until ``finalize()``, which the compiler calls
only after the whole program has been validated. A failed compilation
therefore never produces an output file.
"""

from pathlib import Path
from typing import Optional, Union
import logging

from teenytiny.errors import OutputWriteError

logger = logging.getLogger(__name__)

# Byte-transparent for single-byte source and output
SOURCE_ENCODING = "latin-1"


class Emitter:
    """
    Header/body text buffers with a single final write.

    Example:
        emitter = Emitter("out.c")
        emitter.header_line("#include <stdio.h>")
        emitter.emit("x = ")
        emitter.emit_line("1;")
        emitter.finalize()

    Attributes:
        output_path: Where ``finalize()`` writes the program (optional)
        header: Header buffer contents so far
        code: Body buffer contents so far
    """

    def __init__(self, output_path: Optional[Union[str, Path]] = None):
        self.output_path = Path(output_path) if output_path is not None else None
        self._header: list[str] = []
        self._code: list[str] = []
        self._finalized = False

    @property
    def header(self) -> str:
        return "".join(self._header)

    @property
    def code(self) -> str:
        return "".join(self._code)

    def emit(self, text: str) -> None:
        """Append text to the body without a line separator."""
        self._code.append(text)

    def emit_line(self, text: str) -> None:
        """Append text to the body followed by a newline."""
        self._code.append(text + "\n")

    def header_line(self, text: str) -> None:
        """Append a line to the header buffer."""
        self._header.append(text + "\n")

    def render(self) -> str:
        """Return header followed by body without writing anything."""
        return self.header + self.code

    def finalize(self) -> str:
        """
        Write the complete program to ``output_path``.

        May be called once per emitter.

        Returns:
            The text that was written

        Raises:
            OutputWriteError: If there is no output path, the output was
                already written, or the file cannot be written
        """
        if self.output_path is None:
            raise OutputWriteError("<none>", "no output path configured")
        if self._finalized:
            raise OutputWriteError(str(self.output_path), "output already written")

        text = self.render()
        try:
            data = text.encode(SOURCE_ENCODING)
        except UnicodeEncodeError as e:
            bad = e.object[e.start:e.end]
            raise OutputWriteError(
                str(self.output_path), f"character {bad!r} is not a single byte"
            ) from e

        try:
            self.output_path.write_bytes(data)
        except OSError as e:
            raise OutputWriteError(str(self.output_path), e.strerror or str(e)) from e

        self._finalized = True
        logger.debug("Wrote %d bytes to %s", len(data), self.output_path)
        return text
