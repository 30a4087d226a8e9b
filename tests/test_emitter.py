"""
Tests for the C source emitter
==============================

The emitter keeps a header and a body buffer and writes them out exactly
once.
"""

from pathlib import Path

import pytest

from teenytiny.emitter import Emitter
from teenytiny.errors import OutputWriteError, TinyIOError


# =============================================================================
# Buffering
# =============================================================================

class TestBuffers:
    """Tests for header/body accumulation."""

    def test_starts_empty(self):
        emitter = Emitter()
        assert emitter.header == ""
        assert emitter.code == ""
        assert emitter.render() == ""

    def test_emit_concatenates(self):
        """emit() adds no separator; emit_line() ends the line."""
        emitter = Emitter()
        emitter.emit("a = ")
        emitter.emit("1")
        emitter.emit_line(";")
        assert emitter.code == "a = 1;\n"

    def test_header_line(self):
        emitter = Emitter()
        emitter.header_line("#include <stdio.h>")
        emitter.header_line("float a;")
        assert emitter.header == "#include <stdio.h>\nfloat a;\n"
        assert emitter.code == ""

    def test_render_puts_header_first(self):
        """Header text added late still precedes the body."""
        emitter = Emitter()
        emitter.emit_line("a = 1;")
        emitter.header_line("float a;")
        assert emitter.render() == "float a;\na = 1;\n"

    def test_output_path_is_path(self):
        assert Emitter("out.c").output_path == Path("out.c")
        assert Emitter().output_path is None


# =============================================================================
# Writing
# =============================================================================

class TestFinalize:
    """Tests for the single final write."""

    def test_writes_file(self, tmp_path):
        target = tmp_path / "out.c"
        emitter = Emitter(target)
        emitter.header_line("int main(void){")
        emitter.emit_line("}")

        text = emitter.finalize()

        assert text == "int main(void){\n}\n"
        assert target.read_text() == text

    def test_nothing_written_before_finalize(self, tmp_path):
        target = tmp_path / "out.c"
        emitter = Emitter(target)
        emitter.emit_line("return 0;")
        assert not target.exists()

    def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "out.c"
        target.write_text("old contents\n")
        emitter = Emitter(target)
        emitter.emit_line("new")
        emitter.finalize()
        assert target.read_text() == "new\n"

    def test_second_finalize_fails(self, tmp_path):
        emitter = Emitter(tmp_path / "out.c")
        emitter.finalize()
        with pytest.raises(OutputWriteError) as exc_info:
            emitter.finalize()
        assert "already written" in exc_info.value.reason

    def test_no_output_path(self):
        with pytest.raises(OutputWriteError):
            Emitter().finalize()

    def test_unwritable_path(self, tmp_path):
        """A missing parent directory is reported as an I/O error."""
        emitter = Emitter(tmp_path / "missing" / "out.c")
        with pytest.raises(TinyIOError) as exc_info:
            emitter.finalize()
        assert "missing" in str(exc_info.value)

    def test_writes_single_bytes(self, tmp_path):
        target = tmp_path / "out.c"
        emitter = Emitter(target)
        emitter.emit_line('printf("café\\n");')
        emitter.finalize()
        assert target.read_bytes() == b'printf("caf\xe9\\n");\n'

    def test_wide_character_rejected_before_write(self, tmp_path):
        """Text that is not single-byte never creates the output file."""
        target = tmp_path / "out.c"
        emitter = Emitter(target)
        emitter.emit_line('printf("☃\\n");')
        with pytest.raises(OutputWriteError) as exc_info:
            emitter.finalize()
        assert "not a single byte" in exc_info.value.reason
        assert not target.exists()

    def test_failed_write_can_be_retried(self, tmp_path):
        """Only a successful write counts as the single write."""
        emitter = Emitter(tmp_path / "sub" / "out.c")
        with pytest.raises(OutputWriteError):
            emitter.finalize()
        (tmp_path / "sub").mkdir()
        emitter.finalize()
        assert (tmp_path / "sub" / "out.c").exists()
