# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end tests for the Assembler facade: source strings and files in,
# listings, machine code, symbols and binary images out.
#
# Test coverage includes:
#   - Assembling from strings and files
#   - Output accessors and file writers
#   - Error reports with file and line numbers
#   - Source file read failures
#   - Binary output refusing unresolved bytes
# =============================================================================

import pytest

from mucpu.assembler import Assembler, assemble, assemble_file, read_source, split_lines
from mucpu.config import AssemblerConfig
from mucpu.errors import (
    ErrorKind,
    MucpuError,
    NoProgramError,
    SourceFileError,
    UnresolvedCodeError,
)


ADD_PROGRAM = """\
; add two numbers
LOOP1: LOD NUM1
       Add num2
LOOP2: JMP 00
       HLT 80
NUM1:  DB 5A
NUM2:  DB ff
NUM3:  DB 78
"""


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline from source to outputs."""

    def test_assemble_string(self):
        asm = Assembler()
        program = asm.assemble_string(ADD_PROGRAM)
        assert not program.has_errors()
        assert program.machine_code() == [
            0x01, 0x08, 0x08, 0x09, 0x40, 0x00, 0x80, 0x80, 0x5A, 0xFF, 0x78,
        ]

    def test_symbols(self):
        asm = Assembler()
        asm.assemble_string(ADD_PROGRAM)
        assert asm.get_symbols() == {
            "LOOP1": 0x00, "LOOP2": 0x04, "NUM1": 0x08, "NUM2": 0x09, "NUM3": 0x0A,
        }

    def test_listing(self):
        asm = Assembler()
        asm.assemble_string(ADD_PROGRAM)
        lines = asm.get_listing().splitlines()
        assert lines[0] == "         ; ADD TWO NUMBERS"
        assert lines[2] == "02 08 09        ADD NUM2"
        assert lines[-1] == "0A    78 NUM3:  DB 78"

    def test_machine_code_text(self):
        asm = Assembler()
        asm.assemble_string("LOD 01\nDB 02")
        assert asm.get_machine_code() == "01\n01\n02\n"

    def test_get_code(self):
        asm = Assembler()
        asm.assemble_string(ADD_PROGRAM)
        assert asm.get_code() == bytes([
            0x01, 0x08, 0x08, 0x09, 0x40, 0x00, 0x80, 0x80, 0x5A, 0xFF, 0x78,
        ])

    def test_trailing_newline_is_not_a_line(self):
        program = assemble("HLT 00\n")
        assert len(program) == 1
        assert not program.has_errors()

    def test_blank_line_is_an_error(self):
        program = assemble("LOD 00\n\nHLT 00\n")
        assert len(program) == 3
        assert program.lines[1].errors[0] is ErrorKind.INVALID_LINE

    def test_form_feed_does_not_split_lines(self):
        program = assemble("LOD 00\x0cSTO 01")
        assert len(program) == 1
        assert program.lines[0].errors[0] is ErrorKind.INVALID_LINE

    @pytest.mark.parametrize("source,expected", [
        ("LOD 00\r\nHLT 00\r\n", ["LOD 00", "HLT 00"]),
        ("LOD 00\rHLT 00", ["LOD 00", "HLT 00"]),
        ("LOD 00\n\nHLT 00\n", ["LOD 00", "", "HLT 00"]),
        ("HLT 00\u2028DB 01\x0c\n", ["HLT 00\u2028DB 01\x0c"]),
        ("", []),
    ])
    def test_split_lines(self, source, expected):
        assert split_lines(source) == expected

    def test_reassembly_replaces_program(self):
        asm = Assembler()
        asm.assemble_string("A: HLT 00")
        asm.assemble_string("B: HLT 00")
        assert asm.get_symbols() == {"B": 0}

    def test_listing_header_from_config(self):
        asm = Assembler(AssemblerConfig(listing_header=True))
        asm.assemble_string("HLT 00")
        assert asm.get_listing().startswith("MUCPU 2017 Assembler Listing")

    def test_placeholder_from_config(self):
        asm = Assembler(AssemblerConfig(unresolved_token="XX"))
        asm.assemble_string("JMP NOWHERE")
        assert asm.get_machine_code() == "40\nXX\n"


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFiles:
    """Test reading sources and writing outputs."""

    def test_assemble_file(self, tmp_path):
        source = tmp_path / "add.asm"
        source.write_text(ADD_PROGRAM)
        program = assemble_file(source)
        assert len(program) == 8
        assert dict(program.labels)["NUM3"] == 0x0A

    def test_write_outputs(self, tmp_path):
        source = tmp_path / "add.asm"
        source.write_text(ADD_PROGRAM)

        asm = Assembler()
        asm.assemble_file(source)
        asm.write_listing(tmp_path / "add.lst")
        asm.write_machine_code(tmp_path / "add.hex")
        asm.write_symbols(tmp_path / "add.sym")
        asm.write_binary(tmp_path / "add.bin")

        assert (tmp_path / "add.lst").read_text() == asm.get_listing()
        assert (tmp_path / "add.hex").read_text().splitlines()[:2] == ["01", "08"]
        assert "NUM1 $08" in (tmp_path / "add.sym").read_text()
        assert (tmp_path / "add.bin").read_bytes() == asm.get_code()

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceFileError) as exc_info:
            Assembler().assemble_file(tmp_path / "missing.asm")
        assert "missing.asm" in str(exc_info.value)

    def test_undecodable_file(self, tmp_path):
        source = tmp_path / "bad.asm"
        source.write_bytes(b"LOD \xff\xfe\n")
        with pytest.raises(SourceFileError):
            read_source(source, "utf-8")

    def test_configured_encoding(self, tmp_path):
        source = tmp_path / "latin.asm"
        source.write_bytes("; caf\xe9\nHLT 00\n".encode("latin-1"))
        asm = Assembler(AssemblerConfig(source_encoding="latin-1"))
        program = asm.assemble_file(source)
        assert program.lines[0].source == "; CAF\xc9"

    def test_unknown_encoding(self, tmp_path):
        source = tmp_path / "prog.asm"
        source.write_text("HLT 00\n")
        with pytest.raises(SourceFileError):
            read_source(source, "no-such-codec")

    def test_source_file_error_is_toolchain_error(self, tmp_path):
        with pytest.raises(MucpuError):
            read_source(tmp_path / "missing.asm")


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestErrorReporting:
    """Test diagnostics reporting and output guards."""

    def test_no_program_yet(self):
        asm = Assembler()
        with pytest.raises(NoProgramError):
            asm.get_listing()

    def test_has_errors(self):
        asm = Assembler()
        asm.assemble_string("FOO 10")
        assert asm.has_errors()

    def test_error_report(self, tmp_path):
        source = tmp_path / "prog.asm"
        source.write_text("LOD 00\nFOO 10\nJMP NOWHERE\n")
        asm = Assembler()
        asm.assemble_file(source)
        report = asm.get_error_report()
        assert f"{source}:2: error: COMMAND NOT FOUND ERROR" in report
        assert f"{source}:3: error: OPERAND FORMAT OR SPELLING ERROR" in report
        assert report.endswith("2 errors")

    def test_binary_refuses_unresolved_bytes(self):
        asm = Assembler()
        asm.assemble_string("LOD 00\nJMP NOWHERE\nFOO 10")
        with pytest.raises(UnresolvedCodeError) as exc_info:
            asm.get_code()
        assert exc_info.value.unresolved_count == 2
        assert exc_info.value.location.line == 2
