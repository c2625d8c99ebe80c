# =============================================================================
# test_cli.py - Command-Line Tool Tests
# =============================================================================
# Tests for the mucasm batch assembler and the mucmenu interactive menu,
# driven through click's CliRunner.
# =============================================================================

import pytest
from click.testing import CliRunner

from mucpu.cli.errors import ExitCode
from mucpu.cli.mucasm import main as mucasm
from mucpu.cli.mucmenu import MenuSession, main as mucmenu


GOOD_SOURCE = """\
; comment
LOOP: LOD NUM
JMP LOOP
HLT 00
NUM: DB 5A
"""

BAD_SOURCE = """\
LOD 00
JMP NOWHERE
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def good_file(tmp_path):
    path = tmp_path / "good.asm"
    path.write_text(GOOD_SOURCE)
    return path


@pytest.fixture
def bad_file(tmp_path):
    path = tmp_path / "bad.asm"
    path.write_text(BAD_SOURCE)
    return path


# =============================================================================
# mucasm Tests
# =============================================================================

class TestMucasm:
    """Test the batch assembler command."""

    def test_help(self, runner):
        result = runner.invoke(mucasm, ["--help"])
        assert result.exit_code == 0
        assert "Assemble MUCPU 2017 source code" in result.output

    def test_version(self, runner):
        result = runner.invoke(mucasm, ["--version"])
        assert result.exit_code == 0
        assert "mucasm" in result.output

    def test_prints_listing_and_code(self, runner, good_file):
        result = runner.invoke(mucasm, [str(good_file)])
        assert result.exit_code == 0
        assert f"LISTING OF {good_file}" in result.output
        assert "00 01 06 LOOP: LOD NUM" in result.output
        assert "MACHINE CODE" in result.output
        assert result.output.endswith("01\n06\n40\n00\n80\n00\n5A\n")

    def test_writes_output_files(self, runner, good_file, tmp_path):
        result = runner.invoke(mucasm, [
            str(good_file),
            "-o", str(tmp_path / "good.hex"),
            "-l", str(tmp_path / "good.lst"),
            "-s", str(tmp_path / "good.sym"),
            "-b", str(tmp_path / "good.bin"),
        ])
        assert result.exit_code == 0
        assert "LISTING OF" not in result.output
        assert (tmp_path / "good.hex").read_text().split() == [
            "01", "06", "40", "00", "80", "00", "5A",
        ]
        assert "04 80 00 HLT 00" in (tmp_path / "good.lst").read_text()
        assert "NUM $06" in (tmp_path / "good.sym").read_text()
        assert (tmp_path / "good.bin").read_bytes() == bytes.fromhex("01 06 40 00 80 00 5A")

    def test_header_option(self, runner, good_file, tmp_path):
        listing = tmp_path / "good.lst"
        result = runner.invoke(mucasm, [str(good_file), "--header", "-l", str(listing)])
        assert result.exit_code == 0
        assert listing.read_text().startswith("MUCPU 2017 Assembler Listing")

    def test_verbose(self, runner, good_file, tmp_path):
        result = runner.invoke(mucasm, [
            "-v", str(good_file), "-o", str(tmp_path / "good.hex"),
        ])
        assert result.exit_code == 0
        assert "Assembly complete: 7 bytes, 2 labels" in result.output

    def test_errors_fail_the_build(self, runner, bad_file):
        result = runner.invoke(mucasm, [str(bad_file)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "OPERAND FORMAT OR SPELLING ERROR" in result.output
        assert "1 error" in result.output

    def test_keep_going(self, runner, bad_file):
        result = runner.invoke(mucasm, [str(bad_file), "--keep-going"])
        assert result.exit_code == 0
        assert "40\n??\n" in result.output

    def test_keep_going_from_environment(self, runner, bad_file):
        result = runner.invoke(mucasm, [str(bad_file)], env={"MUCPU_KEEP_GOING": "1"})
        assert result.exit_code == 0

    def test_bad_environment_value(self, runner, good_file):
        result = runner.invoke(mucasm, [str(good_file)], env={"MUCPU_KEEP_GOING": "maybe"})
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "expected a boolean" in result.output

    def test_binary_with_unresolved_bytes(self, runner, bad_file, tmp_path):
        binary = tmp_path / "bad.bin"
        result = runner.invoke(mucasm, [str(bad_file), "-k", "-b", str(binary)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Assembly error:" in result.output
        assert "unresolved byte" in result.output
        assert not binary.exists()

    def test_binary_failure_still_reports_diagnostics(self, runner, bad_file, tmp_path):
        result = runner.invoke(mucasm, [str(bad_file), "-b", str(tmp_path / "bad.bin")])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"{bad_file}:2: error: OPERAND FORMAT OR SPELLING ERROR" in result.output
        assert "unresolved byte" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(mucasm, [str(tmp_path / "missing.asm")])
        assert result.exit_code == 2


# =============================================================================
# mucmenu Tests
# =============================================================================

class TestMucmenu:
    """Test the interactive menu."""

    def test_quit(self, runner):
        result = runner.invoke(mucmenu, ["prog.asm"], input="0\n")
        assert result.exit_code == 0
        assert "John's MUCPU 2017 Assembler (prog.asm)" in result.output
        assert "4 = View Machine Code" in result.output

    def test_assemble_and_view(self, runner, good_file):
        result = runner.invoke(mucmenu, [str(good_file)], input="2\n3\n4\n0\n")
        assert result.exit_code == 0
        assert "Assembly complete." in result.output
        assert f"LISTING OF {good_file}" in result.output
        assert "06    5A NUM: DB 5A" in result.output
        assert "MACHINE CODE" in result.output

    def test_set_filename(self, runner, good_file):
        result = runner.invoke(mucmenu, [], input=f"1\n{good_file}\n2\n0\n")
        assert result.exit_code == 0
        assert f"John's MUCPU 2017 Assembler ({good_file})" in result.output
        assert "Assembly complete." in result.output

    def test_missing_file_keeps_running(self, runner, tmp_path):
        missing = tmp_path / "missing.asm"
        result = runner.invoke(mucmenu, [str(missing)], input="2\n3\n0\n")
        assert result.exit_code == 0
        assert "Error: cannot read" in result.output
        assert "LISTING OF" not in result.output

    def test_failed_reload_hides_previous_program(self, runner, good_file, tmp_path):
        missing = tmp_path / "missing.asm"
        result = runner.invoke(
            mucmenu, [str(good_file)], input=f"2\n1\n{missing}\n2\n3\n4\n0\n",
        )
        assert result.exit_code == 0
        assert "Assembly complete." in result.output
        assert "Error: cannot read" in result.output
        assert "LISTING OF" not in result.output
        assert "HLT 00" not in result.output
        assert "MACHINE CODE" not in result.output

    def test_error_count_reported(self, runner, bad_file):
        result = runner.invoke(mucmenu, [str(bad_file)], input="2\n0\n")
        assert "1 error(s); see the listing." in result.output

    def test_empty_filename(self, runner):
        result = runner.invoke(mucmenu, [], input="1\n\n2\n0\n")
        assert result.exit_code == 0
        assert "Choose option 1 to set the filename..." in result.output

    def test_unknown_choice_is_ignored(self, runner):
        result = runner.invoke(mucmenu, ["prog.asm"], input="9\n0\n")
        assert result.exit_code == 0
        assert result.output.count("0 = Quit") == 2

    def test_view_before_assembly_prints_nothing(self, capsys):
        session = MenuSession("prog.asm")
        session.view_listing()
        session.view_machine_code()
        assert not session.assembled
        assert capsys.readouterr().out == ""
