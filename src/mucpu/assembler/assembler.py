"""
MUCPU 2017 Assembler - Main Interface
=====================================

This module provides the Assembler class, the main interface for assembling
MUCPU 2017 source code. It coordinates the parser, the two code generation
passes and the renderers, and handles reading source files and writing
output files.

Example Usage
-------------
>>> from mucpu.assembler import Assembler
>>>
>>> asm = Assembler()
>>> program = asm.assemble_string('''; add two numbers
... LOOP: LOD NUM1
...       ADD NUM2
...       HLT 00
... NUM1: DB 5A
... NUM2: DB 01''')
>>>
>>> print(asm.get_listing())
>>> print(asm.get_machine_code())
>>> asm.write_binary("add.bin")

Command-Line Usage
------------------
    $ mucasm add.asm -l add.lst -o add.hex -s add.sym
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from mucpu.assembler import codegen
from mucpu.assembler.codegen import Program
from mucpu.assembler.listing import (
    render_listing,
    render_machine_code,
    render_symbols,
)
from mucpu.config import AssemblerConfig
from mucpu.errors import (
    ErrorCollector,
    NoProgramError,
    SourceFileError,
    SourceLocation,
    UnresolvedCodeError,
)

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main MUCPU 2017 assembler class.

    Each assemble call starts from scratch. The assembler keeps the program
    from the most recent call so the get_* and write_* methods can render it.

    Attributes:
        config: Output and input settings
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        """
        Initialize the assembler.

        Args:
            config: Settings to use (default: AssemblerConfig())
        """
        self.config = config or AssemblerConfig()
        self._program: Optional[Program] = None
        self._source_name = "<input>"

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> Program:
        """
        Assemble a sequence of source lines.

        Args:
            lines: Source lines without line terminators
            filename: Name used in error reports

        Returns:
            The assembled program
        """
        program = codegen.assemble(lines)
        self._program = program
        self._source_name = filename

        logger.info(
            "assembled %s: %d lines, %d bytes, %d labels, %d errors",
            filename, len(program), len(program.machine_code()),
            len(program.labels), program.error_count(),
        )
        return program

    def assemble_string(self, source: str, filename: str = "<input>") -> Program:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Name used in error reports

        Returns:
            The assembled program
        """
        return self.assemble_lines(split_lines(source), filename)

    def assemble_file(self, filepath: str | Path) -> Program:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to the assembly source file

        Returns:
            The assembled program

        Raises:
            SourceFileError: If the file cannot be read or decoded
        """
        filepath = Path(filepath)
        logger.debug("reading %s", filepath)
        source = read_source(filepath, self.config.source_encoding)
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    @property
    def program(self) -> Program:
        """
        The most recently assembled program.

        Raises:
            NoProgramError: If nothing has been assembled yet
        """
        if self._program is None:
            raise NoProgramError()
        return self._program

    def get_listing(self) -> str:
        """Get the assembly listing as a string."""
        return render_listing(self.program, header=self.config.listing_header)

    def get_machine_code(self) -> str:
        """Get the machine code as text, one hex byte per line."""
        return render_machine_code(self.program, self.config.unresolved_token)

    def get_symbols(self) -> dict[str, int]:
        """Get a copy of the label table."""
        return dict(self.program.labels)

    def get_code(self) -> bytes:
        """
        Get the machine code as raw bytes.

        Raises:
            UnresolvedCodeError: If any byte could not be resolved
        """
        program = self.program
        slots = program.machine_code()
        unresolved_count = slots.count(None)
        if unresolved_count:
            for number, line in enumerate(program.lines, start=1):
                if None in line.code_slots():
                    raise UnresolvedCodeError(
                        unresolved_count,
                        location=SourceLocation(self._source_name, number),
                        source_line=line.source,
                    )
        return bytes(slots)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing to a file."""
        Path(filepath).write_text(self.get_listing())
        logger.info("wrote listing to %s", filepath)

    def write_machine_code(self, filepath: str | Path) -> None:
        """Write the machine code text (one hex byte per line) to a file."""
        Path(filepath).write_text(self.get_machine_code())
        logger.info("wrote machine code to %s", filepath)

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the label table to a file."""
        Path(filepath).write_text(render_symbols(self.program))
        logger.info("wrote symbols to %s", filepath)

    def write_binary(self, filepath: str | Path) -> None:
        """
        Write the raw machine code bytes, with no header.

        Raises:
            UnresolvedCodeError: If any byte could not be resolved
        """
        code = self.get_code()
        Path(filepath).write_bytes(code)
        logger.info("wrote %d bytes to %s", len(code), filepath)

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """Check if the last assembly produced diagnostics."""
        return self.program.has_errors()

    def get_error_report(self) -> str:
        """Get a formatted report of every diagnostic."""
        collector = ErrorCollector()
        collector.extend(self.program.diagnostics(self._source_name))
        return collector.report()


# =============================================================================
# Source Reading
# =============================================================================

# Only CR, LF and CRLF end a line. Other control characters stay in the line.
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """
    Split source text into lines.

    A line break at the very end of the text does not start another line,
    while a blank line inside the text is kept as an (invalid) line.
    """
    lines = LINE_BREAK.split(source)
    if lines[-1] == "":
        lines.pop()
    return lines


def read_source(filepath: str | Path, encoding: str = "utf-8") -> str:
    """
    Read an assembly source file.

    Raises:
        SourceFileError: If the file cannot be read or decoded
    """
    filepath = Path(filepath)
    try:
        return filepath.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise SourceFileError(str(filepath), f"not valid {encoding} text ({e.reason})") from e
    except LookupError as e:
        raise SourceFileError(str(filepath), f"unknown encoding '{encoding}'") from e
    except OSError as e:
        raise SourceFileError(str(filepath), e.strerror or str(e)) from e


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> Program:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Name used in error reports

    Returns:
        The assembled program
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> Program:
    """
    Convenience function to assemble a file.

    Raises:
        SourceFileError: If the file cannot be read
    """
    return Assembler().assemble_file(filepath)
