"""
MUCPU Toolchain - Assembler for the MUCPU 2017 Teaching CPU
===========================================================

This package provides the assembler for the MUCPU 2017, a single-accumulator
8-bit CPU used for teaching. Source programs are translated into a listing
and a flat machine code stream that the MUCPU simulator loads.

Main Components
---------------
- **assembler**: two-pass assembler (mucasm)
    Converts assembly source (.asm) into a listing and machine code

- **cpu**: instruction set definitions
    The fixed mnemonic table and instruction sizes

- **cli**: command-line tools
    `mucasm` (batch assembler) and `mucmenu` (interactive menu)

Quick Start
-----------
Assemble a program:
    >>> from mucpu.assembler import Assembler
    >>> asm = Assembler()
    >>> program = asm.assemble_file("count.asm")
    >>> print(asm.get_listing())
    >>> asm.write_machine_code("count.hex")

Or use the command-line tools:
    $ mucasm count.asm -l count.lst -o count.hex
    $ mucmenu count.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mucpu.assembler import (
    Assembler,
    Program,
    AssembledLine,
    Statement,
    assemble,
    assemble_file,
    parse_line,
)
from mucpu.config import AssemblerConfig
from mucpu.errors import (
    ErrorKind,
    Diagnostic,
    SourceLocation,
    MucpuError,
    AssemblerError,
    UnresolvedCodeError,
    NoProgramError,
    SourceFileError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "Program",
    "AssembledLine",
    "Statement",
    "assemble",
    "assemble_file",
    "parse_line",
    # Configuration
    "AssemblerConfig",
    # Diagnostics and exceptions
    "ErrorKind",
    "Diagnostic",
    "SourceLocation",
    "MucpuError",
    "AssemblerError",
    "UnresolvedCodeError",
    "NoProgramError",
    "SourceFileError",
]
