"""
Listing and Machine Code Rendering
==================================

Pure functions that turn a finished `Program` into text. None of them
modify the program.

Listing Format
--------------
One record per source line:

```
AA OO PP [ERRORS: ]SOURCE
00 01 06 LOOP: LOD NUM
02 40 00 JMP LOOP
         ; COMMENT
```

`AA` is the address, `OO` the opcode byte and `PP` the operand byte, each
two upper-case hex digits or blank. Diagnostics for a line are printed in
front of its source text.

Machine Code Format
-------------------
One two-digit hex token per line in emission order, e.g. `01`, `06`, `40`.
Bytes that could not be resolved are shown as a placeholder (default `??`)
so the remaining bytes keep their positions.
"""

from typing import Optional

from mucpu.assembler.codegen import AssembledLine, Program


LISTING_TITLE = "MUCPU 2017 Assembler Listing"
LISTING_COLUMNS = "AD OP OR SOURCE"
UNRESOLVED_TOKEN = "??"


def hex_byte(value: Optional[int]) -> str:
    """Format a byte as two upper-case hex digits, or '' for None."""
    return "" if value is None else f"{value:02X}"


def format_line(line: AssembledLine) -> str:
    """Format one listing record."""
    prefix = "".join(f"{kind.message}: " for kind in line.errors)
    return "%-2s %-2s %-2s %s" % (
        hex_byte(line.address),
        hex_byte(line.opcode),
        hex_byte(line.operand_byte),
        prefix + line.source,
    )


def render_listing(program: Program, header: bool = False) -> str:
    """
    Render the assembly listing.

    Args:
        program: The assembled program
        header: Prefix a title and column header

    Returns:
        Listing text, one record per source line, newline-terminated
    """
    lines = []
    if header:
        lines.append(LISTING_TITLE)
        lines.append("=" * 40)
        lines.append(LISTING_COLUMNS)
        lines.append("-" * 40)
    lines.extend(format_line(line) for line in program)
    return "".join(f"{line}\n" for line in lines)


def machine_code_tokens(
    program: Program,
    unresolved: str = UNRESOLVED_TOKEN,
) -> list[str]:
    """Machine code as a list of two-digit hex tokens."""
    return [
        unresolved if value is None else hex_byte(value)
        for value in program.machine_code()
    ]


def render_machine_code(program: Program, unresolved: str = UNRESOLVED_TOKEN) -> str:
    """
    Render the machine code, one token per line.

    Args:
        program: The assembled program
        unresolved: Placeholder for bytes that could not be resolved

    Returns:
        Machine code text, newline-terminated
    """
    return "".join(f"{token}\n" for token in machine_code_tokens(program, unresolved))


def render_symbols(program: Program) -> str:
    """
    Render the label table, sorted by name.

    Format: name address (one per line)
    """
    lines = [
        "# Symbol table",
        "# Generated by mucasm",
    ]
    for name, address in sorted(program.labels.items()):
        lines.append(f"{name} ${address:02X}")
    return "".join(f"{line}\n" for line in lines)
