"""
MUCPU 2017 Assembler
====================

This package provides a two-pass assembler for the MUCPU 2017 teaching CPU.
It turns assembly source into a listing and a flat machine code stream for
the simulator.

Main Components
---------------
- **Assembler**: Facade that runs the pipeline and reads/writes files
- **parser**: Parses one source line into a Statement
- **codegen**: Pass 1 (addresses, labels) and pass 2 (operand resolution)
- **listing**: Renders listing, machine code and symbol table text

Assembly Process
----------------
1. **Parsing**: every line becomes a Statement (comment or instruction),
   with the opcode byte looked up from the mnemonic table.

2. **Pass 1**: addresses are assigned and the label table is built.

3. **Pass 2**: operands are resolved to literal bytes or label addresses.

Problems never stop the run. Each line carries its own diagnostics, which
are shown in the listing.

Example Usage
-------------
>>> from mucpu.assembler import assemble
>>> program = assemble('''; comment
... LOOP: LOD NUM
... JMP LOOP
... HLT 00
... NUM: DB 5A''')
>>> [f"{b:02X}" for b in program.machine_code()]
['01', '06', '40', '00', '80', '00', '5A']
"""

from mucpu.assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    read_source,
    split_lines,
)
from mucpu.assembler.parser import (
    Operand,
    OperandKind,
    Statement,
    StatementKind,
    parse_line,
    parse_source,
)
from mucpu.assembler.codegen import (
    AddressMap,
    AssembledLine,
    Program,
    assign_addresses,
    resolve_operand,
    resolve_operands,
    generate,
)
from mucpu.assembler.listing import (
    render_listing,
    render_machine_code,
    render_symbols,
    machine_code_tokens,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    "read_source",
    "split_lines",
    # Parser
    "Operand",
    "OperandKind",
    "Statement",
    "StatementKind",
    "parse_line",
    "parse_source",
    # Code generator
    "AddressMap",
    "AssembledLine",
    "Program",
    "assign_addresses",
    "resolve_operand",
    "resolve_operands",
    "generate",
    # Rendering
    "render_listing",
    "render_machine_code",
    "render_symbols",
    "machine_code_tokens",
]
