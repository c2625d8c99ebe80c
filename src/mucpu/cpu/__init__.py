"""
MUCPU CPU Package
=================

Instruction set definitions for the MUCPU 2017 teaching CPU, shared by the
assembler and any tool that needs to encode or decode its machine code.

Usage:
    from mucpu.cpu import OPCODE_TABLE, get_opcode, statement_size
"""

from mucpu.cpu.mucpu2017 import (
    # Core types
    InstructionInfo,
    # Master instruction database
    OPCODE_TABLE,
    MNEMONICS,
    # Constants
    INSTRUCTION_SIZE,
    DATA_BYTE_SIZE,
    ADDRESS_SPACE_SIZE,
    DATA_BYTE_DIRECTIVE,
    # Lookup functions
    get_instruction_info,
    get_opcode,
    is_valid_mnemonic,
    is_data_directive,
    statement_size,
)

__all__ = [
    "InstructionInfo",
    "OPCODE_TABLE",
    "MNEMONICS",
    "INSTRUCTION_SIZE",
    "DATA_BYTE_SIZE",
    "ADDRESS_SPACE_SIZE",
    "DATA_BYTE_DIRECTIVE",
    "get_instruction_info",
    "get_opcode",
    "is_valid_mnemonic",
    "is_data_directive",
    "statement_size",
]
