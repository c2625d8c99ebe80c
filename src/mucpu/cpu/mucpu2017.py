"""
MUCPU 2017 Instruction Set Definition
=====================================

The MUCPU 2017 is a single-accumulator 8-bit teaching CPU. It has one general
purpose register (A), so the register name is never written, and each
instruction has exactly one addressing form. `LOD 20` loads the byte at
address $20 into A.

Instruction Format
------------------
Every instruction occupies two bytes: the opcode byte followed by a one byte
operand (an address or a literal value). The data byte directive `DB` is not
an instruction; it places its single operand byte in memory.

| Mnemonic | Opcode | Description                          |
|----------|--------|--------------------------------------|
| LOD      | $01    | Load A from memory                   |
| STO      | $02    | Store A to memory                    |
| OUT      | $04    | Output A                             |
| ADD      | $08    | Add memory to A                      |
| ADC      | $10    | Add memory to A with carry           |
| JNZ      | $20    | Jump if A is not zero                |
| JMP      | $40    | Jump                                 |
| HLT      | $80    | Halt (end of the code section)       |
| DB       | -      | Data byte (no opcode)                |

Address Space
-------------
Addresses are one byte wide ($00-$FF). The program counter starts at $00.
By convention the HLT instruction ends the code section and DB directives
follow it, but nothing in the encoding depends on that order.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Encoding information for one mnemonic.

    Attributes:
        mnemonic: The mnemonic (uppercase)
        opcode: The opcode byte, or None for directives that emit no opcode
        size: Number of address slots the statement occupies
    """
    mnemonic: str
    opcode: Optional[int]
    size: int

    @property
    def is_directive(self) -> bool:
        return self.opcode is None

    def __repr__(self) -> str:
        opcode = "--" if self.opcode is None else f"${self.opcode:02X}"
        return f"InstructionInfo({self.mnemonic}, opcode={opcode}, size={self.size})"


# =============================================================================
# Constants
# =============================================================================

INSTRUCTION_SIZE = 2        # opcode byte + operand byte
DATA_BYTE_SIZE = 1          # DB emits only its operand byte
ADDRESS_SPACE_SIZE = 0x100  # addresses $00-$FF

DATA_BYTE_DIRECTIVE = "DB"


# =============================================================================
# Opcode Table
# =============================================================================
# Built once at import time and exposed read-only.
# =============================================================================

OPCODE_TABLE: Mapping[str, InstructionInfo] = MappingProxyType({
    "LOD": InstructionInfo("LOD", 0x01, INSTRUCTION_SIZE),
    "STO": InstructionInfo("STO", 0x02, INSTRUCTION_SIZE),
    "OUT": InstructionInfo("OUT", 0x04, INSTRUCTION_SIZE),
    "ADD": InstructionInfo("ADD", 0x08, INSTRUCTION_SIZE),
    "ADC": InstructionInfo("ADC", 0x10, INSTRUCTION_SIZE),
    "JNZ": InstructionInfo("JNZ", 0x20, INSTRUCTION_SIZE),
    "JMP": InstructionInfo("JMP", 0x40, INSTRUCTION_SIZE),
    "HLT": InstructionInfo("HLT", 0x80, INSTRUCTION_SIZE),
    DATA_BYTE_DIRECTIVE: InstructionInfo(DATA_BYTE_DIRECTIVE, None, DATA_BYTE_SIZE),
})

# Set of all valid mnemonics (directive included)
MNEMONICS: frozenset[str] = frozenset(OPCODE_TABLE.keys())


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(mnemonic: str) -> Optional[InstructionInfo]:
    """
    Look up encoding information by mnemonic.

    Args:
        mnemonic: The mnemonic (any case)

    Returns:
        InstructionInfo if found, None for unknown mnemonics
    """
    return OPCODE_TABLE.get(mnemonic.upper())


def get_opcode(mnemonic: str) -> Optional[int]:
    """Return the opcode byte for a mnemonic, or None if it has none."""
    info = get_instruction_info(mnemonic)
    return info.opcode if info else None


def is_valid_mnemonic(mnemonic: str) -> bool:
    """Check if a mnemonic is in the MUCPU 2017 table."""
    return mnemonic.upper() in MNEMONICS


def is_data_directive(mnemonic: str) -> bool:
    """Check if a mnemonic is the DB data byte directive."""
    return mnemonic.upper() == DATA_BYTE_DIRECTIVE


def statement_size(mnemonic: str) -> int:
    """
    Number of address slots a non-comment statement occupies.

    DB takes one slot. Everything else takes two, including unknown and
    missing mnemonics, so a typo does not shift the addresses of the lines
    that follow it.
    """
    return DATA_BYTE_SIZE if is_data_directive(mnemonic) else INSTRUCTION_SIZE
