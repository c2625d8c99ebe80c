"""
MUCPU 2017 Assembly Language Parser
===================================

This module turns single source lines into `Statement` objects. Each line is
parsed on its own, with no knowledge of the other lines, so parsing is a pure
function of the line text.

Source Rules
------------
1. No blank lines. A blank line is reported as an invalid line.

2. Comments start in the first column with a semicolon (;). There are no
   partial-line comments.

3. Labels are declared on the left of an instruction and end with a colon
   (:). A label may be declared once but used many times. Labels cannot
   stand on their own line.

4. All numeric operands are hexadecimal and exactly two characters long,
   e.g. zero is written 00.

5. The language is case-insensitive. Everything is upper-cased on input.

6. Labels and mnemonics are words of ASCII letters, digits and underscores,
   e.g. LOOP_1.

Statement Types
---------------
```asm
; a comment                ; COMMENT
LOOP1: LOD 20              ; INSTRUCTION with label
       STO NUM1            ; INSTRUCTION with label reference operand
NUM1:  DB 15               ; DB data byte directive
```

Operands are stored as written. Whether an operand is a literal or a label
reference only matters once every label has an address, so it is interpreted
by the code generator (pass 2), not here.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from mucpu.cpu import get_instruction_info
from mucpu.errors import ErrorKind


# =============================================================================
# Patterns
# =============================================================================

COMMENT_PREFIX = ";"

# [ws] [LABEL:] [ws] [MNEMONIC] [ws+ OPERAND] [ws]
# Mnemonic and operand are optional here so that a missing one can be
# reported as such instead of as an invalid line.
STATEMENT_PATTERN = re.compile(
    r"\s*(?:(?P<label>\w+):)?\s*(?P<mnemonic>\w+)?(?:\s+(?P<operand>\w+))?\s*",
    re.ASCII,
)

HEX_BYTE_PATTERN = re.compile(r"[0-9A-F]{2}")


# =============================================================================
# Statement Data Classes
# =============================================================================

class StatementKind(Enum):
    """What kind of line a statement came from."""
    COMMENT = auto()
    INSTRUCTION = auto()


class OperandKind(Enum):
    """How an operand token will be interpreted during resolution."""
    HEX_BYTE = auto()    # Exactly two hex digits
    LABEL_REF = auto()   # Anything else; looked up in the label table
    MISSING = auto()     # No operand on the line


@dataclass(frozen=True)
class Operand:
    """
    Raw operand token as written in the source (upper-cased).

    Attributes:
        text: Operand text, empty when the line has no operand
    """
    text: str = ""

    @property
    def kind(self) -> OperandKind:
        if not self.text:
            return OperandKind.MISSING
        if HEX_BYTE_PATTERN.fullmatch(self.text):
            return OperandKind.HEX_BYTE
        return OperandKind.LABEL_REF

    @property
    def value(self) -> Optional[int]:
        """Literal byte value, or None if the operand is not a literal."""
        if self.kind is OperandKind.HEX_BYTE:
            return int(self.text, 16)
        return None

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Statement:
    """
    One parsed source line.

    Attributes:
        raw_text: The source line, upper-cased
        kind: COMMENT or INSTRUCTION
        label: Label declared on this line, if any
        mnemonic: Mnemonic (empty when missing or for comments)
        operand: Operand token
        opcode: Opcode byte from the mnemonic table (None for DB, comments,
                unknown and missing mnemonics)
        errors: Diagnostics found while parsing the line
    """
    raw_text: str
    kind: StatementKind
    label: Optional[str] = None
    mnemonic: str = ""
    operand: Operand = field(default_factory=Operand)
    opcode: Optional[int] = None
    errors: tuple[ErrorKind, ...] = ()

    @property
    def is_comment(self) -> bool:
        return self.kind is StatementKind.COMMENT

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


# =============================================================================
# Parser Implementation
# =============================================================================

def parse_line(line: str) -> Statement:
    """
    Parse one source line.

    This never raises. Problems are recorded in `Statement.errors` and the
    statement is returned anyway so it still appears in the listing.

    Args:
        line: The raw source line (without line terminator)

    Returns:
        The parsed statement
    """
    source = line.upper()

    if source.startswith(COMMENT_PREFIX):
        return Statement(raw_text=source, kind=StatementKind.COMMENT)

    match = STATEMENT_PATTERN.fullmatch(source)
    if match is None or not source.strip():
        return Statement(
            raw_text=source,
            kind=StatementKind.INSTRUCTION,
            errors=(ErrorKind.INVALID_LINE,),
        )

    errors: list[ErrorKind] = []
    label = match.group("label")
    mnemonic = match.group("mnemonic") or ""
    operand = match.group("operand") or ""
    opcode = None

    if mnemonic:
        info = get_instruction_info(mnemonic)
        if info is None:
            errors.append(ErrorKind.UNKNOWN_COMMAND)
        else:
            opcode = info.opcode
    else:
        errors.append(ErrorKind.MISSING_COMMAND)

    if not operand:
        errors.append(ErrorKind.MISSING_OPERAND)

    return Statement(
        raw_text=source,
        kind=StatementKind.INSTRUCTION,
        label=label,
        mnemonic=mnemonic,
        operand=Operand(operand),
        opcode=opcode,
        errors=tuple(errors),
    )


def parse_source(lines: Iterable[str]) -> list[Statement]:
    """
    Parse a sequence of source lines.

    Args:
        lines: Source lines in order

    Returns:
        One statement per line, in the same order
    """
    return [parse_line(line) for line in lines]
