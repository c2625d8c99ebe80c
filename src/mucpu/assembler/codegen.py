"""
MUCPU 2017 Code Generator
=========================

This module resolves parsed statements into machine code. It implements a
two-pass assembly process as two separate functions, so each pass can be
used and tested on its own.

Pass 1 (Address Assignment)
---------------------------
- Scan all statements sequentially
- Assign the current program counter to every non-comment statement
- Build the label table (first declaration wins)
- Advance the program counter by 1 for DB and by 2 for everything else

Pass 2 (Operand Resolution)
---------------------------
- Interpret each operand as a literal byte or a label reference
- Look label references up in the (now complete) label table
- Produce the final `Program`

Two passes are needed because a label may be used before the line that
declares it. The label table is complete only once pass 1 has seen every
line.

Machine Code Layout
-------------------
```
instruction:  [opcode] [operand]
DB:           [operand]
```
There is no header and no section marker. Code and data are told apart
only by position: by convention everything after HLT is data.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from mucpu.assembler.parser import OperandKind, Statement, parse_source
from mucpu.cpu import ADDRESS_SPACE_SIZE, is_data_directive, statement_size
from mucpu.errors import Diagnostic, ErrorKind, SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class AddressMap:
    """
    Result of pass 1.

    Attributes:
        addresses: Address of each statement, index-aligned with the input
                   (None for comments and statements that overflowed)
        labels: Read-only label table (name -> address)
        errors: Pass 1 diagnostics for each statement, index-aligned
        end_address: Program counter after the last statement
    """
    addresses: tuple[Optional[int], ...]
    labels: Mapping[str, int]
    errors: tuple[tuple[ErrorKind, ...], ...]
    end_address: int


@dataclass(frozen=True)
class AssembledLine:
    """
    A statement together with its resolved fields.

    Attributes:
        statement: The parsed statement
        address: Assigned address (None for comments and overflowed lines)
        opcode: Opcode byte (None for comments, DB and unknown mnemonics)
        operand_byte: Resolved operand byte (None if it could not be resolved)
        errors: Parse, pass 1 and pass 2 diagnostics, in that order
    """
    statement: Statement
    address: Optional[int] = None
    opcode: Optional[int] = None
    operand_byte: Optional[int] = None
    errors: tuple[ErrorKind, ...] = ()

    @property
    def source(self) -> str:
        return self.statement.raw_text

    @property
    def is_comment(self) -> bool:
        return self.statement.is_comment

    @property
    def is_data(self) -> bool:
        return is_data_directive(self.statement.mnemonic)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def code_slots(self) -> list[Optional[int]]:
        """
        Machine code contributed by this line, one entry per byte.

        Comments contribute nothing. DB contributes its operand byte only.
        Every other statement contributes opcode then operand. Entries are
        None where the byte could not be resolved.
        """
        if self.is_comment:
            return []
        if self.is_data:
            return [self.operand_byte]
        return [self.opcode, self.operand_byte]


@dataclass(frozen=True)
class Program:
    """
    The result of one assembly run.

    Immutable once built. The renderers in `mucpu.assembler.listing` only
    read from it.

    Attributes:
        lines: One assembled line per source line, in source order
        labels: Read-only label table (name -> address)
    """
    lines: tuple[AssembledLine, ...]
    labels: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def __iter__(self) -> Iterator[AssembledLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def machine_code(self) -> list[Optional[int]]:
        """All machine code slots in emission order (None if unresolved)."""
        slots: list[Optional[int]] = []
        for line in self.lines:
            slots.extend(line.code_slots())
        return slots

    def has_errors(self) -> bool:
        return any(line.has_errors for line in self.lines)

    def error_count(self) -> int:
        return sum(len(line.errors) for line in self.lines)

    def diagnostics(self, filename: str = "<input>") -> Iterator[Diagnostic]:
        """Yield a Diagnostic for every error, in source order."""
        for number, line in enumerate(self.lines, start=1):
            location = SourceLocation(filename, number)
            for kind in line.errors:
                yield Diagnostic(location, kind, line.source)


# =============================================================================
# Pass 1: Address Assignment
# =============================================================================

def assign_addresses(statements: Sequence[Statement]) -> AddressMap:
    """
    First pass: assign addresses and collect labels.

    A label that is already in the table is reported as DUPLICATE_LABEL on
    the later line and keeps its first address. A statement whose bytes do
    not fit below ADDRESS_SPACE_SIZE is reported as ADDRESS_OVERFLOW, gets
    no address, and its label is not recorded.

    Args:
        statements: Parsed statements in source order

    Returns:
        The address map for pass 2
    """
    pc = 0
    labels: dict[str, int] = {}
    addresses: list[Optional[int]] = []
    errors: list[tuple[ErrorKind, ...]] = []

    for stmt in statements:
        if stmt.is_comment:
            addresses.append(None)
            errors.append(())
            continue

        size = statement_size(stmt.mnemonic)
        line_errors: list[ErrorKind] = []

        duplicate = stmt.label is not None and stmt.label in labels
        if duplicate:
            line_errors.append(ErrorKind.DUPLICATE_LABEL)
            logger.debug(
                "label %s already at $%02X, ignoring redeclaration",
                stmt.label, labels[stmt.label],
            )

        if pc + size > ADDRESS_SPACE_SIZE:
            line_errors.append(ErrorKind.ADDRESS_OVERFLOW)
            addresses.append(None)
        else:
            addresses.append(pc)
            if stmt.label and not duplicate:
                labels[stmt.label] = pc

        errors.append(tuple(line_errors))
        pc += size

    logger.debug("pass 1: %d labels, end address $%02X", len(labels), pc)

    return AddressMap(
        addresses=tuple(addresses),
        labels=MappingProxyType(labels),
        errors=tuple(errors),
        end_address=pc,
    )


# =============================================================================
# Pass 2: Operand Resolution
# =============================================================================

def resolve_operand(
    stmt: Statement,
    labels: Mapping[str, int],
) -> tuple[Optional[int], Optional[ErrorKind]]:
    """
    Resolve one statement's operand against a complete label table.

    Returns:
        (operand byte, None) on success, (None, error kind) on failure
    """
    operand = stmt.operand
    kind = operand.kind

    if kind is OperandKind.MISSING:
        return None, ErrorKind.OPERAND_NOT_FOUND
    if kind is OperandKind.HEX_BYTE:
        return operand.value, None
    if operand.text in labels:
        return labels[operand.text], None
    return None, ErrorKind.OPERAND_RESOLUTION_FAILED


def resolve_operands(
    statements: Sequence[Statement],
    address_map: AddressMap,
) -> Program:
    """
    Second pass: resolve operands and build the program.

    The label table is only read here.

    Args:
        statements: The statements given to `assign_addresses`
        address_map: Its result

    Returns:
        The finished program
    """
    if len(statements) != len(address_map.addresses):
        raise ValueError("address map does not belong to these statements")

    lines: list[AssembledLine] = []

    for stmt, address, pass1_errors in zip(
        statements, address_map.addresses, address_map.errors
    ):
        if stmt.is_comment:
            lines.append(AssembledLine(statement=stmt))
            continue

        operand_byte, error = resolve_operand(stmt, address_map.labels)
        errors = stmt.errors + pass1_errors
        if error is not None:
            errors += (error,)

        lines.append(AssembledLine(
            statement=stmt,
            address=address,
            opcode=stmt.opcode,
            operand_byte=operand_byte,
            errors=errors,
        ))

    program = Program(lines=tuple(lines), labels=address_map.labels)
    logger.debug("pass 2: %d lines, %d errors", len(program), program.error_count())
    return program


# =============================================================================
# Pipeline
# =============================================================================

def generate(statements: Sequence[Statement]) -> Program:
    """Run both passes over parsed statements."""
    return resolve_operands(statements, assign_addresses(statements))


def assemble(lines: Iterable[str]) -> Program:
    """
    Assemble source lines into a program.

    Each call is independent: the label table and program counter exist
    only for the duration of the call.

    Args:
        lines: Source lines in order (without line terminators)

    Returns:
        The assembled program. Check `Program.has_errors()` for diagnostics.
    """
    return generate(parse_source(lines))
