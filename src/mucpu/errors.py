"""
MUCPU Error Hierarchy
=====================

This module defines both kinds of error the toolchain deals with:

1. **Diagnostics** (`ErrorKind`): problems found in assembly source. These
   never abort a run. Every source line is parsed and resolved, and the
   problems found on a line are attached to it as an ordered tuple of
   `ErrorKind` values, so the listing can show all of them at once.

2. **Exceptions** (`MucpuError` and subclasses): failures at the I/O and
   output boundary, such as an unreadable source file or a request for a
   binary image of a program that still has unresolved bytes.

Exception Hierarchy
-------------------
MucpuError (base)
├── AssemblerError (assembler-related)
│   ├── UnresolvedCodeError - binary image requested for a program with errors
│   └── NoProgramError - output requested before any assembly run
└── SourceFileError - source file cannot be read or decoded

Error messages follow this format:
    filename:line: error: description
    source_line_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Line Diagnostics
# =============================================================================

class ErrorKind(Enum):
    """
    Closed set of per-line assembly diagnostics.

    The value of each member is the message shown in front of the source
    text in the listing.
    """
    INVALID_LINE = "INVALID LINE ERROR"
    MISSING_COMMAND = "MISSING COMMAND ERROR"
    UNKNOWN_COMMAND = "COMMAND NOT FOUND ERROR"
    MISSING_OPERAND = "MISSING OPERAND ERROR"
    OPERAND_NOT_FOUND = "OPERAND NOT FOUND ERROR"
    OPERAND_RESOLUTION_FAILED = "OPERAND FORMAT OR SPELLING ERROR"
    DUPLICATE_LABEL = "DUPLICATE LABEL ERROR"
    ADDRESS_OVERFLOW = "ADDRESS OVERFLOW ERROR"

    @property
    def message(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Base Exception Class
# =============================================================================

class MucpuError(Exception):
    """
    Base exception for all MUCPU toolchain errors.

    Callers can catch every toolchain failure with a single clause:

        try:
            asm.assemble_file("program.asm")
        except MucpuError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A line in a source file.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


@dataclass(frozen=True)
class Diagnostic:
    """
    One diagnostic tied to the source line it was found on.

    Attributes:
        location: Where the diagnostic was found
        kind: What went wrong
        source_line: The (upper-cased) source text of the line
    """
    location: SourceLocation
    kind: ErrorKind
    source_line: str

    def __str__(self) -> str:
        return f"{self.location}: error: {self.kind.message}\n    {self.source_line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(MucpuError):
    """
    Base exception for assembler failures.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.asm:3: error: operand byte is unresolved
                JMP LOPO
            hint: fix the errors shown in the listing first
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnresolvedCodeError(AssemblerError):
    """
    A binary image was requested for a program with unresolved bytes.

    The text machine-code view can show placeholders for bytes that could
    not be resolved, but a raw binary image cannot.
    """

    def __init__(
        self,
        unresolved_count: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.unresolved_count = unresolved_count
        byte_word = "byte" if unresolved_count == 1 else "bytes"
        super().__init__(
            f"program has {unresolved_count} unresolved {byte_word}",
            location=location,
            hint="fix the errors shown in the listing first",
            source_line=source_line,
        )


class NoProgramError(AssemblerError):
    """Output was requested before anything was assembled."""

    def __init__(self) -> None:
        super().__init__(
            "nothing has been assembled yet",
            hint="load and assemble a source file first",
        )


# =============================================================================
# Source File Exceptions
# =============================================================================

class SourceFileError(MucpuError):
    """
    The assembly source file cannot be read.

    Raised when the file is missing, unreadable, or not valid text in the
    configured encoding.
    """

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot read '{filename}': {reason}")


# =============================================================================
# Error Collection for Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects diagnostics for batch reporting.

    The assembler never stops at the first problem. After a run, the
    diagnostics of every line are gathered here so they can be reported
    together.

    Example:
        collector = ErrorCollector()
        for diagnostic in program.diagnostics("prog.asm"):
            collector.add(diagnostic)

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self) -> None:
        self.errors: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic to the collection."""
        self.errors.append(diagnostic)

    def extend(self, diagnostics) -> None:
        """Add several diagnostics at once."""
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected diagnostics."""
        return len(self.errors)

    def report(self) -> str:
        """
        Format all diagnostics for display.

        Returns:
            Formatted string with one entry per diagnostic and a summary line
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.errors.clear()
