"""
MUCPU Command-Line Interface
============================

This package provides command-line tools for the MUCPU toolchain:

- **mucasm**: batch assembler
- **mucmenu**: interactive assembler menu

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["mucasm", "mucmenu"]
