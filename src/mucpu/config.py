"""
MUCPU Toolchain - Configuration
===============================

Settings shared by the assembler and the command-line tools. Configuration
can come from:
- Default values (defined here)
- Environment variables (`AssemblerConfig.from_env`)
- Command-line options, which override both
"""

from dataclasses import dataclass, replace
import os
from typing import Optional


TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"{name}: expected a boolean, got '{value}'")


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for assembly runs and output rendering.

    Attributes:
        source_encoding: Text encoding used to read source files
        listing_header: Prefix the listing with a title and column header
        unresolved_token: Text shown in the machine code view for bytes that
                          could not be resolved
        keep_going: Command-line tools exit successfully even when the
                    program has diagnostics
    """

    source_encoding: str = "utf-8"
    listing_header: bool = False
    unresolved_token: str = "??"
    keep_going: bool = False

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            MUCPU_SOURCE_ENCODING: Source file encoding
            MUCPU_LISTING_HEADER: Add listing header (1/true/yes/on)
            MUCPU_UNRESOLVED_TOKEN: Placeholder for unresolved bytes
            MUCPU_KEEP_GOING: Do not fail on diagnostics (1/true/yes/on)

        Raises:
            ValueError: If a boolean variable has an unrecognised value
        """
        env = os.environ if environ is None else environ
        config = cls()

        if "MUCPU_SOURCE_ENCODING" in env:
            config = replace(config, source_encoding=env["MUCPU_SOURCE_ENCODING"])
        if "MUCPU_LISTING_HEADER" in env:
            config = replace(config, listing_header=_parse_bool(
                "MUCPU_LISTING_HEADER", env["MUCPU_LISTING_HEADER"]))
        if "MUCPU_UNRESOLVED_TOKEN" in env:
            config = replace(config, unresolved_token=env["MUCPU_UNRESOLVED_TOKEN"])
        if "MUCPU_KEEP_GOING" in env:
            config = replace(config, keep_going=_parse_bool(
                "MUCPU_KEEP_GOING", env["MUCPU_KEEP_GOING"]))

        return config

    def with_overrides(self, **overrides) -> "AssemblerConfig":
        """Return a copy with the non-None overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)
