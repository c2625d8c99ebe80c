"""
mucasm - MUCPU 2017 Assembler Command-Line Interface
====================================================

This module implements the command-line interface for the MUCPU 2017
assembler.

Usage Examples
--------------
Show listing and machine code on the terminal:
    $ mucasm count.asm

Write output files:
    $ mucasm count.asm -l count.lst -o count.hex -s count.sym

Raw binary image for the simulator:
    $ mucasm count.asm -b count.bin

Verbose mode:
    $ mucasm -v count.asm
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from mucpu import __version__
from mucpu.assembler import Assembler
from mucpu.cli.errors import ExitCode, handle_cli_exception
from mucpu.config import AssemblerConfig

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write machine code text (one hex byte per line)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write symbol file",
)
@click.option(
    "-b", "--binary",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write raw binary machine code (fails if any byte is unresolved)",
)
@click.option(
    "--header/--no-header",
    default=None,
    help="Add a title and column header to the listing",
)
@click.option(
    "-k", "--keep-going",
    is_flag=True,
    default=None,
    help="Exit successfully even if the source has errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mucasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    binary: Optional[Path],
    header: Optional[bool],
    keep_going: Optional[bool],
    verbose: bool,
) -> None:
    """
    Assemble MUCPU 2017 source code.

    INPUT_FILE is the assembly source file to assemble.

    With no output option, the listing and the machine code are printed
    to the terminal.

    \b
    Examples:
        mucasm count.asm                  # Print listing and machine code
        mucasm count.asm -l count.lst     # Write listing
        mucasm count.asm -o count.hex     # Write machine code text
        mucasm count.asm -b count.bin     # Write raw binary
    """
    setup_logging(verbose)

    try:
        config = AssemblerConfig.from_env().with_overrides(
            listing_header=header,
            keep_going=keep_going or None,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    logger.debug("using %s", config)
    asm = Assembler(config)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        asm.assemble_file(input_file)

        if not any([output, listing, symbols, binary]):
            click.echo(f"LISTING OF {input_file}\n")
            click.echo(asm.get_listing())
            click.echo("MACHINE CODE\n")
            click.echo(asm.get_machine_code(), nl=False)

        # Diagnostics go out before any output file is written.
        if asm.has_errors():
            click.echo(asm.get_error_report(), err=True)

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if output:
            asm.write_machine_code(output)
            if verbose:
                click.echo(f"Wrote machine code to {output}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if binary:
            asm.write_binary(binary)
            if verbose:
                click.echo(f"Wrote {len(asm.get_code())} bytes raw binary to {binary}")

        if verbose:
            program = asm.program
            click.echo(
                f"Assembly complete: {len(program.machine_code())} bytes, "
                f"{len(program.labels)} labels"
            )

        if asm.has_errors() and not config.keep_going:
            sys.exit(ExitCode.BUILD_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
