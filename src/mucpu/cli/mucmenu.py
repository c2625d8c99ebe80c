"""
mucmenu - Interactive MUCPU 2017 Assembler Menu
===============================================

A small menu-driven front end for the assembler, for students who prefer to
pick a file and look at the results without remembering command-line
options.

    John's MUCPU 2017 Assembler (source.txt)
    0 = Quit
    1 = Set Source Filename
    2 = Load and Assemble
    3 = View Listing
    4 = View Machine Code
    Enter choice:

Read errors are reported and the menu keeps running.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from mucpu import __version__
from mucpu.assembler import Assembler
from mucpu.config import AssemblerConfig
from mucpu.errors import SourceFileError

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "source.txt"

CHOICE_QUIT = "0"
CHOICE_SET_FILENAME = "1"
CHOICE_ASSEMBLE = "2"
CHOICE_LISTING = "3"
CHOICE_MACHINE_CODE = "4"


class MenuSession:
    """
    State of one interactive session.

    Attributes:
        filename: Source file to assemble next
        assembler: Assembler holding the last assembled program
        assembled: True once a file has been assembled successfully
    """

    def __init__(self, filename: str = DEFAULT_SOURCE,
                 config: Optional[AssemblerConfig] = None) -> None:
        self.filename = filename
        self.assembler = Assembler(config)
        self.assembled = False

    def show_menu(self) -> None:
        click.echo(f"\nJohn's MUCPU 2017 Assembler ({self.filename})")
        click.echo("0 = Quit")
        click.echo("1 = Set Source Filename")
        click.echo("2 = Load and Assemble")
        click.echo("3 = View Listing")
        click.echo("4 = View Machine Code")

    def set_filename(self) -> None:
        self.filename = click.prompt("\nName of yoursourcefile.txt", default="",
                                     show_default=False).strip()

    def load_and_assemble(self) -> None:
        if not self.filename:
            click.echo("Choose option 1 to set the filename...")
            return
        self.assembled = False
        try:
            program = self.assembler.assemble_file(Path(self.filename))
        except SourceFileError as e:
            click.echo(f"Error: {e}")
            return
        self.assembled = True
        click.echo("Assembly complete.")
        if program.has_errors():
            click.echo(f"{program.error_count()} error(s); see the listing.")

    def view_listing(self) -> None:
        if self.assembled:
            click.echo(f"\n\nLISTING OF {self.filename}\n")
            click.echo(self.assembler.get_listing())

    def view_machine_code(self) -> None:
        if self.assembled:
            click.echo("\n\nMACHINE CODE\n")
            click.echo(self.assembler.get_machine_code())

    def run(self) -> None:
        """Show the menu until the user quits."""
        actions = {
            CHOICE_SET_FILENAME: self.set_filename,
            CHOICE_ASSEMBLE: self.load_and_assemble,
            CHOICE_LISTING: self.view_listing,
            CHOICE_MACHINE_CODE: self.view_machine_code,
        }
        while True:
            self.show_menu()
            choice = click.prompt("Enter choice", default="", show_default=False).strip()
            if choice == CHOICE_QUIT:
                break
            action = actions.get(choice)
            if action is not None:
                action()
            else:
                logger.debug("ignoring menu choice %r", choice)


@click.command()
@click.argument("source", required=False, default=DEFAULT_SOURCE)
@click.version_option(version=__version__, prog_name="mucmenu")
def main(source: str) -> None:
    """
    Interactive menu for the MUCPU 2017 assembler.

    SOURCE is the initial source filename (default: source.txt).
    """
    MenuSession(source, AssemblerConfig.from_env()).run()


if __name__ == "__main__":
    main()
