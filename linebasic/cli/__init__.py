"""linebasic CLI Package - Modular command structure"""

import logging

import click

from linebasic import __version__
from linebasic.cli.run import run_command
from linebasic.cli.repl import repl_command
from linebasic.cli.check import check_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    """linebasic - line-numbered BASIC interpreter."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")


@click.command()
def version_command():
    """Show version info."""
    click.echo(f"linebasic {__version__}")


main.add_command(run_command, "run")
main.add_command(repl_command, "repl")
main.add_command(check_command, "check")
main.add_command(version_command, "version")

__all__ = [
    "main",
    "run_command",
    "repl_command",
    "check_command",
    "version_command",
]
