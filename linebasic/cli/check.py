"""Check command for linebasic CLI."""

import sys
from pathlib import Path

import click

from linebasic.runtime.program import check_source


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
def check_command(program):
    """Parse every line of a program file and report syntax errors."""
    lines = Path(program).read_text().splitlines()
    errors = check_source(lines)

    for error in errors:
        click.echo(str(error))

    if errors:
        click.echo(f"{len(errors)} error{'s' if len(errors) != 1 else ''}", err=True)
        sys.exit(1)

    click.echo("OK")
