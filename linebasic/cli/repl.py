"""Interactive session command for linebasic CLI."""

import sys

import click

from linebasic.errors import BasicError
from linebasic.runtime.console import StreamConsole
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter


@click.command()
@click.argument('program', required=False, type=click.Path(exists=True, dir_okay=False))
@click.option('--seed', type=int, default=None, help='Seed for RND')
def repl_command(program, seed):
    """Start an interactive session, optionally loading a program first."""
    interpreter = Interpreter(console=StreamConsole(), config=ExecutionConfig(random_seed=seed))

    if program:
        try:
            interpreter.load(program)
        except BasicError as e:
            click.echo(str(e), err=True)
            sys.exit(1)

    interpreter.repl()
