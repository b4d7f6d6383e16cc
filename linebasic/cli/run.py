"""Run command for linebasic CLI."""

import json
import sys

import click

from linebasic.errors import BasicError
from linebasic.runtime.console import StreamConsole
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
@click.option('--max-steps', type=int, default=None, help='Stop after this many statements')
@click.option('--seed', type=int, default=None, help='Seed for RND')
@click.option('--trace', is_flag=True, help='Log each executed line (with --verbose)')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Print a JSON summary after the run')
def run_command(program, max_steps, seed, trace, json_output):
    """Load a program file and run it."""
    config = ExecutionConfig(max_steps=max_steps, random_seed=seed, trace=trace)
    interpreter = Interpreter(console=StreamConsole(), config=config)

    try:
        interpreter.load(program)
    except BasicError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    result = interpreter.execute_program()

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))

    if not result.success:
        click.echo(str(result.error), err=True)
        sys.exit(1)
