"""Output helpers that keep user messages off stdout.

user_output goes to stderr so that machine_output (stdout) stays parseable
when piped.
"""

import sys

import click


def user_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, nl=nl, err=True)


def machine_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, nl=nl)


def user_confirm(prompt: str) -> bool:
    """Ask a yes/no question on stderr (defaults to no)."""
    # Pending stderr output must land before the prompt
    sys.stderr.flush()
    return click.confirm(prompt, default=False, err=True)
