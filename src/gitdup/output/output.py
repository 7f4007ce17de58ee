"""Output helpers separating user-facing messages from machine output."""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    """Write a result line to stdout."""
    click.echo(message, nl=nl)
