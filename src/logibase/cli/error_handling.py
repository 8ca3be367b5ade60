"""CLI error handling helpers."""

import json
from typing import Any, IO

import click

from logibase.domain.errors import DomainError, InternalError, GENERIC_FAILURE


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error and exit with failure.

    Internal failures are already logged with their traceback; the user only
    gets the generic retry message.
    """
    if isinstance(error, InternalError):
        click.echo(f"Error: {GENERIC_FAILURE}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def load_payload(ctx: click.Context, stream: IO[str]) -> Any:
    """Read a JSON payload, exiting with an error message if it is malformed."""
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON in {stream.name}: {e}", err=True)
        ctx.exit(1)
