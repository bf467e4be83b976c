"""CLI utility functions and helpers."""

from pathlib import Path
from typing import Tuple

import click

from .input_parser import InputParser

# Global flag for quiet mode
_quiet_mode = False


def set_quiet_mode(quiet: bool) -> None:
    """Set the global quiet mode flag."""
    global _quiet_mode
    _quiet_mode = quiet


def echo(message: str = "", err: bool = False, **kwargs) -> None:
    """Echo wrapper that respects quiet mode."""
    if _quiet_mode and not err:
        return
    click.echo(message, err=err, **kwargs)


def secho(message: str = "", err: bool = False, **kwargs) -> None:
    """Styled echo wrapper that respects quiet mode."""
    if _quiet_mode and not err:
        return
    click.secho(message, err=err, **kwargs)


def resolve_query(query: str) -> Tuple[str, str]:
    """
    Turn a QUERY argument into (label, sequence).

    A value starting with '@' names a record file whose first record is the
    query; anything else is taken as the sequence itself.
    """
    if not query.startswith('@'):
        return 'query', query.strip()

    path = Path(query[1:])
    records = InputParser().parse_file(path)
    if len(records) == 0:
        raise click.BadParameter(f"No records in query file {path}", param_hint='QUERY')

    first = records[0]
    return first.description or path.name, first.sequence
