"""
Helpers shared by the ospl commands.
"""

import functools

import click

from ..exceptions import OsplError
from ..library import Library


def get_library(ctx: click.Context) -> Library:
    """Open the library selected by --library, OSPL_LIBRARY or the config."""
    obj = ctx.find_root().obj
    return Library.from_config(obj['config'], obj.get('library_path'))


def handle_errors(func):
    """Report library errors as click errors instead of tracebacks."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OsplError as e:
            raise click.ClickException(f"{type(e).__name__}: {e}") from e
    return wrapper


def format_time(value) -> str:
    return value.strftime('%Y-%m-%d %H:%M') if value else ''
