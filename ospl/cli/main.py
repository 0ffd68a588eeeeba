"""
ospl command line entry point.
"""

import click
from pathlib import Path
from typing import Optional

from .. import __version__
from ..config import load_config
from ..library import Library
from ..utils.logging import setup_logging
from .album_commands import album_group
from .collection_commands import collection_group
from .config_commands import config_group
from .common import handle_errors
from .photo_commands import photo_group


@click.group()
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Configuration file')
@click.option('--library', '-L', 'library_path', envvar='OSPL_LIBRARY',
              type=click.Path(file_okay=False, path_type=Path),
              help='Library directory (default: library.path from config)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--quiet', '-q', is_flag=True, help='Only log warnings and errors')
@click.version_option(__version__, prog_name='ospl')
@click.pass_context
def main(ctx, config_path: Optional[Path], library_path: Optional[Path], verbose: bool, quiet: bool):
    """ospl - keep a photo library's database and file tree in step."""
    config = load_config(config_path)

    level = None
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'WARNING'
    setup_logging(config, level)

    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    ctx.obj['library_path'] = library_path
    ctx.obj['config_path'] = config_path


@main.command('init')
@click.argument('path', type=click.Path(path_type=Path))
@handle_errors
def init_library(path: Path):
    """Create a new, empty library at PATH."""
    library = Library.create(path)
    click.echo(f"✅ Created library at {library.path}")


main.add_command(collection_group)
main.add_command(album_group)
main.add_command(photo_group)
main.add_command(config_group)


if __name__ == '__main__':
    main()
