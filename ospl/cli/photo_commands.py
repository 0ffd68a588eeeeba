"""
Photo commands.
"""

import click
from pathlib import Path
from typing import Optional
from tabulate import tabulate

from ..config import get_config_value
from .common import format_time, get_library, handle_errors


@click.group(name='photo')
def photo_group():
    """Import, list and delete photos."""
    pass


@photo_group.command('import')
@click.argument('source', type=click.Path(path_type=Path))
@click.option('--album', '-a', 'album_id', type=int, help='Also add the photo to this album')
@click.pass_context
@handle_errors
def import_photo(ctx, source: Path, album_id: Optional[int]):
    """Import an image file."""
    library = get_library(ctx)
    if album_id is None:
        photo = library.import_photo(source)
    else:
        photo = library.import_photo_into_album(source, album_id)
    click.echo(f"✅ Imported {source.name} as {photo.display_name} (ID: {photo.id})")


@photo_group.command('import-folder')
@click.argument('folder', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument('album_id', type=int)
@click.option('--no-progress', is_flag=True, help='Do not show a progress bar')
@click.pass_context
@handle_errors
def import_folder(ctx, folder: Path, album_id: int, no_progress: bool):
    """Import every file of FOLDER into album ALBUM_ID."""
    progress = not no_progress and get_config_value(ctx.find_root().obj['config'], 'import.progress', True)

    results = get_library(ctx).import_folder_into_album(folder, album_id, progress=progress)

    imported = [r for r in results if r.ok]
    click.echo(f"✅ Imported {len(imported)} of {len(results)} files")
    for result in results:
        if not result.ok:
            click.echo(f"   {result.source.name}: {type(result.error).__name__}: {result.error}", err=True)


@photo_group.command('list')
@click.pass_context
@handle_errors
def list_photos(ctx):
    """List every photo in the library."""
    photos = get_library(ctx).list_photos()
    if not photos:
        click.echo("No photos found.")
        return

    table_data = [
        [p.id, p.filename, p.display_name, format_time(p.imported_at), p.rating]
        for p in photos
    ]
    click.echo(tabulate(table_data, headers=['ID', 'Original', 'File', 'Imported', 'Rating'],
                        tablefmt='simple'))


@photo_group.command('show')
@click.argument('photo_id', type=int)
@click.pass_context
@handle_errors
def show_photo(ctx, photo_id: int):
    """Show a photo and the albums containing it."""
    library = get_library(ctx)
    photo = library.get_photo(photo_id)
    albums = library.albums_containing_photo(photo_id)

    click.echo(f"{photo.display_name} (ID: {photo.id})")
    click.echo(f"   Original name: {photo.filename}")
    click.echo(f"   Fingerprint: {photo.fingerprint:032x}")
    click.echo(f"   Picture: {photo.picture_path(library.fs)}")
    click.echo(f"   Thumbnail: {photo.thumbnail_path(library.fs)}")
    for album in albums:
        click.echo(f"   In album: {album.collection.name}/{album.name} (ID: {album.id})")


@photo_group.command('delete')
@click.argument('photo_id', type=int)
@click.confirmation_option(prompt='Delete the photo from the library and every album?')
@click.pass_context
@handle_errors
def delete_photo(ctx, photo_id: int):
    """Delete a photo, its thumbnail and its album links."""
    get_library(ctx).delete_photo(photo_id)
    click.echo(f"✅ Deleted photo {photo_id}")
