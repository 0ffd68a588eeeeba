"""
Album commands.
"""

import click
from tabulate import tabulate

from .common import format_time, get_library, handle_errors


@click.group(name='album')
def album_group():
    """Manage albums and the photos assigned to them."""
    pass


@album_group.command('create')
@click.argument('collection_id', type=int)
@click.argument('name')
@click.option('--comment', '-m', default='', help='Free-text comment')
@click.pass_context
@handle_errors
def create_album(ctx, collection_id: int, name: str, comment: str):
    """Create album NAME in collection COLLECTION_ID."""
    album = get_library(ctx).create_album(name, comment, collection_id)
    click.echo(f"✅ Created album '{album.name}' in '{album.collection.name}' (ID: {album.id})")


@album_group.command('list')
@click.argument('collection_id', type=int)
@click.pass_context
@handle_errors
def list_albums(ctx, collection_id: int):
    """List the albums of a collection."""
    albums = get_library(ctx).list_albums_in_collection(collection_id)
    if not albums:
        click.echo("No albums found.")
        return

    table_data = [[a.id, a.name, a.comment, format_time(a.created_at)] for a in albums]
    click.echo(tabulate(table_data, headers=['ID', 'Name', 'Comment', 'Created'], tablefmt='simple'))


@album_group.command('show')
@click.argument('album_id', type=int)
@click.pass_context
@handle_errors
def show_album(ctx, album_id: int):
    """Show an album."""
    library = get_library(ctx)
    album = library.get_album(album_id)
    photos = library.list_photos_in_album(album_id)

    click.echo(f"{album.name} (ID: {album.id})")
    click.echo(f"   Collection: {album.collection.name} (ID: {album.collection.id})")
    if album.comment:
        click.echo(f"   {album.comment}")
    click.echo(f"   Photos: {len(photos)}")
    click.echo(f"   Path: {album.path(library.fs)}")


@album_group.command('rename')
@click.argument('album_id', type=int)
@click.argument('new_name')
@click.pass_context
@handle_errors
def rename_album(ctx, album_id: int, new_name: str):
    """Rename an album."""
    album = get_library(ctx).rename_album(album_id, new_name)
    click.echo(f"✅ Renamed album {album.id} to '{album.name}'")


@album_group.command('move')
@click.argument('album_id', type=int)
@click.argument('collection_id', type=int)
@click.pass_context
@handle_errors
def move_album(ctx, album_id: int, collection_id: int):
    """Move an album to another collection."""
    album = get_library(ctx).move_album(album_id, collection_id)
    click.echo(f"✅ Album '{album.name}' is now in '{album.collection.name}'")


@album_group.command('delete')
@click.argument('album_id', type=int)
@click.confirmation_option(prompt='Delete the album? Its photos are kept.')
@click.pass_context
@handle_errors
def delete_album(ctx, album_id: int):
    """Delete an album. Photos are kept."""
    get_library(ctx).delete_album(album_id)
    click.echo(f"✅ Deleted album {album_id}")


@album_group.command('photos')
@click.argument('album_id', type=int)
@click.pass_context
@handle_errors
def album_photos(ctx, album_id: int):
    """List the photos of an album in the order they were added."""
    photos = get_library(ctx).list_photos_in_album(album_id)
    if not photos:
        click.echo("No photos in album.")
        return

    table_data = [[p.id, p.display_name, p.rating, '★' if p.starred else ''] for p in photos]
    click.echo(tabulate(table_data, headers=['ID', 'File', 'Rating', 'Starred'], tablefmt='simple'))


@album_group.command('assign')
@click.argument('photo_id', type=int)
@click.argument('album_id', type=int)
@click.pass_context
@handle_errors
def assign_photo(ctx, photo_id: int, album_id: int):
    """Add photo PHOTO_ID to album ALBUM_ID."""
    get_library(ctx).assign_photo_to_album(photo_id, album_id)
    click.echo(f"✅ Photo {photo_id} is in album {album_id}")


@album_group.command('unassign')
@click.argument('photo_id', type=int)
@click.argument('album_id', type=int)
@click.pass_context
@handle_errors
def unassign_photo(ctx, photo_id: int, album_id: int):
    """Take photo PHOTO_ID out of album ALBUM_ID."""
    if get_library(ctx).remove_photo_from_album(photo_id, album_id):
        click.echo(f"✅ Removed photo {photo_id} from album {album_id}")
    else:
        click.echo(f"Photo {photo_id} was not in album {album_id}")
