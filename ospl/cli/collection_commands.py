"""
Collection commands.
"""

import click
from tabulate import tabulate

from .common import format_time, get_library, handle_errors


@click.group(name='collection')
def collection_group():
    """Manage collections."""
    pass


@collection_group.command('create')
@click.argument('name')
@click.option('--comment', '-m', default='', help='Free-text comment')
@click.pass_context
@handle_errors
def create_collection(ctx, name: str, comment: str):
    """Create a collection called NAME."""
    collection = get_library(ctx).create_collection(name, comment)
    click.echo(f"✅ Created collection '{collection.name}' (ID: {collection.id})")


@collection_group.command('list')
@click.pass_context
@handle_errors
def list_collections(ctx):
    """List all collections."""
    collections = get_library(ctx).list_collections()
    if not collections:
        click.echo("No collections found.")
        return

    table_data = [
        [c.id, c.name, c.comment, format_time(c.created_at), format_time(c.modified_at)]
        for c in collections
    ]
    click.echo(tabulate(table_data, headers=['ID', 'Name', 'Comment', 'Created', 'Modified'],
                        tablefmt='simple'))


@collection_group.command('show')
@click.argument('collection_id', type=int)
@click.pass_context
@handle_errors
def show_collection(ctx, collection_id: int):
    """Show a collection and its albums."""
    library = get_library(ctx)
    collection = library.get_collection(collection_id)
    albums = library.list_albums_in_collection(collection_id)

    click.echo(f"{collection.name} (ID: {collection.id})")
    if collection.comment:
        click.echo(f"   {collection.comment}")
    click.echo(f"   Path: {collection.path(library.fs)}")
    if albums:
        click.echo(tabulate([[a.id, a.name, a.comment] for a in albums],
                            headers=['ID', 'Album', 'Comment'], tablefmt='simple'))
    else:
        click.echo("   No albums.")


@collection_group.command('rename')
@click.argument('collection_id', type=int)
@click.argument('new_name')
@click.pass_context
@handle_errors
def rename_collection(ctx, collection_id: int, new_name: str):
    """Rename a collection."""
    collection = get_library(ctx).rename_collection(collection_id, new_name)
    click.echo(f"✅ Renamed collection {collection.id} to '{collection.name}'")


@collection_group.command('delete')
@click.argument('collection_id', type=int)
@click.confirmation_option(prompt='Delete the collection and all of its albums?')
@click.pass_context
@handle_errors
def delete_collection(ctx, collection_id: int):
    """Delete a collection and its albums. Photos are kept."""
    get_library(ctx).delete_collection(collection_id)
    click.echo(f"✅ Deleted collection {collection_id}")
