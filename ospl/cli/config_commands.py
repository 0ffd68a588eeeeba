"""
Configuration commands.
"""

import click
import yaml
from pathlib import Path

from ..config import USER_CONFIG_PATH, get_config_value, load_config, save_config, update_config_value


def _config_file(ctx: click.Context) -> Path:
    """File written by ``config set``: --config if given, else the user config."""
    return ctx.find_root().obj.get('config_path') or USER_CONFIG_PATH


@click.group(name='config')
def config_group():
    """Show and change configuration."""
    pass


@config_group.command('show')
@click.argument('key', required=False)
@click.pass_context
def show_config(ctx, key: str = None):
    """Print the active configuration, or the value of KEY."""
    config = ctx.find_root().obj['config']
    if key is None:
        click.echo(yaml.dump(config, default_flow_style=False, indent=2), nl=False)
        return

    value = get_config_value(config, key)
    if value is None:
        raise click.ClickException(f"No value set for {key}")
    if isinstance(value, dict):
        click.echo(yaml.dump(value, default_flow_style=False, indent=2), nl=False)
    else:
        click.echo(value)


@config_group.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_config(ctx, key: str, value: str):
    """Set KEY (dot separated, e.g. thumbnails.height) to VALUE."""
    config_file = _config_file(ctx)
    config = load_config(config_file)

    # YAML parsing turns "200" into 200 and "true" into True
    update_config_value(config, key, yaml.safe_load(value))

    if not save_config(config, config_file):
        raise click.ClickException(f"Could not write {config_file}")
    click.echo(f"✅ {key} = {get_config_value(config, key)} in {config_file}")
