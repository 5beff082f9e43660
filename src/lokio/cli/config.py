"""CLI commands for the lokio configuration file."""

from pathlib import Path
from typing import Optional

import click
import yaml

from lokio.config import DEFAULT_CONFIG_PATH, ConfigLoadError, create_example_config, load_config


@click.group()
def config() -> None:
    """Manage the lokio configuration file."""
    pass


@config.command(name="init")
@click.argument("path", type=click.Path(dir_okay=False), required=False)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(path: Optional[str], force: bool) -> None:
    """Write a configuration file holding the defaults.

    \b
    Examples:
        lokio config init
        lokio config init ./lokio-config.yaml
    """
    output_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if output_path.exists() and not force:
        click.echo(f"Error: {output_path} already exists", err=True)
        click.echo("Use --force to overwrite", err=True)
        raise click.Abort()

    try:
        written = create_example_config(str(output_path))
    except ConfigLoadError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Configuration written to {written}")


@config.command(name="show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration."""
    try:
        effective = load_config((ctx.obj or {}).get("config"))
    except ConfigLoadError as e:
        raise click.ClickException(str(e)) from e
    click.echo(yaml.dump(effective.model_dump(mode="json"), default_flow_style=False, sort_keys=False))
