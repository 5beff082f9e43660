"""Main CLI entry point for lokio."""

import logging
from typing import Optional

import click

from lokio import __version__, messages
from lokio.cli.config import config as config_cmd
from lokio.cli.create import create as create_cmd


@click.group()
@click.version_option(version=__version__, prog_name="lokio")
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file path [default: $LOKIO_CONFIG or ~/.config/lokio/config.yaml]",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging level for the log file",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write a detailed log to this file",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: str, log_file: Optional[str]) -> None:
    """lokio: make the development process faster and more structured.

    Create new projects from the lokio template catalog.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Console handler - WARNING only; progress is reported by the commands
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, log_level.upper()))
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Keep HTTP connection chatter out of the console
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_file"] = log_file


cli.add_command(create_cmd, name="create")
cli.add_command(config_cmd, name="config")


@cli.command()
def info() -> None:
    """Show version and tagline."""
    click.echo(f"lokio {__version__}")
    click.echo(messages.TAGLINE)


if __name__ == "__main__":
    cli()
