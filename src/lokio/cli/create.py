"""CLI command for creating a project from a catalog template."""

import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from lokio.config import ConfigLoadError, load_config
from lokio.errors import ProvisioningError
from lokio.models import Language, ProvisioningRequest
from lokio.provision import NoticeLevel, Provisioner

logger = logging.getLogger(__name__)

NOTICE_COLORS = {
    NoticeLevel.PROGRESS: "blue",
    NoticeLevel.SUCCESS: "green",
    NoticeLevel.WARNING: "yellow",
    NoticeLevel.FAILURE: "red",
}


def echo_notice(level: NoticeLevel, message: str) -> None:
    """Print a provisioning notice in its color."""
    click.secho(message, fg=NOTICE_COLORS[level], err=level is NoticeLevel.FAILURE)


@click.command()
@click.argument("template")
@click.argument("project_name")
@click.option(
    "--lang",
    "language",
    type=click.Choice([lang.value for lang in Language]),
    required=True,
    help="Language of the template",
)
@click.option(
    "--install/--no-install",
    default=False,
    help="Install dependencies after creating the project",
    show_default=True,
)
@click.option(
    "--directory",
    "-C",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory to create the project in",
    show_default=True,
)
@click.pass_context
def create(
    ctx: click.Context,
    template: str,
    project_name: str,
    language: str,
    install: bool,
    directory: str,
) -> None:
    """Create a new project from a catalog template.

    Downloads TEMPLATE from the template catalog into a new PROJECT_NAME
    directory, writes .lokio.yaml and updates the project's manifest.

    \b
    Examples:
        lokio create basic-ts demo --lang ts
        lokio create basic-go api --lang go --install
        lokio create basic-ts demo --lang ts -C ~/projects
    """
    config_path: Optional[str] = (ctx.obj or {}).get("config")
    try:
        config = load_config(config_path)
    except ConfigLoadError as e:
        raise click.ClickException(str(e)) from e

    try:
        request = ProvisioningRequest(
            template_id=template,
            project_name=project_name,
            language=Language(language),
            install_dependencies=install,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    provisioner = Provisioner(config=config, notify=echo_notice)
    try:
        provisioner.run(request, base_dir=Path(directory))
    except ProvisioningError as e:
        # Failure notice already printed by the provisioner
        logger.debug(f"Provisioning failed at step {e.step.value}", exc_info=True)
        ctx.exit(1)
