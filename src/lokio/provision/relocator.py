"""Promotion of the acquired template subtree to the project root."""

import logging
import shutil
import uuid
from pathlib import Path

from lokio.errors import RelocationError

logger = logging.getLogger(__name__)

GIT_METADATA_DIR = ".git"


def relocate_template(destination_dir: Path, template_id: str, prefix: str = "code") -> list[str]:
    """Move ``<prefix>/<template_id>/*`` up to ``destination_dir``.

    The staging directory is renamed to a unique hidden name first, so a
    template that ships its own ``<prefix>`` entry does not collide with it.
    After the move the staging directory and the git metadata are deleted.

    A failure part way leaves the entries moved so far in place; there is no
    rollback.

    Args:
        destination_dir: Project root holding the acquired working copy
        template_id: Catalog key of the template
        prefix: Catalog directory holding the templates

    Returns:
        Names of the moved entries

    Raises:
        RelocationError: If the subtree is missing, an entry collides with an
            existing one, or any move or delete fails
    """
    staging_dir = destination_dir / prefix
    if not (staging_dir / template_id).is_dir():
        raise RelocationError(f"{staging_dir / template_id} does not exist")

    moved: list[str] = []
    try:
        hidden_staging = destination_dir / f".{prefix}-staging-{uuid.uuid4().hex[:8]}"
        staging_dir.rename(hidden_staging)
        source_dir = hidden_staging / template_id

        for entry in sorted(source_dir.iterdir()):
            target = destination_dir / entry.name
            if target.exists() or target.is_symlink():
                raise RelocationError(f"{entry.name} already exists in {destination_dir}")
            shutil.move(str(entry), str(target))
            moved.append(entry.name)

        shutil.rmtree(hidden_staging)

        git_dir = destination_dir / GIT_METADATA_DIR
        if git_dir.exists():
            shutil.rmtree(git_dir)
    except OSError as e:
        raise RelocationError(str(e), e) from e

    logger.info(f"Relocated {len(moved)} entries of {template_id} to {destination_dir}")
    return moved
