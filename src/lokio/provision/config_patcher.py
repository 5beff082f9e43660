"""Per-project configuration file (.lokio.yaml)."""

import logging
import re
from pathlib import Path
from typing import Optional

from lokio import messages
from lokio.config import LokioConfig
from lokio.errors import ConfigPatchError, ConfigPatchStatus
from lokio.utils import CatalogAPIError, CatalogClient, CatalogFileNotFoundError

logger = logging.getLogger(__name__)

# First top-level "package:" line, value up to (not including) the line ending
PACKAGE_LINE = re.compile(r"^package:[ \t]*[^\r\n]*", re.MULTILINE)


def rewrite_package_name(content: str, project_name: str) -> tuple[str, bool]:
    """Replace the first ``package:`` line with ``package: <project_name>``.

    Every other character of ``content`` is kept as is.

    Returns:
        Tuple of (new content, whether a line was replaced)
    """
    updated, count = PACKAGE_LINE.subn(lambda _: f"package: {project_name}", content, count=1)
    return updated, count == 1


def patch_config(
    template_id: str,
    project_name: str,
    project_dir: Path,
    client: CatalogClient,
    config: Optional[LokioConfig] = None,
) -> ConfigPatchStatus:
    """Fetch the template's config stub, rename its package and write it.

    Args:
        template_id: Catalog key of the template
        project_name: Value written into the ``package:`` field
        project_dir: Project root the file is written to
        client: Catalog client used for the raw download
        config: lokio configuration (defaults used if omitted)

    Returns:
        WRITTEN, or STUB_ABSENT when the catalog has no stub for the template

    Raises:
        ConfigPatchError: If the download fails for any reason other than a
            missing stub, or the file cannot be written
    """
    config = config or LokioConfig()
    stub_path = config.catalog.config_stub_path.format(template=template_id)

    try:
        content = client.fetch_raw(stub_path)
    except CatalogFileNotFoundError as e:
        logger.warning(f"{messages.CONFIG_NOT_FOUND}: {e}")
        return ConfigPatchStatus.STUB_ABSENT
    except CatalogAPIError as e:
        raise ConfigPatchError(f"{messages.CONFIG_COPY_FAILED}: {e}", e) from e

    updated, replaced = rewrite_package_name(content, project_name)
    if not replaced:
        logger.warning(f"No 'package:' field in {stub_path}; written unchanged")

    dest_path = project_dir / config.config_file_name
    try:
        with open(dest_path, "w", encoding="utf-8", newline="") as f:
            f.write(updated)
    except OSError as e:
        raise ConfigPatchError(f"{messages.CONFIG_COPY_FAILED}: {e}", e) from e

    logger.info(f"Wrote {dest_path}")
    return ConfigPatchStatus.WRITTEN
