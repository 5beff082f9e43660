"""Project directory creation."""

import logging
from pathlib import Path

from lokio.errors import DirectoryCreationError

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and any missing ancestors.

    Succeeds silently if the directory already exists.

    Args:
        path: Directory to create

    Returns:
        The directory path

    Raises:
        DirectoryCreationError: If permission is denied or the path (or one of
            its ancestors) is an existing non-directory file
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(path, e) from e

    logger.debug(f"Directory ready: {path}")
    return path
