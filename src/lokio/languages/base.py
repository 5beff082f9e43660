"""Language handler type and helpers shared by the handlers."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from lokio.errors import DependencyInstallWarning, LanguageProcessingError
from lokio.models import Language

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageHandler:
    """Post-processing capability of one language.

    Attributes:
        language: Tag the handler is registered under
        process_files: Rewrites identity fields (package/module name) in the project
        install_command: Returns the installer command for the project, or None
            when the language has no installer step
    """

    language: Language
    process_files: Callable[[Path, str], None]
    install_command: Callable[[Path], Optional[list[str]]]


def read_source(path: Path) -> str:
    """Read a UTF-8 file keeping its line endings."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LanguageProcessingError(f"Failed to read {path}: {e}", e) from e


def write_source(path: Path, content: str) -> None:
    """Write a UTF-8 file without translating line endings."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise LanguageProcessingError(f"Failed to write {path}: {e}", e) from e


def run_installer(
    language: Language, command: Sequence[str], project_dir: Path
) -> Optional[DependencyInstallWarning]:
    """Run a dependency installer in ``project_dir``.

    Installer failures do not raise: the project is usable and the user can
    rerun the installer.

    Returns:
        None on success, otherwise a DependencyInstallWarning
    """
    logger.info(f"Running {' '.join(command)} in {project_dir}")

    try:
        result = subprocess.run(
            list(command),
            cwd=project_dir,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        warning = DependencyInstallWarning(language, command, str(e))
        logger.warning(str(warning))
        return warning

    if result.stdout:
        logger.debug(result.stdout)

    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        warning = DependencyInstallWarning(
            language, command, detail or f"exit code {result.returncode}"
        )
        logger.warning(str(warning))
        return warning

    return None
