"""TypeScript projects: package.json name and node package manager install."""

import json
import logging
import re
import shutil
from pathlib import Path
from typing import Optional

from lokio.errors import LanguageProcessingError
from lokio.languages.base import LanguageHandler, read_source, write_source
from lokio.models import Language

logger = logging.getLogger(__name__)

MANIFEST = "package.json"

# Checked in order; the first lockfile present selects the package manager
LOCKFILE_MANAGERS = [
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
]

_INDENT = re.compile(r"^([ \t]+)\"", re.MULTILINE)


def _detect_indent(text: str) -> str | int:
    match = _INDENT.search(text)
    if match is None:
        return 2
    indent = match.group(1)
    return indent if "\t" in indent else len(indent)


def process_files(project_dir: Path, project_name: str) -> None:
    """Set the ``name`` field of package.json to the project name.

    Indentation and the trailing newline of the manifest are kept.
    """
    manifest = project_dir / MANIFEST
    if not manifest.exists():
        logger.warning(f"No {MANIFEST} in {project_dir}; skipping name update")
        return

    text = read_source(manifest)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LanguageProcessingError(f"Invalid JSON in {manifest}: {e}", e) from e

    if not isinstance(data, dict):
        raise LanguageProcessingError(f"{manifest} must contain a JSON object")

    data["name"] = project_name
    output = json.dumps(data, indent=_detect_indent(text), ensure_ascii=False)
    if text.endswith("\n"):
        output += "\n"

    write_source(manifest, output)
    logger.info(f"Set {MANIFEST} name to {project_name}")


def install_command(project_dir: Path) -> Optional[list[str]]:
    """Pick the package manager from the lockfile shipped with the template.

    Falls back to npm when there is no lockfile or the matching manager is not
    on PATH.
    """
    for lockfile, manager in LOCKFILE_MANAGERS:
        if (project_dir / lockfile).exists():
            if shutil.which(manager) is not None:
                return [manager, "install"]
            logger.warning(f"{lockfile} found but {manager} is not installed; using npm")
            break
    return ["npm", "install"]


HANDLER = LanguageHandler(
    language=Language.TYPESCRIPT,
    process_files=process_files,
    install_command=install_command,
)
