"""Go projects: module path and go mod tidy."""

import logging
import re
from pathlib import Path
from typing import Optional

from lokio.errors import LanguageProcessingError
from lokio.languages.base import LanguageHandler, read_source, write_source
from lokio.models import Language

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"

MODULE_DIRECTIVE = re.compile(r"^module[ \t]+(\"[^\"\r\n]+\"|[^\s]+)", re.MULTILINE)


def _import_pattern(module_path: str) -> re.Pattern:
    # "old/module" and "old/module/sub/pkg", but not "old/modulex"
    return re.compile('"' + re.escape(module_path) + r'(/[^"\r\n]*)?"')


def process_files(project_dir: Path, project_name: str) -> None:
    """Rename the module in go.mod and every import of its packages."""
    go_mod = project_dir / GO_MOD
    if not go_mod.exists():
        logger.warning(f"No {GO_MOD} in {project_dir}; skipping module rename")
        return

    text = read_source(go_mod)
    match = MODULE_DIRECTIVE.search(text)
    if match is None:
        raise LanguageProcessingError(f"No module directive in {go_mod}")

    old_module = match.group(1).strip('"')
    if old_module == project_name:
        return

    write_source(
        go_mod, text[: match.start()] + f"module {project_name}" + text[match.end() :]
    )

    pattern = _import_pattern(old_module)
    updated_files = 0
    for source in sorted(project_dir.rglob("*.go")):
        content = read_source(source)
        updated = pattern.sub(lambda m: f'"{project_name}{m.group(1) or ""}"', content)
        if updated != content:
            write_source(source, updated)
            updated_files += 1

    logger.info(f"Renamed module {old_module} to {project_name} ({updated_files} files)")


def install_command(project_dir: Path) -> Optional[list[str]]:
    return ["go", "mod", "tidy"]


HANDLER = LanguageHandler(
    language=Language.GOLANG,
    process_files=process_files,
    install_command=install_command,
)
