"""Kotlin projects: accepted as is, no post-processing."""

from pathlib import Path
from typing import Optional

from lokio.languages.base import LanguageHandler
from lokio.models import Language


def process_files(project_dir: Path, project_name: str) -> None:
    pass


def install_command(project_dir: Path) -> Optional[list[str]]:
    return None


HANDLER = LanguageHandler(
    language=Language.KOTLIN,
    process_files=process_files,
    install_command=install_command,
)
