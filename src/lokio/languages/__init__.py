"""Language-specific post-processing.

``LANGUAGE_HANDLERS`` maps every ``Language`` member to its handler. Adding a
language means adding the enum member and a handler module here.
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from lokio.errors import DependencyInstallWarning, UnsupportedLanguageError
from lokio.languages import golang, kotlin, typescript
from lokio.languages.base import LanguageHandler, run_installer
from lokio.models import Language

logger = logging.getLogger(__name__)

LANGUAGE_HANDLERS: Dict[Language, LanguageHandler] = {
    Language.TYPESCRIPT: typescript.HANDLER,
    Language.GOLANG: golang.HANDLER,
    Language.KOTLIN: kotlin.HANDLER,
}

_unhandled = set(Language) - set(LANGUAGE_HANDLERS)
if _unhandled:
    raise RuntimeError(f"No handler registered for: {sorted(lang.value for lang in _unhandled)}")


def get_handler(language: object) -> LanguageHandler:
    """Return the handler for a language tag.

    Raises:
        UnsupportedLanguageError: If the tag is not a supported language
    """
    try:
        return LANGUAGE_HANDLERS[Language(language)]
    except ValueError:
        raise UnsupportedLanguageError(language) from None


def process_language(
    language: object,
    project_dir: Path,
    project_name: str,
    install_dependencies: bool,
    install_commands: Optional[Mapping[Language, List[str]]] = None,
) -> Optional[DependencyInstallWarning]:
    """Run the post-processing of one language on a provisioned project.

    Args:
        language: Language tag (a Language or its string value)
        project_dir: Project root
        project_name: Name written into the language's manifest
        install_dependencies: Whether to run the language's installer
        install_commands: Per-language installer command overrides

    Returns:
        A DependencyInstallWarning if the installer failed, else None

    Raises:
        UnsupportedLanguageError: If the tag is not supported (before any work)
        LanguageProcessingError: If manifest editing fails
    """
    handler = get_handler(language)
    logger.debug(f"Processing {handler.language.value} project in {project_dir}")

    handler.process_files(project_dir, project_name)

    if not install_dependencies:
        return None

    command = (install_commands or {}).get(handler.language) or handler.install_command(
        project_dir
    )
    if command is None:
        return None
    return run_installer(handler.language, command, project_dir)


__all__ = [
    "LANGUAGE_HANDLERS",
    "LanguageHandler",
    "get_handler",
    "process_language",
]
