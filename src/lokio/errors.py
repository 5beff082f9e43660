"""Failure taxonomy of the provisioning pipeline.

Every fatal error carries ``step`` (the state the pipeline was trying to
reach) and ``cause`` (the underlying exception, if any). The two non-fatal
conditions are ``ConfigPatchStatus.STUB_ABSENT`` and
``DependencyInstallWarning``.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from lokio.models import Language, ProvisioningState


class ProvisioningError(Exception):
    """Base class for errors that abort the provisioning pipeline."""

    step: ProvisioningState = ProvisioningState.IDLE

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DirectoryCreationError(ProvisioningError):
    """Raised when the project directory cannot be created."""

    step = ProvisioningState.DIRECTORY_READY

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to create directory {path}: {cause}", cause)
        self.path = path


class TemplateNotFoundError(ProvisioningError):
    """Raised when the catalog has no subtree for the requested template."""

    step = ProvisioningState.ACQUIRED

    def __init__(self, template_id: str):
        super().__init__(f"Template '{template_id}' not found in catalog")
        self.template_id = template_id


class AcquisitionError(ProvisioningError):
    """Raised when cloning the template subtree fails for any other reason."""

    step = ProvisioningState.ACQUIRED

    def __init__(self, template_id: str, cause: Optional[BaseException] = None, detail: str = ""):
        message = f"Failed to download template '{template_id}'"
        super().__init__(f"{message}: {detail or cause}", cause)
        self.template_id = template_id


class RelocationError(ProvisioningError):
    """Raised when the acquired subtree cannot be promoted to the project root."""

    step = ProvisioningState.RELOCATED

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to relocate template: {message}", cause)


class ConfigPatchError(ProvisioningError):
    """Raised when the config stub cannot be fetched or written."""

    step = ProvisioningState.CONFIG_PATCHED


class LanguageProcessingError(ProvisioningError):
    """Raised when language-specific manifest editing fails."""

    step = ProvisioningState.LANGUAGE_PROCESSED


class UnsupportedLanguageError(LanguageProcessingError):
    """Raised before dispatch for a tag outside the supported set."""

    def __init__(self, tag: object):
        supported = ", ".join(language.value for language in Language)
        super().__init__(f"Unsupported language '{tag}' (supported: {supported})")
        self.tag = tag


class ConfigPatchStatus(str, Enum):
    """Outcome of the config patch step."""

    WRITTEN = "written"
    STUB_ABSENT = "stub_absent"


class DependencyInstallWarning(UserWarning):
    """A dependency installer failed; the project itself was provisioned."""

    def __init__(self, language: Language, command: Sequence[str], detail: str):
        super().__init__(f"'{' '.join(command)}' failed: {detail}")
        self.language = language
        self.command = list(command)
        self.detail = detail
