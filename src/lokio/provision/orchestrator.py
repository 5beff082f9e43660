"""Provisioning pipeline.

Creates a project from a catalog template in five steps, each of which must
succeed before the next starts:

1. create the project directory
2. sparse-clone the template subtree into it
3. promote the subtree to the project root and drop the git metadata
4. write ``.lokio.yaml`` with the project name
5. run the language handler (manifest edits, optional dependency install)

A failed step leaves the directory as far as the pipeline got; nothing is
rolled back.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from lokio import messages
from lokio.config import LokioConfig
from lokio.errors import ConfigPatchStatus, DependencyInstallWarning, ProvisioningError
from lokio.languages import process_language
from lokio.models import ProvisioningRequest, ProvisioningState, transition_state
from lokio.models.state import next_state
from lokio.provision.acquirer import acquire_template
from lokio.provision.config_patcher import patch_config
from lokio.provision.directory import ensure_directory
from lokio.provision.relocator import relocate_template
from lokio.utils import CatalogClient

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    """Kind of user-facing notice emitted during provisioning."""

    PROGRESS = "progress"
    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"


Notifier = Callable[[NoticeLevel, str], None]

_LOG_LEVELS = {
    NoticeLevel.PROGRESS: logging.INFO,
    NoticeLevel.SUCCESS: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.FAILURE: logging.ERROR,
}


def log_notifier(level: NoticeLevel, message: str) -> None:
    """Default notifier: send notices to the module logger."""
    logger.log(_LOG_LEVELS[level], message)


@dataclass
class ProvisionResult:
    """Result of provisioning a project."""

    project_name: str
    project_dir: Path
    state: ProvisioningState
    config_status: Optional[ConfigPatchStatus] = None
    warnings: list[DependencyInstallWarning] = field(default_factory=list)


class Provisioner:
    """Runs the provisioning pipeline for one request at a time.

    Attributes:
        config: lokio configuration
        client: Catalog client for the config stub download
        notify: Receives progress, warning and failure notices
        state: State of the current (or last) run
    """

    def __init__(
        self,
        config: Optional[LokioConfig] = None,
        client: Optional[CatalogClient] = None,
        notify: Optional[Notifier] = None,
    ):
        self.config = config or LokioConfig()
        self.client = client or CatalogClient(
            raw_base_url=self.config.catalog.resolved_raw_base_url,
            timeout=self.config.catalog.http_timeout,
        )
        self.notify = notify or log_notifier
        self.state = ProvisioningState.IDLE

    def _advance(self, new_state: ProvisioningState) -> None:
        self.state = transition_state(self.state, new_state)
        logger.debug(f"State: {self.state.value}")

    def run(self, request: ProvisioningRequest, base_dir: Union[str, Path] = ".") -> ProvisionResult:
        """Provision ``request.project_name`` under ``base_dir``.

        Args:
            request: Validated provisioning request
            base_dir: Directory the project directory is created in

        Returns:
            ProvisionResult in state DONE

        Raises:
            ProvisioningError: The error of the failed step, with ``step`` set
                to the state the pipeline was trying to reach
        """
        self.state = ProvisioningState.IDLE
        project_dir = Path(base_dir) / request.project_name
        result = ProvisionResult(
            project_name=request.project_name,
            project_dir=project_dir,
            state=self.state,
        )
        prefix = self.config.catalog.template_prefix

        self.notify(NoticeLevel.PROGRESS, messages.START_SETUP)
        try:
            ensure_directory(project_dir)
            self._advance(ProvisioningState.DIRECTORY_READY)
            self.notify(NoticeLevel.PROGRESS, messages.DIRECTORY_READY.format(path=project_dir))

            acquire_template(request.template_id, project_dir, self.config.catalog)
            self._advance(ProvisioningState.ACQUIRED)

            relocate_template(project_dir, request.template_id, prefix)
            self._advance(ProvisioningState.RELOCATED)
            self.notify(NoticeLevel.SUCCESS, messages.TEMPLATE_COPIED)

            result.config_status = patch_config(
                request.template_id,
                request.project_name,
                project_dir,
                self.client,
                self.config,
            )
            self._advance(ProvisioningState.CONFIG_PATCHED)
            if result.config_status is ConfigPatchStatus.WRITTEN:
                self.notify(NoticeLevel.SUCCESS, messages.CONFIG_COPY_SUCCESS)
            else:
                self.notify(NoticeLevel.WARNING, messages.CONFIG_NOT_FOUND)

            if request.install_dependencies:
                self.notify(NoticeLevel.PROGRESS, messages.INSTALL_START)
            warning = process_language(
                request.language,
                project_dir,
                request.project_name,
                request.install_dependencies,
                self.config.install_commands,
            )
            self._advance(ProvisioningState.LANGUAGE_PROCESSED)
            if warning is not None:
                result.warnings.append(warning)
                self.notify(NoticeLevel.WARNING, f"{messages.INSTALL_FAILED}: {warning}")
            self.notify(
                NoticeLevel.SUCCESS,
                messages.LANGUAGE_PROCESSED.format(language=request.language.value),
            )

            self._advance(ProvisioningState.DONE)
        except Exception as e:
            if isinstance(e, ProvisioningError):
                e.step = next_state(self.state)
            self.state = transition_state(self.state, ProvisioningState.FAILED)
            result.state = self.state
            logger.error(f"Failed to provision {request.project_name}: {e}")
            self.notify(NoticeLevel.FAILURE, messages.FAILURE)
            self.notify(NoticeLevel.FAILURE, str(e))
            raise

        result.state = self.state
        self.notify(NoticeLevel.SUCCESS, messages.success(request.project_name))
        return result


def provision_project(
    request: ProvisioningRequest,
    base_dir: Union[str, Path] = ".",
    config: Optional[LokioConfig] = None,
    client: Optional[CatalogClient] = None,
    notify: Optional[Notifier] = None,
) -> ProvisionResult:
    """Provision a project from a catalog template.

    Convenience wrapper around :class:`Provisioner`.
    """
    return Provisioner(config=config, client=client, notify=notify).run(request, base_dir)
