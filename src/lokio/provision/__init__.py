"""Project provisioning from the remote template catalog."""

from lokio.provision.acquirer import acquire_template
from lokio.provision.config_patcher import patch_config, rewrite_package_name
from lokio.provision.directory import ensure_directory
from lokio.provision.orchestrator import (
    NoticeLevel,
    Notifier,
    ProvisionResult,
    Provisioner,
    provision_project,
)
from lokio.provision.relocator import relocate_template

__all__ = [
    "NoticeLevel",
    "Notifier",
    "ProvisionResult",
    "Provisioner",
    "acquire_template",
    "ensure_directory",
    "patch_config",
    "provision_project",
    "relocate_template",
    "rewrite_package_name",
]
