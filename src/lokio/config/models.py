"""Configuration models for lokio."""

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from lokio.models import Language


class CatalogSettings(BaseModel):
    """Location of the remote template catalog.

    Attributes:
        repo_url: Git URL of the catalog repository
        branch: Branch to clone
        raw_base_url: Base URL for raw file downloads from the catalog.
            ``{branch}`` is replaced with ``branch``.
        template_prefix: Directory in the catalog that holds one subtree per template
        config_stub_path: Path of a template's config stub, relative to raw_base_url.
            ``{template}`` is replaced with the template id.
        git_timeout: Seconds to wait for each git command
        http_timeout: Seconds to wait for raw file downloads
    """

    repo_url: str = "https://github.com/any-source/examples"
    branch: str = "main"
    raw_base_url: str = "https://raw.githubusercontent.com/any-source/examples/{branch}"
    template_prefix: str = "code"
    config_stub_path: str = "code/{template}/.lokio.yaml"
    git_timeout: int = Field(default=300, gt=0)
    http_timeout: int = Field(default=30, gt=0)

    @field_validator("template_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Validate that the prefix is a single relative path segment."""
        v = v.strip("/")
        if not v or "/" in v or v in (".", ".."):
            raise ValueError("template_prefix must be a single directory name")
        return v

    @property
    def resolved_raw_base_url(self) -> str:
        """Raw download base for the configured branch."""
        return self.raw_base_url.replace("{branch}", self.branch)


class LokioConfig(BaseModel):
    """Root configuration model for lokio.

    Attributes:
        name: Tool name used in messages
        config_file_name: File written into each provisioned project
        catalog: Remote template catalog settings
        install_commands: Per-language override of the dependency installer command
    """

    name: str = "lokio"
    config_file_name: str = ".lokio.yaml"
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    install_commands: Dict[Language, List[str]] = Field(default_factory=dict)

    @field_validator("install_commands")
    @classmethod
    def commands_not_empty(cls, v: Dict[Language, List[str]]) -> Dict[Language, List[str]]:
        """Validate that every override names a program to run."""
        for language, command in v.items():
            if not command:
                raise ValueError(f"install command for '{language.value}' is empty")
        return v
