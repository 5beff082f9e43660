"""Provisioning request model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A single path segment: no separators, no leading dot
_SEGMENT_PATTERN = r"^[A-Za-z0-9_][A-Za-z0-9._-]*$"


class Language(str, Enum):
    """Language ecosystems supported for post-processing.

    The set is closed: adding a language means adding a member here and a
    handler in ``lokio.languages``.
    """

    TYPESCRIPT = "ts"
    GOLANG = "go"
    KOTLIN = "kt"


class ProvisioningRequest(BaseModel):
    """A request to provision a new project from a catalog template.

    Attributes:
        template_id: Catalog key of the template (e.g., "basic-ts")
        project_name: Name of the new project; used as the target directory
            name and as the identity field written into manifests
        language: Language tag selecting the post-processing handler
        install_dependencies: Whether to run the ecosystem's installer
    """

    model_config = ConfigDict(frozen=True)

    template_id: str = Field(..., min_length=1, pattern=_SEGMENT_PATTERN)
    project_name: str = Field(..., min_length=1, pattern=_SEGMENT_PATTERN)
    language: Language
    install_dependencies: bool = False

    @field_validator("template_id", "project_name")
    @classmethod
    def reject_relative_segments(cls, v: str) -> str:
        """Reject names that would escape the working directory."""
        if v in (".", ".."):
            raise ValueError(f"'{v}' is not a valid name")
        return v
