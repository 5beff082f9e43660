"""User-facing text."""

TAGLINE = "Structuring Code, One Command at a Time"

START_SETUP = "Setting up your project..."
DIRECTORY_READY = "Project directory ready: {path}"
TEMPLATE_COPIED = "Template copied successfully"
CONFIG_COPY_SUCCESS = "Configuration file created"
CONFIG_NOT_FOUND = "Configuration file not found, skipping"
CONFIG_COPY_FAILED = "Failed to create configuration file"
LANGUAGE_PROCESSED = "Project files updated for {language}"
INSTALL_START = "Installing dependencies..."
INSTALL_FAILED = "Dependency installation failed, run it manually"
FAILURE = "Failed to create project"


def success(project_name: str) -> str:
    """Final message for a provisioned project."""
    return f"Project {project_name} created successfully! Next: cd {project_name}"
