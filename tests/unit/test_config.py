"""Unit tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from lokio.config import (
    CatalogSettings,
    ConfigLoadError,
    LokioConfig,
    create_example_config,
    load_config,
)
from lokio.config import loader
from lokio.languages import process_language
from lokio.models import Language


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Test loading a valid configuration file."""
        config_file = tmp_path / "config.yaml"
        config_data = {
            "catalog": {
                "repo_url": "https://example.com/templates.git",
                "branch": "stable",
            },
            "install_commands": {"ts": ["pnpm", "install"]},
        }

        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        config = load_config(str(config_file))
        assert config.catalog.repo_url == "https://example.com/templates.git"
        assert config.catalog.branch == "stable"
        assert config.catalog.template_prefix == "code"
        assert config.install_commands == {Language.TYPESCRIPT: ["pnpm", "install"]}

    def test_missing_config_file(self) -> None:
        """Test error when an explicit config file doesn't exist."""
        with pytest.raises(ConfigLoadError, match="Configuration file not found"):
            load_config("/nonexistent/config.yaml")

    def test_defaults_without_any_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that built-in defaults are used when no file is configured."""
        monkeypatch.delenv("LOKIO_CONFIG", raising=False)
        monkeypatch.setattr(loader, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")

        config = load_config()
        assert config == LokioConfig()

    def test_env_var_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that $LOKIO_CONFIG is read when no path is given."""
        config_file = tmp_path / "env.yaml"
        config_file.write_text("config_file_name: .custom.yaml\n")
        monkeypatch.setenv("LOKIO_CONFIG", str(config_file))

        config = load_config()
        assert config.config_file_name == ".custom.yaml"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test error with invalid YAML syntax."""
        config_file = tmp_path / "bad_config.yaml"
        with open(config_file, "w") as f:
            f.write("invalid: yaml: syntax: here:")

        with pytest.raises(ConfigLoadError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_empty_config_file(self, tmp_path: Path) -> None:
        """Test error with empty config file."""
        config_file = tmp_path / "empty.yaml"
        config_file.touch()

        with pytest.raises(ConfigLoadError, match="empty"):
            load_config(str(config_file))

    def test_non_mapping_config(self, tmp_path: Path) -> None:
        """Test error when the YAML document is not a mapping."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(str(config_file))

    def test_validation_error(self, tmp_path: Path) -> None:
        """Test error with invalid config structure."""
        config_file = tmp_path / "invalid.yaml"
        config_data = {"catalog": {"template_prefix": "code/nested"}}

        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        with pytest.raises(ConfigLoadError, match="validation failed"):
            load_config(str(config_file))

    def test_unknown_install_language(self, tmp_path: Path) -> None:
        """Test that install overrides only accept supported languages."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("install_commands:\n  rs: [cargo, fetch]\n")

        with pytest.raises(ConfigLoadError, match="validation failed"):
            load_config(str(config_file))


@pytest.mark.unit
class TestCreateExampleConfig:
    """Tests for create_example_config function."""

    def test_creates_example_config(self, tmp_path: Path) -> None:
        """Test creating example configuration file."""
        output_path = tmp_path / "example_config.yaml"
        create_example_config(str(output_path))

        assert output_path.exists()

        with open(output_path) as f:
            config_data = yaml.safe_load(f)

        assert config_data["name"] == "lokio"
        assert config_data["catalog"]["repo_url"] == "https://github.com/any-source/examples"
        assert config_data["install_commands"] == {}

    def test_example_config_round_trips(self, tmp_path: Path) -> None:
        """Test that the written example loads back."""
        output_path = tmp_path / "config.yaml"
        create_example_config(str(output_path))

        config = load_config(str(output_path))
        assert config.catalog == CatalogSettings()
        assert config.install_commands == {}

    def test_example_config_keeps_lockfile_detection(self, tmp_path: Path) -> None:
        """Test that a written example config does not pin the package manager."""
        output_path = tmp_path / "config.yaml"
        create_example_config(str(output_path))
        config = load_config(str(output_path))

        project_dir = tmp_path / "demo"
        project_dir.mkdir()
        (project_dir / "pnpm-lock.yaml").write_text("lockfileVersion: 9.0\n")

        with patch(
            "lokio.languages.typescript.shutil.which", return_value="/usr/bin/pnpm"
        ), patch("lokio.languages.run_installer", return_value=None) as mock_installer:
            process_language(
                Language.TYPESCRIPT, project_dir, "demo", True, config.install_commands
            )

        assert mock_installer.call_args.args[1] == ["pnpm", "install"]

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Test that parent directories are created if they don't exist."""
        output_path = tmp_path / "nested" / "dir" / "config.yaml"
        create_example_config(str(output_path))

        assert output_path.exists()
        assert output_path.parent.exists()


@pytest.mark.unit
class TestLokioConfig:
    """Tests for LokioConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = LokioConfig()
        assert config.name == "lokio"
        assert config.config_file_name == ".lokio.yaml"
        assert config.catalog.branch == "main"
        assert config.catalog.config_stub_path == "code/{template}/.lokio.yaml"
        assert config.catalog.resolved_raw_base_url == (
            "https://raw.githubusercontent.com/any-source/examples/main"
        )
        assert config.install_commands == {}

    def test_prefix_slashes_stripped(self) -> None:
        """Test that surrounding slashes are removed from the prefix."""
        assert CatalogSettings(template_prefix="/templates/").template_prefix == "templates"

    def test_raw_base_url_follows_branch(self) -> None:
        """Test that the raw download base uses the configured branch."""
        catalog = CatalogSettings(branch="dev")
        assert catalog.resolved_raw_base_url == (
            "https://raw.githubusercontent.com/any-source/examples/dev"
        )

    def test_raw_base_url_without_placeholder(self) -> None:
        """Test that a fixed raw download base is used as given."""
        catalog = CatalogSettings(branch="dev", raw_base_url="https://mirror.example.com/catalog")
        assert catalog.resolved_raw_base_url == "https://mirror.example.com/catalog"

    def test_empty_install_command_rejected(self) -> None:
        """Test that an empty override is rejected."""
        with pytest.raises(ValueError, match="empty"):
            LokioConfig(install_commands={"go": []})
