"""Unit tests for the template acquirer (git calls mocked)."""

import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from lokio.config import CatalogSettings
from lokio.errors import AcquisitionError, TemplateNotFoundError
from lokio.provision import acquire_template
from lokio.provision.acquirer import template_subpath


def fake_git(template_files: dict[str, str]):
    """Build a subprocess.run replacement that simulates clone + sparse checkout.

    ``template_files`` maps catalog paths to contents; the clone step writes
    .git and a top-level README, the sparse-checkout step keeps only paths
    under the requested pattern.
    """
    calls: list[list[str]] = []

    def run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls.append(cmd)
        if cmd[1] == "clone":
            dest = Path(cmd[-1])
            (dest / ".git").mkdir()
            (dest / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
            (dest / "README.md").write_text("catalog readme\n")
        elif "ls-tree" in cmd:
            subtree = cmd[-1]
            if any(rel.startswith(subtree + "/") for rel in template_files):
                return subprocess.CompletedProcess(cmd, 0, stdout=subtree + "\n", stderr="")
        elif "sparse-checkout" in cmd:
            dest = Path(cmd[2])
            pattern = cmd[-1].strip("/")
            (dest / "README.md").unlink()
            for rel, content in template_files.items():
                if rel.startswith(pattern + "/"):
                    path = dest / rel
                    path.parent.mkdir(parents=True, exist_ok=True)
                    path.write_text(content)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    run.calls = calls  # type: ignore[attr-defined]
    return run


@pytest.mark.unit
class TestAcquireTemplate:
    """Tests for acquire_template function."""

    def test_template_subpath(self) -> None:
        """Templates live under the catalog prefix."""
        assert template_subpath("basic-ts") == Path("code") / "basic-ts"
        assert template_subpath("basic-ts", "templates") == Path("templates") / "basic-ts"

    def test_shallow_sparse_clone(self, tmp_path: Path) -> None:
        """Clone should be depth-limited, blob-filtered and restricted to the subtree."""
        run = fake_git({"code/basic-ts/package.json": "{}"})
        catalog = CatalogSettings(repo_url="https://example.com/catalog.git", branch="main")

        with patch("lokio.provision.acquirer.subprocess.run", side_effect=run):
            template_dir = acquire_template("basic-ts", tmp_path, catalog)

        assert template_dir == tmp_path / "code" / "basic-ts"
        assert (template_dir / "package.json").exists()

        clone_cmd, listing_cmd, sparse_cmd = run.calls
        assert clone_cmd[:2] == ["git", "clone"]
        assert "--depth" in clone_cmd and clone_cmd[clone_cmd.index("--depth") + 1] == "1"
        assert "--sparse" in clone_cmd
        assert "--filter=blob:none" in clone_cmd
        assert clone_cmd[clone_cmd.index("--branch") + 1] == "main"
        assert clone_cmd[-2:] == ["https://example.com/catalog.git", str(tmp_path)]
        assert listing_cmd[-2:] == ["HEAD", "code/basic-ts"]
        assert sparse_cmd == [
            "git",
            "-C",
            str(tmp_path),
            "sparse-checkout",
            "set",
            "--no-cone",
            "/code/basic-ts/",
        ]

    def test_only_requested_subtree(self, tmp_path: Path) -> None:
        """Other templates must not be checked out."""
        run = fake_git(
            {
                "code/basic-ts/index.ts": "",
                "code/basic-go/main.go": "",
            }
        )

        with patch("lokio.provision.acquirer.subprocess.run", side_effect=run):
            acquire_template("basic-ts", tmp_path)

        assert not (tmp_path / "code" / "basic-go").exists()
        assert not (tmp_path / "README.md").exists()

    def test_template_not_found(self, tmp_path: Path) -> None:
        """A missing subtree should raise TemplateNotFoundError and undo the clone."""
        run = fake_git({"code/basic-ts/index.ts": ""})

        with patch("lokio.provision.acquirer.subprocess.run", side_effect=run):
            with pytest.raises(TemplateNotFoundError) as exc_info:
                acquire_template("nonexistent", tmp_path)

        assert exc_info.value.template_id == "nonexistent"
        assert list(tmp_path.iterdir()) == []

    def test_not_found_keeps_preexisting_entries(self, tmp_path: Path) -> None:
        """Cleanup after a missing template only removes what the clone created."""
        run = fake_git({})
        (tmp_path / "notes.txt").write_text("mine")

        with patch("lokio.provision.acquirer.subprocess.run", side_effect=run):
            with pytest.raises(TemplateNotFoundError):
                acquire_template("nonexistent", tmp_path)

        assert [p.name for p in tmp_path.iterdir()] == ["notes.txt"]

    def test_clone_failure(self, tmp_path: Path) -> None:
        """A failing git command should raise AcquisitionError with stderr."""
        error = subprocess.CalledProcessError(
            128, ["git", "clone"], stderr="fatal: unable to access 'https://example.com/'\n"
        )

        with patch("lokio.provision.acquirer.subprocess.run", side_effect=error):
            with pytest.raises(AcquisitionError, match="unable to access") as exc_info:
                acquire_template("basic-ts", tmp_path)

        assert exc_info.value.cause is error
        assert exc_info.value.template_id == "basic-ts"

    def test_git_missing(self, tmp_path: Path) -> None:
        """A missing git executable should raise AcquisitionError."""
        with patch(
            "lokio.provision.acquirer.subprocess.run",
            side_effect=FileNotFoundError(2, "No such file or directory", "git"),
        ):
            with pytest.raises(AcquisitionError):
                acquire_template("basic-ts", tmp_path)

    def test_timeout(self, tmp_path: Path) -> None:
        """A git timeout should raise AcquisitionError."""
        catalog = CatalogSettings(git_timeout=5)

        with patch(
            "lokio.provision.acquirer.subprocess.run",
            side_effect=subprocess.TimeoutExpired(["git", "clone"], 5),
        ) as mock_run:
            with pytest.raises(AcquisitionError, match="timed out after 5s"):
                acquire_template("basic-ts", tmp_path, catalog)

        assert mock_run.call_args.kwargs["timeout"] == 5
