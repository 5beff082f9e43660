"""Sparse, shallow download of one template subtree from the catalog.

The catalog is a git repository holding one directory per template under a
common prefix (``code/<template>``). Only that directory is checked out, with
a single commit of history and blobs fetched on demand, so the cost of a
download does not grow with the size of the catalog.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from lokio.config import CatalogSettings
from lokio.errors import AcquisitionError, TemplateNotFoundError

logger = logging.getLogger(__name__)


def template_subpath(template_id: str, prefix: str = "code") -> Path:
    """Relative path of a template subtree inside the catalog."""
    return Path(prefix) / template_id


def _run_git(args: list[str], template_id: str, timeout: int) -> subprocess.CompletedProcess:
    """Run a git command, translating failures into AcquisitionError."""
    cmd = ["git"] + args
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        raise AcquisitionError(
            template_id, e, detail=(e.stderr or "").strip() or str(e)
        ) from e
    except subprocess.TimeoutExpired as e:
        raise AcquisitionError(template_id, e, detail=f"git timed out after {timeout}s") from e
    except OSError as e:
        # git executable missing or not runnable
        raise AcquisitionError(template_id, e) from e


def _remove_new_entries(destination_dir: Path, existing: set[str]) -> None:
    """Delete entries of ``destination_dir`` that are not in ``existing``."""
    for entry in destination_dir.iterdir():
        if entry.name in existing:
            continue
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as e:
            logger.warning(f"Could not remove {entry}: {e}")


def acquire_template(
    template_id: str,
    destination_dir: Path,
    catalog: Optional[CatalogSettings] = None,
) -> Path:
    """Check out ``<prefix>/<template_id>`` of the catalog into ``destination_dir``.

    Leaves a working copy (including ``.git``) under ``destination_dir``; the
    relocator promotes the subtree and removes the rest.

    Args:
        template_id: Catalog key of the template
        destination_dir: Existing, empty directory to clone into
        catalog: Catalog settings (defaults used if omitted)

    Returns:
        Path of the checked out template subtree

    Raises:
        TemplateNotFoundError: If the catalog has no such template
        AcquisitionError: If git fails for any other reason
    """
    catalog = catalog or CatalogSettings()
    subpath = template_subpath(template_id, catalog.template_prefix)
    existing = {entry.name for entry in destination_dir.iterdir()}

    logger.info(f"Downloading template {template_id} from {catalog.repo_url}")

    _run_git(
        [
            "clone",
            "--depth",
            "1",
            "--branch",
            catalog.branch,
            "--sparse",
            "--filter=blob:none",
            catalog.repo_url,
            str(destination_dir),
        ],
        template_id,
        catalog.git_timeout,
    )

    # Trees are part of a blob-filtered clone, so this needs no download
    listing = _run_git(
        ["-C", str(destination_dir), "ls-tree", "-d", "--name-only", "HEAD", subpath.as_posix()],
        template_id,
        catalog.git_timeout,
    )
    if not listing.stdout.strip():
        _remove_new_entries(destination_dir, existing)
        raise TemplateNotFoundError(template_id)

    # Non-cone pattern so top-level catalog files are not checked out
    _run_git(
        [
            "-C",
            str(destination_dir),
            "sparse-checkout",
            "set",
            "--no-cone",
            f"/{subpath.as_posix()}/",
        ],
        template_id,
        catalog.git_timeout,
    )

    template_dir = destination_dir / subpath
    if not template_dir.is_dir():
        _remove_new_entries(destination_dir, existing)
        raise TemplateNotFoundError(template_id)

    return template_dir
