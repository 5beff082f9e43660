"""lokio: Structuring code, one command at a time.

This package provisions new projects from a remote template catalog: it
fetches a template subtree, promotes it to the project root, writes the
per-project ``.lokio.yaml`` and runs language-specific post-processing.
"""

__version__ = "0.1.0"
__author__ = "lokio contributors"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
