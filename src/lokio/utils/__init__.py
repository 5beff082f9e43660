"""Utility functions and classes for lokio."""

from lokio.utils.catalog_client import (
    CatalogAPIError,
    CatalogClient,
    CatalogFileNotFoundError,
)

__all__ = ["CatalogClient", "CatalogAPIError", "CatalogFileNotFoundError"]
