"""Raw file client for the remote template catalog."""

import logging
import os
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class CatalogAPIError(Exception):
    """Raised when a catalog request fails."""

    pass


class CatalogFileNotFoundError(CatalogAPIError):
    """Raised when the requested file does not exist in the catalog."""

    pass


class CatalogClient:
    """Fetches raw files from the template catalog.

    Every call goes to the network; responses are not cached between runs.

    Attributes:
        session: requests session
        token: Optional access token for private catalogs
        raw_base_url: Base URL that file paths are appended to
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        raw_base_url: str,
        timeout: int = 30,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize catalog client.

        Args:
            raw_base_url: Base URL for raw downloads
                (e.g., "https://raw.githubusercontent.com/any-source/examples/main")
            timeout: Request timeout in seconds
            token: Access token. If None, reads LOKIO_GITHUB_TOKEN, then GITHUB_TOKEN.
                   Without a token requests are unauthenticated.
            session: Session to use (a new one is created if omitted)
        """
        self.raw_base_url = raw_base_url.rstrip("/")
        self.timeout = timeout
        self.token = token or os.getenv("LOKIO_GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN")

        self.session = session or requests.Session()
        if self.token:
            self.session.headers.update({"Authorization": f"token {self.token}"})

    def url_for(self, path: str) -> str:
        """Return the absolute URL of a catalog file."""
        return f"{self.raw_base_url}/{path.lstrip('/')}"

    def fetch_raw(self, path: str) -> str:
        """Download a file from the catalog as UTF-8 text.

        Args:
            path: File path relative to the catalog root

        Returns:
            File content

        Raises:
            CatalogFileNotFoundError: If the catalog answers 404
            CatalogAPIError: On any other HTTP or transport failure
        """
        url = self.url_for(path)
        logger.debug(f"Fetching {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise CatalogAPIError(f"Request for {url} failed: {e}") from e

        if response.status_code == 404:
            raise CatalogFileNotFoundError(f"{path} not found in catalog")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise CatalogAPIError(f"Request for {url} failed: {e}") from e

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CatalogAPIError(f"{path} is not valid UTF-8: {e}") from e
