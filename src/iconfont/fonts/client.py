"""
Font Service Client
===================

Single-shot HTTP GET access to the remote font service with a static
User-Agent. No retries: callers decide whether a failure is fatal.
"""

import logging

import requests

from iconfont.core.config import FetchConfig
from iconfont.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class FontServiceClient:
    """Fetches stylesheets and web font binaries."""

    def __init__(self, config: FetchConfig | None = None):
        self.config = config or FetchConfig()
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with the identifying header."""
        session = requests.Session()
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    def _get(self, url: str) -> requests.Response:
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise FetchError(url, status_code=status_code, reason=str(e)) from e
        except requests.RequestException as e:
            raise FetchError(url, reason=str(e)) from e
        return response

    def fetch_text(self, url: str) -> str:
        """
        Fetch a text resource decoded as UTF-8.

        Raises:
            FetchError: On a non-2xx response or network failure
        """
        return self._get(url).content.decode("utf-8", errors="replace")

    def fetch_binary(self, url: str) -> bytes:
        """
        Fetch a binary resource.

        Raises:
            FetchError: On a non-2xx response or network failure
        """
        return self._get(url).content

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "FontServiceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
