"""Blocking HTTP fetcher for remote template sources."""

import logging
from typing import Any

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from gitforge.core.config import GitforgeConfig
from gitforge.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class Fetcher:
    """Thin synchronous GET client with a fixed timeout.

    Connection failures and timeouts are retried with exponential backoff;
    HTTP error statuses are not.
    """

    def __init__(
        self,
        config: GitforgeConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize fetcher.

        Args:
            config: Runtime configuration (timeout, user agent, retries)
            transport: Optional httpx transport, mainly for tests
        """
        self.config = config or GitforgeConfig()
        self.client = httpx.Client(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def fetch_content(self, url: str) -> str:
        """Fetch raw text content from a URL.

        Raises:
            FetchError: On transport failure or a non-success status
        """
        response = self._get(url)
        return response.text

    def fetch_json(self, url: str) -> Any:
        """Fetch and parse JSON from a URL.

        Raises:
            FetchError: On transport failure, non-success status or invalid JSON
        """
        response = self._get(url)
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Failed to parse JSON from {url}: {e}", url=url) from e

    def _get(self, url: str) -> httpx.Response:
        logger.debug(f"GET {url}")
        retrying = Retrying(
            stop=stop_after_attempt(max(1, self.config.max_retries)),
            wait=wait_exponential(multiplier=self.config.retry_delay, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    response = self.client.get(url)
        except httpx.TransportError as e:
            raise FetchError(f"Failed to fetch from {url}: {e}", url=url) from e

        if not response.is_success:
            raise FetchError(
                f"Request failed with status {response.status_code} {response.reason_phrase}: {url}",
                url=url,
                status_code=response.status_code,
            )
        return response

    def close(self) -> None:
        """Close HTTP client."""
        self.client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
