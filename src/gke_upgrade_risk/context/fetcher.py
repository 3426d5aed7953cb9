"""Document fetcher for raw release notes and changelogs.

The extractors never touch the network. This module retrieves the raw
documents they work on: the GKE release notes HTML page and the
Kubernetes changelog Markdown files on GitHub.

Design notes:
- Uses httpx for async HTTP requests
- Retries transient failures with tenacity before giving up
- Uses a Protocol so tools and tests can swap in the mock fetcher
"""

from __future__ import annotations

from typing import Protocol

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from gke_upgrade_risk import __version__


def is_transient_error(exc: BaseException) -> bool:
    """Connection problems and 5xx responses are worth retrying, 4xx are not."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class DocumentFetcherProtocol(Protocol):
    """Protocol for anything that can return the text behind a URL."""

    async def fetch_text(self, url: str) -> str:
        """Fetch a document.

        Args:
            url: Absolute URL of the document

        Returns:
            The decoded response body
        """
        ...


# ---------------------------------------------------------------------------
# HTTP Implementation
# ---------------------------------------------------------------------------


class HttpDocumentFetcher:
    """Fetches documents over HTTP(S) with httpx.

    Usage:
        fetcher = HttpDocumentFetcher(timeout=10.0)
        html = await fetcher.fetch_text("https://example.com/notes")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._timeout = timeout
        self._transport = transport
        self._headers: dict[str, str] = {
            "User-Agent": f"gke-upgrade-risk/{__version__}",
        }

    @retry(
        retry=retry_if_exception(is_transient_error),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def fetch_text(self, url: str) -> str:
        """Fetch a document and return its body as text.

        Raises:
            httpx.HTTPError: On a non-2xx response, or a transport error
                that persists after retries
        """
        async with httpx.AsyncClient(
            headers=self._headers,
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.text


# ---------------------------------------------------------------------------
# Mock Implementation (for testing)
# ---------------------------------------------------------------------------


class MockDocumentFetcher:
    """Mock fetcher that serves predefined documents.

    Usage:
        fetcher = MockDocumentFetcher({"https://example.com/a": "<html>..."})
    """

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self._documents = documents or {}
        self.requested: list[str] = []

    async def fetch_text(self, url: str) -> str:
        """Return the canned document for a URL.

        Raises:
            KeyError: If no document is registered for the URL
        """
        self.requested.append(url)
        return self._documents[url]
