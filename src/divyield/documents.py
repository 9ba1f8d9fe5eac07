"""HTML document fetchers used by the net-assets resolver."""

from __future__ import annotations

from abc import ABC, abstractmethod

import requests

from divyield.config import DEFAULT_USER_AGENT
from divyield.errors import DocumentFetchError, QuoteProviderErrorCode
from divyield.http import SessionPool

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml",
    "Accept-Language": "en-US,en;q=0.9",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
}


class BaseDocumentFetcher(ABC):
    """Retrieve raw HTML text for a URL."""

    @abstractmethod
    def get(self, url: str) -> str:
        """Return the document body.

        Raises:
            DocumentFetchError: On transport failure or a non-2xx status.
        """
        ...


class HttpDocumentFetcher(BaseDocumentFetcher):
    """Fetch documents over HTTP with browser-like headers."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.sessions = SessionPool({**BROWSER_HEADERS, "User-Agent": user_agent}, session)

    @property
    def session(self) -> requests.Session:
        return self.sessions.get()

    def get(self, url: str) -> str:
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise DocumentFetchError(
                f"Timed out fetching {url}",
                code=QuoteProviderErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.RequestException as exc:
            raise DocumentFetchError(f"Failed to fetch {url}: {exc}", retryable=True) from exc
        if not resp.ok:
            raise DocumentFetchError(
                f"Fetching {url} returned HTTP {resp.status_code}",
                code=(
                    QuoteProviderErrorCode.NOT_FOUND
                    if resp.status_code == 404
                    else QuoteProviderErrorCode.PROVIDER_ERROR
                ),
            )
        return resp.text


class StaticDocumentFetcher(BaseDocumentFetcher):
    """In-memory fetcher mapping URLs to HTML, for testing and CI.

    Unknown URLs raise ``DocumentFetchError``. Every requested URL is
    recorded in ``requested``.
    """

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self.documents: dict[str, str] = dict(documents or {})
        self.requested: list[str] = []

    def get(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.documents:
            raise DocumentFetchError(
                f"No document for {url}",
                code=QuoteProviderErrorCode.NOT_FOUND,
            )
        return self.documents[url]
