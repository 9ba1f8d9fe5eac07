"""Tests for HTML document fetchers."""

from unittest.mock import MagicMock

import pytest
import requests

from divyield.documents import HttpDocumentFetcher, StaticDocumentFetcher
from divyield.errors import DocumentFetchError, QuoteProviderErrorCode


def _response(status_code=200, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.text = text
    return resp


class TestHttpDocumentFetcher:
    def test_returns_body(self):
        session = MagicMock()
        session.get.return_value = _response(text="<html>ok</html>")
        fetcher = HttpDocumentFetcher(timeout=3.0, session=session)
        assert fetcher.get("https://example.com/quote/SCHD") == "<html>ok</html>"
        session.get.assert_called_once_with("https://example.com/quote/SCHD", timeout=3.0)

    def test_sends_browser_headers(self):
        session = MagicMock()
        HttpDocumentFetcher(user_agent="test-agent", session=session)
        headers = session.headers.update.call_args[0][0]
        assert headers["User-Agent"] == "test-agent"
        assert "Accept" in headers

    def test_not_found(self):
        session = MagicMock()
        session.get.return_value = _response(status_code=404)
        fetcher = HttpDocumentFetcher(session=session)
        with pytest.raises(DocumentFetchError) as exc_info:
            fetcher.get("https://example.com/missing")
        assert exc_info.value.code == QuoteProviderErrorCode.NOT_FOUND

    def test_server_error(self):
        session = MagicMock()
        session.get.return_value = _response(status_code=503)
        fetcher = HttpDocumentFetcher(session=session)
        with pytest.raises(DocumentFetchError) as exc_info:
            fetcher.get("https://example.com/down")
        assert exc_info.value.code == QuoteProviderErrorCode.PROVIDER_ERROR

    def test_timeout(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("slow")
        fetcher = HttpDocumentFetcher(session=session)
        with pytest.raises(DocumentFetchError) as exc_info:
            fetcher.get("https://example.com/slow")
        assert exc_info.value.code == QuoteProviderErrorCode.TIMEOUT
        assert exc_info.value.retryable is True

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        fetcher = HttpDocumentFetcher(session=session)
        with pytest.raises(DocumentFetchError) as exc_info:
            fetcher.get("https://example.com/refused")
        assert exc_info.value.retryable is True


class TestStaticDocumentFetcher:
    def test_known_url(self):
        fetcher = StaticDocumentFetcher({"https://a": "<p>a</p>"})
        assert fetcher.get("https://a") == "<p>a</p>"
        assert fetcher.requested == ["https://a"]

    def test_unknown_url(self):
        fetcher = StaticDocumentFetcher()
        with pytest.raises(DocumentFetchError):
            fetcher.get("https://b")
        assert fetcher.requested == ["https://b"]
