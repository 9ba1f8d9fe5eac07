"""Tests for the per-thread session pool."""

import threading
from unittest.mock import MagicMock

import certifi
import requests

from divyield.documents import HttpDocumentFetcher
from divyield.http import SessionPool
from divyield.providers.yahoo import YahooProvider


def _session_in_thread(pool):
    box = []
    worker = threading.Thread(target=lambda: box.append(pool.get()))
    worker.start()
    worker.join()
    return box[0]


class TestSessionPool:
    def test_injected_session_shared(self):
        session = MagicMock()
        pool = SessionPool({"User-Agent": "test-agent"}, session)
        assert pool.get() is session
        assert _session_in_thread(pool) is session
        session.headers.update.assert_called_once_with({"User-Agent": "test-agent"})
        assert session.verify == certifi.where()

    def test_one_session_per_thread(self):
        pool = SessionPool({"User-Agent": "test-agent"})
        main = pool.get()
        other = _session_in_thread(pool)
        assert isinstance(main, requests.Session)
        assert pool.get() is main
        assert other is not main
        assert other.headers["User-Agent"] == "test-agent"
        assert other.verify == certifi.where()

    def test_cookie_jar_shared_across_threads(self):
        pool = SessionPool({})
        main = pool.get()
        other = _session_in_thread(pool)
        assert main.cookies is pool.cookies
        assert other.cookies is pool.cookies
        main.cookies.set("A3", "token", domain=".yahoo.com")
        assert other.cookies.get("A3", domain=".yahoo.com") == "token"


class TestClientSessions:
    def test_yahoo_sessions_per_thread(self):
        provider = YahooProvider(user_agent="test-agent")
        assert provider.session is provider.session
        assert _session_in_thread(provider.sessions) is not provider.session
        assert provider.session.headers["User-Agent"] == "test-agent"

    def test_fetcher_sessions_per_thread(self):
        fetcher = HttpDocumentFetcher(user_agent="test-agent")
        assert fetcher.session is fetcher.session
        assert _session_in_thread(fetcher.sessions) is not fetcher.session
        assert fetcher.session.headers["User-Agent"] == "test-agent"
