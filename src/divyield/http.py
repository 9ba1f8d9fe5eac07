"""Per-thread ``requests`` sessions for the blocking HTTP clients.

Provider and fetcher calls run on asyncio worker threads, and
``requests.Session`` is not safe to share between threads. Each thread
gets its own session. All of them share one cookie jar, so cookies set
by a handshake on one thread are sent from every other.
"""

from __future__ import annotations

import threading

import certifi
import requests


class SessionPool:
    """Hand out one configured session per thread.

    An explicitly injected ``session`` (tests, custom transports) is
    configured once and returned to every thread as-is.
    """

    def __init__(
        self,
        headers: dict[str, str],
        session: requests.Session | None = None,
    ) -> None:
        self.headers = dict(headers)
        self.cookies = requests.cookies.RequestsCookieJar()
        self._shared = session
        self._local = threading.local()
        if session is not None:
            self._configure(session)

    def get(self) -> requests.Session:
        if self._shared is not None:
            return self._shared
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.cookies = self.cookies
            self._configure(session)
            self._local.session = session
        return session

    def _configure(self, session: requests.Session) -> None:
        session.headers.update(self.headers)
        session.verify = certifi.where()
