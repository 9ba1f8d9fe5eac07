"""Yahoo Finance quote provider.

Talks to the public JSON endpoints directly with ``requests``:

- ``/v7/finance/quote`` for spot quotes,
- ``/v10/finance/quoteSummary`` for recommendation, yield and fund data,
- ``/v8/finance/chart`` in two query modes: a dated window with
  ``events=div`` for the dividend event stream, and a ``range`` query on the
  secondary host for daily bars.

The quote and quoteSummary endpoints require a session cookie plus a
"crumb" token, fetched once per provider and refreshed on 401. Each worker
thread uses its own session over a shared cookie jar.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

import requests

from divyield.config import DEFAULT_USER_AGENT
from divyield.errors import QuoteProviderError, QuoteProviderErrorCode
from divyield.http import SessionPool
from divyield.models.bar import Bar
from divyield.models.dividend import RawDividend
from divyield.models.metadata import ExtendedMetadata, FundProfile, RecommendationTrend
from divyield.models.quote import SpotQuote
from divyield.providers.base import BaseQuoteProvider

logger = logging.getLogger(__name__)

SUMMARY_MODULES = ("recommendationTrend", "summaryDetail", "defaultKeyStatistics")

# Chart ``range`` values and the days each one covers, smallest first.
CHART_RANGES = (
    ("5d", 5),
    ("1mo", 31),
    ("3mo", 92),
    ("6mo", 183),
    ("1y", 366),
    ("2y", 731),
    ("5y", 1827),
    ("10y", 3653),
)


class YahooProvider(BaseQuoteProvider):
    """Fetch quotes, metadata, bars and dividends from Yahoo Finance.

    Capabilities: quotes, metadata, fund_profile, bars, dividends.
    """

    query1_url = "https://query1.finance.yahoo.com"
    query2_url = "https://query2.finance.yahoo.com"
    cookie_url = "https://fc.yahoo.com"

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.sessions = SessionPool({"User-Agent": user_agent}, session)
        self._crumb: str | None = None
        self._crumb_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """The calling thread's session; all of them share one cookie jar."""
        return self.sessions.get()

    def capabilities(self) -> set[str]:
        return {"quotes", "metadata", "fund_profile", "bars", "dividends"}

    # --------------------------------------------------------------- quotes

    def get_spot_quote(self, symbol: str) -> SpotQuote:
        key = symbol.upper()
        data = self._get_json(
            f"{self.query1_url}/v7/finance/quote",
            {"symbols": key},
            needs_crumb=True,
        )
        results = (data.get("quoteResponse") or {}).get("result") or []
        if not results:
            raise QuoteProviderError(
                f"Quote not found for symbol: {key}",
                code=QuoteProviderErrorCode.NOT_FOUND,
            )
        r = results[0]
        price = _float_or_none(r.get("regularMarketPrice"))
        if price is None:
            raise QuoteProviderError(
                f"No price data for symbol: {key}",
                code=QuoteProviderErrorCode.NO_DATA,
            )
        return SpotQuote(
            symbol=key,
            price=price,
            day_change_pct=_float_or_none(r.get("regularMarketChangePercent")),
            market_cap=_float_or_none(r.get("marketCap")),
            quote_type=r.get("quoteType"),
            short_name=r.get("shortName"),
            long_name=r.get("longName"),
            fifty_day_change=_float_or_none(r.get("fiftyDayAverageChangePercent")),
        )

    # ------------------------------------------------------- reference data

    def get_extended_metadata(self, symbol: str) -> ExtendedMetadata:
        result = self._quote_summary(symbol, SUMMARY_MODULES)

        recommendation = None
        trend = (result.get("recommendationTrend") or {}).get("trend") or []
        if trend:
            t = trend[0]
            recommendation = RecommendationTrend(
                strong_buy=int(t.get("strongBuy") or 0),
                buy=int(t.get("buy") or 0),
                hold=int(t.get("hold") or 0),
                sell=int(t.get("sell") or 0),
                strong_sell=int(t.get("strongSell") or 0),
            )

        dividend_yield = _raw((result.get("summaryDetail") or {}).get("dividendYield"))
        total_assets = _raw((result.get("defaultKeyStatistics") or {}).get("totalAssets"))
        return ExtendedMetadata(
            recommendation=recommendation,
            provider_yield_pct=dividend_yield * 100 if dividend_yield is not None else None,
            total_assets=total_assets,
        )

    def get_fund_profile(self, symbol: str) -> FundProfile | None:
        result = self._quote_summary(symbol, ("fundProfile",))
        profile = result.get("fundProfile")
        if not profile:
            return None
        fees = profile.get("feesExpensesInvestment") or {}
        return FundProfile(total_net_assets=_raw(fees.get("totalNetAssets")))

    # ----------------------------------------------------------- historical

    def get_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        with_dividends: bool = False,
    ) -> list[Bar]:
        # Range-based history query on the secondary host; rows outside
        # [start, end] are dropped below.
        params: dict[str, Any] = {
            "range": _chart_range(start),
            "interval": "1d",
            "includeAdjustedClose": "true",
        }
        if with_dividends:
            params["events"] = "div|split"
        result = self._chart(self.query2_url, symbol, params)

        dividends: dict[date, float] = {}
        if with_dividends:
            for ev in ((result.get("events") or {}).get("dividends") or {}).values():
                ts, amount = ev.get("date"), ev.get("amount")
                if isinstance(ts, (int, float)) and amount is not None:
                    day = datetime.fromtimestamp(ts, tz=timezone.utc).date()
                    dividends[day] = dividends.get(day, 0.0) + float(amount)

        timestamps = result.get("timestamp") or []
        quote = ((result.get("indicators") or {}).get("quote") or [{}])[0]
        bars: list[Bar] = []
        for i, ts in enumerate(timestamps):
            close = _at(quote.get("close"), i)
            if close is None:
                continue
            stamp = datetime.fromtimestamp(ts, tz=timezone.utc)
            if not start <= stamp.date() <= end:
                continue
            bars.append(Bar(
                timestamp=stamp,
                close=float(close),
                open=_at(quote.get("open"), i),
                high=_at(quote.get("high"), i),
                low=_at(quote.get("low"), i),
                volume=_at(quote.get("volume"), i),
                dividend=dividends.get(stamp.date()),
            ))
        return bars

    def get_dividend_events(
        self, symbol: str, start: date, end: date,
    ) -> list[RawDividend] | None:
        result = self._chart(self.query1_url, symbol, {
            "period1": _epoch(start),
            "period2": _epoch(end + timedelta(days=1)),
            "interval": "1d",
            "events": "div",
        })
        dividends = (result.get("events") or {}).get("dividends")
        if dividends is None:
            return None
        return [
            RawDividend(date=ev.get("date"), amount=ev.get("amount"))
            for ev in dividends.values()
        ]

    # ------------------------------------------------------------ internals

    def _chart(self, host: str, symbol: str, params: dict[str, Any]) -> dict[str, Any]:
        key = symbol.upper()
        data = self._get_json(f"{host}/v8/finance/chart/{key}", params)
        chart = data.get("chart") or {}
        results = chart.get("result") or []
        if not results:
            raise QuoteProviderError(
                f"No chart data for {key}: {chart.get('error')}",
                code=QuoteProviderErrorCode.NOT_FOUND,
            )
        return results[0]

    def _quote_summary(self, symbol: str, modules: tuple[str, ...]) -> dict[str, Any]:
        key = symbol.upper()
        data = self._get_json(
            f"{self.query2_url}/v10/finance/quoteSummary/{key}",
            {"modules": ",".join(modules)},
            needs_crumb=True,
        )
        summary = data.get("quoteSummary") or {}
        results = summary.get("result") or []
        if not results:
            raise QuoteProviderError(
                f"No quote summary for {key}: {summary.get('error')}",
                code=QuoteProviderErrorCode.NOT_FOUND,
            )
        return results[0]

    def _get_json(
        self,
        url: str,
        params: dict[str, Any],
        needs_crumb: bool = False,
    ) -> dict[str, Any]:
        try:
            resp = self._send(url, params, needs_crumb)
            if resp.status_code == 401 and needs_crumb:
                # Stale cookie/crumb pair; refresh once.
                self._reset_crumb()
                resp = self._send(url, params, needs_crumb)
            self._check_response(resp)
            return resp.json()
        except QuoteProviderError:
            raise
        except requests.Timeout as exc:
            raise QuoteProviderError(
                f"Yahoo request timed out: {url}",
                code=QuoteProviderErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except (requests.RequestException, ValueError) as exc:
            raise QuoteProviderError(
                f"Yahoo request failed: {exc}",
                code=QuoteProviderErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

    def _send(self, url: str, params: dict[str, Any], needs_crumb: bool) -> requests.Response:
        if needs_crumb:
            params = {**params, "crumb": self._get_crumb()}
        return self.session.get(url, params=params, timeout=self.timeout)

    def _get_crumb(self) -> str:
        with self._crumb_lock:
            if self._crumb is None:
                try:
                    # Only the Set-Cookie header matters; the page itself 404s.
                    self.session.get(self.cookie_url, timeout=self.timeout)
                except requests.RequestException as exc:
                    logger.debug("Yahoo cookie request failed: %s", exc)
                resp = self.session.get(
                    f"{self.query1_url}/v1/test/getcrumb", timeout=self.timeout,
                )
                self._check_response(resp)
                crumb = resp.text.strip()
                if not crumb or "<" in crumb:
                    raise QuoteProviderError(
                        "Yahoo crumb handshake failed",
                        code=QuoteProviderErrorCode.AUTH_FAILED,
                        retryable=True,
                    )
                self._crumb = crumb
            return self._crumb

    def _reset_crumb(self) -> None:
        with self._crumb_lock:
            self._crumb = None

    def _check_response(self, resp: Any) -> None:
        if resp.status_code == 429:
            raise QuoteProviderError(
                "Yahoo rate limited",
                code=QuoteProviderErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code in (401, 403):
            raise QuoteProviderError(
                "Yahoo authentication failed",
                code=QuoteProviderErrorCode.AUTH_FAILED,
            )
        if resp.status_code == 404:
            raise QuoteProviderError(
                "Symbol not found on Yahoo",
                code=QuoteProviderErrorCode.NOT_FOUND,
            )
        resp.raise_for_status()


def _chart_range(start: date, today: date | None = None) -> str:
    """Smallest chart ``range`` reaching back to ``start``."""
    days = ((today or date.today()) - start).days
    for label, span in CHART_RANGES:
        if days <= span:
            return label
    return "max"


def _epoch(day: date) -> int:
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp())


def _raw(value: Any) -> float | None:
    """Unwrap quoteSummary's ``{"raw": ..., "fmt": ...}`` number wrappers."""
    if isinstance(value, dict):
        value = value.get("raw")
    return _float_or_none(value)


def _float_or_none(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _at(values: list[Any] | None, i: int) -> float | None:
    if not values or i >= len(values):
        return None
    return _float_or_none(values[i])
