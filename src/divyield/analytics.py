"""DividendAnalytics: per-symbol orchestrator over provider, history and resolvers."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Any, TypeVar

from divyield.config import AnalyticsConfig, QuoteProviderType
from divyield.documents import BaseDocumentFetcher, HttpDocumentFetcher
from divyield.errors import QuoteProviderError, QuoteProviderErrorCode
from divyield.fallback import call_with_timeout
from divyield.frequency import classify_frequency
from divyield.history import DividendHistoryResolver
from divyield.insight import generate_insight
from divyield.models.bar import Bar, PricePoint
from divyield.models.dividend import DividendEvent
from divyield.models.metadata import ExtendedMetadata
from divyield.models.quote import SpotQuote
from divyield.models.record import UNKNOWN, AnalyticsRecord
from divyield.net_assets import NetAssetsResolver
from divyield.providers import create_provider
from divyield.providers.base import BaseQuoteProvider
from divyield.yields import annualize_yield, resolve_yield

T = TypeVar("T")

ProgressCallback = Callable[[int, int, AnalyticsRecord], None]

_NAME_SUFFIXES = tuple(
    re.compile(rf"\s{suffix}$", re.IGNORECASE) for suffix in ("ETF", "Fund", "Trust")
)


def clean_security_name(name: str | None) -> str:
    """Strip trailing " ETF", " Fund" and " Trust" from a display name."""
    if not name:
        return ""
    for pattern in _NAME_SUFFIXES:
        name = pattern.sub("", name)
    return name.strip()


def month_change_pct(history: Sequence[PricePoint]) -> float:
    """Percent change from the oldest to the newest sample; 0 with < 2 samples."""
    if len(history) < 2:
        return 0.0
    oldest, latest = history[0].price, history[-1].price
    if not oldest:
        return 0.0
    return (latest - oldest) / oldest * 100


def price_history_from_bars(bars: Sequence[Bar]) -> tuple[PricePoint, ...]:
    points = [PricePoint(date=b.timestamp.date(), price=b.close) for b in bars]
    return tuple(sorted(points, key=lambda p: p.date))


class DividendAnalytics:
    """Central orchestrator: quote + metadata + bars + history -> record.

    Usage::

        from divyield import create_analytics_from_env
        analytics = create_analytics_from_env()
        record = asyncio.run(analytics.analyze("VZ"))

    Neither entry point raises for upstream failures: ``analyze`` returns an
    error-flagged record, ``dividend_history`` an empty list.
    """

    def __init__(
        self,
        config: AnalyticsConfig | None = None,
        provider: BaseQuoteProvider | None = None,
        fetcher: BaseDocumentFetcher | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or AnalyticsConfig()
        self.log = logger or logging.getLogger(__name__)

        if provider is None:
            kwargs: dict[str, Any] = {}
            if self.config.provider is QuoteProviderType.YAHOO:
                kwargs["timeout"] = self.config.request_timeout
                kwargs["user_agent"] = self.config.user_agent
            provider = create_provider(self.config.provider, **kwargs)
        self.provider = provider

        if fetcher is None and self.config.provider is QuoteProviderType.YAHOO:
            fetcher = HttpDocumentFetcher(
                timeout=self.config.request_timeout,
                user_agent=self.config.user_agent,
            )
        self.fetcher = fetcher

        self.history = DividendHistoryResolver(self.provider, self.config, self.log)
        self.net_assets = NetAssetsResolver(self.fetcher, self.provider, self.config, self.log)

    # ------------------------------------------------------------ history

    async def dividend_history(
        self,
        symbol: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DividendEvent]:
        """Dividend events for ``symbol``, newest first; empty on failure."""
        return await self.history.resolve(symbol, start, end)

    # ----------------------------------------------------------- analysis

    async def analyze(self, symbol: str) -> AnalyticsRecord | None:
        """Build the analytics record for one symbol.

        Returns None for an empty or non-string symbol, and an error-flagged
        record when the symbol cannot be resolved.
        """
        if not symbol or not isinstance(symbol, str) or not symbol.strip():
            self.log.warning("Invalid symbol provided to analyze: %r", symbol)
            return None
        key = symbol.strip().upper()

        started = time.monotonic()
        try:
            record = await self._analyze(key)
        except QuoteProviderError as exc:
            self.log.warning(
                "Error fetching data for %s [%s%s]: %s",
                key, exc.code.value, ", retryable" if exc.retryable else "", exc.message,
            )
            return AnalyticsRecord.failed(key, exc.message or "Failed to fetch stock data")
        except Exception as exc:
            message = str(exc) or "Failed to fetch stock data"
            self.log.warning("Error fetching data for %s: %s", key, message)
            return AnalyticsRecord.failed(key, message)
        self.log.debug(
            "Fetched data for %s in %.0fms", key, (time.monotonic() - started) * 1000,
        )
        return record

    async def analyze_many(
        self,
        symbols: Sequence[str],
        concurrent: bool = False,
        progress: ProgressCallback | None = None,
    ) -> list[AnalyticsRecord]:
        """Analyze each symbol, returning records in input order.

        Invalid (empty) symbols are skipped. A failing symbol yields an
        error-flagged record and never aborts the batch. ``progress`` is
        called as ``progress(done, total, record)`` after each symbol.
        """
        keys = [s.strip().upper() for s in symbols if isinstance(s, str) and s.strip()]
        total = len(keys)
        done = 0

        async def run(key: str) -> AnalyticsRecord:
            nonlocal done
            record = await self.analyze(key) or AnalyticsRecord.failed(key, "Invalid symbol")
            done += 1
            if progress is not None:
                progress(done, total, record)
            return record

        if concurrent:
            return list(await asyncio.gather(*(run(k) for k in keys)))
        return [await run(k) for k in keys]

    # ------------------------------------------------------------ internal

    async def _analyze(self, symbol: str) -> AnalyticsRecord:
        today = date.today()
        window_start = today - timedelta(days=self.config.price_window_days)

        quote, metadata, bars, history = await asyncio.gather(
            self._spot_quote(symbol),
            self._optional(self.provider.get_extended_metadata, symbol, default=ExtendedMetadata()),
            self._optional(self.provider.get_bars, symbol, window_start, today, default=[]),
            self.history.resolve(symbol),
        )

        price_history = price_history_from_bars(bars)
        frequency = classify_frequency(history)
        computed = annualize_yield(
            history, quote.price, frequency,
            as_of=today, window_days=self.config.recent_window_days,
        )

        total_net_assets: float | None = None
        if quote.is_fund:
            total_net_assets = metadata.total_assets
            if not total_net_assets and self.config.resolve_net_assets:
                total_net_assets = await self.net_assets.resolve(symbol)

        record = AnalyticsRecord(
            symbol=symbol,
            name=clean_security_name(quote.short_name or quote.long_name or symbol),
            long_name=clean_security_name(quote.long_name) if quote.long_name else None,
            price=quote.price or 0.0,
            day_change_pct=quote.day_change_pct,
            month_change_pct=month_change_pct(price_history),
            fifty_day_change=quote.fifty_day_change,
            dividend_history=tuple(history),
            pay_frequency=frequency,
            yield_rate=resolve_yield(metadata.provider_yield_pct, computed),
            dividend_yield=computed,
            provider_yield_pct=metadata.provider_yield_pct,
            market_cap=quote.market_cap,
            total_net_assets=total_net_assets,
            is_fund=quote.is_fund,
            recommendation=(
                metadata.recommendation.summary if metadata.recommendation else UNKNOWN
            ),
            price_history=price_history,
            fetched_at=datetime.now(timezone.utc),
        )
        return replace(record, insight=generate_insight(record))

    async def _spot_quote(self, symbol: str) -> SpotQuote:
        try:
            return await call_with_timeout(
                self.provider.get_spot_quote, symbol, timeout=self.config.fetch_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise QuoteProviderError(
                f"Timed out fetching quote for {symbol}",
                code=QuoteProviderErrorCode.TIMEOUT,
                retryable=True,
            ) from exc

    async def _optional(self, func: Callable[..., T], *args: Any, default: T) -> T:
        """Best-effort fetch: any failure degrades to ``default``."""
        try:
            result = await call_with_timeout(func, *args, timeout=self.config.fetch_timeout)
        except Exception as exc:
            self.log.debug("%s(%s) failed: %s", getattr(func, "__name__", func), args[0], exc)
            return default
        return default if result is None else result
