"""Dividend history resolution with event-stream -> daily-bar fallback."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone

from divyield.config import AnalyticsConfig
from divyield.fallback import Strategy, call_with_timeout, first_success
from divyield.models.dividend import DividendEvent, RawDividend, newest_first
from divyield.providers.base import BaseQuoteProvider

# Raw numeric dates below this are day-counts rather than epoch seconds.
DAY_COUNT_LIMIT = 10_000_000
# Raw numeric dates above this are epoch milliseconds.
MILLISECONDS_FLOOR = 100_000_000_000
SECONDS_PER_DAY = 86_400


def normalize_event_date(raw: object) -> date | None:
    """Reduce a provider date token to a calendar day (UTC), or None."""
    if isinstance(raw, datetime):
        if raw.tzinfo is not None:
            raw = raw.astimezone(timezone.utc)
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw) or raw < 0:
            return None
        seconds = float(raw)
        if seconds < DAY_COUNT_LIMIT:
            seconds *= SECONDS_PER_DAY
        elif seconds > MILLISECONDS_FLOOR:
            seconds /= 1000
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def normalize_events(raw_events: list[RawDividend]) -> list[DividendEvent]:
    """Normalize raw events, dropping malformed or non-positive entries."""
    events: list[DividendEvent] = []
    for raw in raw_events:
        day = normalize_event_date(raw.date)
        if day is None:
            continue
        try:
            amount = float(raw.amount)  # type: ignore[arg-type]
            events.append(DividendEvent(ex_date=day, amount=amount))
        except (TypeError, ValueError):
            continue
    return newest_first(events)


def default_window(history_years: int, today: date | None = None) -> tuple[date, date]:
    """Trailing ``history_years`` window ending today."""
    end = today or date.today()
    try:
        start = end.replace(year=end.year - history_years)
    except ValueError:
        # Feb 29 in a non-leap target year.
        start = end.replace(year=end.year - history_years, day=28)
    return start, end


class DividendHistoryResolver:
    """Resolve a symbol's dividend events, newest first.

    Strategies, in order:
        1. ``events``: the provider's windowed dividend event stream.
        2. ``bars``: daily bars with dividends, keeping rows that paid one.

    A strategy is skipped when the provider does not advertise its
    capability (``dividends`` or ``bars``). ``resolve`` never raises; total
    failure yields an empty list.
    """

    def __init__(
        self,
        provider: BaseQuoteProvider,
        config: AnalyticsConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.provider = provider
        self.config = config or AnalyticsConfig()
        self.log = logger or logging.getLogger(__name__)

    def strategies(
        self, symbol: str, start: date, end: date,
    ) -> list[Strategy[list[DividendEvent]]]:
        """Query modes the provider advertises, in fallback order."""
        caps = self.provider.capabilities()
        chain: list[Strategy[list[DividendEvent]]] = []
        if "dividends" in caps:
            chain.append(Strategy("events", lambda: self._from_events(symbol, start, end)))
        if "bars" in caps:
            chain.append(Strategy("bars", lambda: self._from_bars(symbol, start, end)))
        return chain

    async def resolve(
        self,
        symbol: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DividendEvent]:
        if not symbol or not isinstance(symbol, str) or not symbol.strip():
            return []
        key = symbol.strip().upper()

        default_start, default_end = default_window(self.config.history_years, end)
        end = end or default_end
        start = start or default_start

        try:
            events = await first_success(
                self.strategies(key, start, end),
                label=f"dividend history {key}",
                log=self.log,
            )
        except Exception as exc:
            self.log.warning("Error fetching dividend history for %s: %s", key, exc)
            return []
        return events if events is not None else []

    async def _from_events(self, symbol: str, start: date, end: date) -> list[DividendEvent] | None:
        raw = await call_with_timeout(
            self.provider.get_dividend_events, symbol, start, end,
            timeout=self.config.fetch_timeout,
        )
        if raw is None:
            return None
        return normalize_events(raw)

    async def _from_bars(self, symbol: str, start: date, end: date) -> list[DividendEvent] | None:
        bars = await call_with_timeout(
            self.provider.get_bars, symbol, start, end,
            with_dividends=True,
            timeout=self.config.fetch_timeout,
        )
        raw = [
            RawDividend(date=b.timestamp, amount=b.dividend)
            for b in bars
            if b.dividend is not None and b.dividend > 0
        ]
        return normalize_events(raw)
