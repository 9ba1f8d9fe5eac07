"""Mock provider for testing and CI, no network access required."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from divyield.errors import QuoteProviderError, QuoteProviderErrorCode
from divyield.models.bar import Bar
from divyield.models.dividend import RawDividend
from divyield.models.metadata import ExtendedMetadata, FundProfile
from divyield.models.quote import SpotQuote
from divyield.providers.base import BaseQuoteProvider


class MockProvider(BaseQuoteProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_quote``, ``set_bars``, etc. to pre-load data, or leave
    defaults for synthetic data. Symbols registered with ``set_unknown``
    raise ``NOT_FOUND`` from every method.
    """

    def __init__(self) -> None:
        self._quotes: dict[str, SpotQuote] = {}
        self._metadata: dict[str, ExtendedMetadata] = {}
        self._fund_profiles: dict[str, FundProfile] = {}
        self._bars: dict[str, list[Bar]] = {}
        self._dividend_events: dict[str, list[RawDividend] | None] = {}
        self._unknown: set[str] = set()

    # --- Pre-load helpers ---

    def set_quote(self, symbol: str, quote: SpotQuote) -> None:
        self._quotes[symbol.upper()] = quote

    def set_metadata(self, symbol: str, metadata: ExtendedMetadata) -> None:
        self._metadata[symbol.upper()] = metadata

    def set_fund_profile(self, symbol: str, profile: FundProfile) -> None:
        self._fund_profiles[symbol.upper()] = profile

    def set_bars(self, symbol: str, bars: list[Bar]) -> None:
        self._bars[symbol.upper()] = bars

    def set_dividend_events(self, symbol: str, events: list[RawDividend] | None) -> None:
        """Pre-load the event stream; None simulates a missing dividend section."""
        self._dividend_events[symbol.upper()] = events

    def set_unknown(self, symbol: str) -> None:
        self._unknown.add(symbol.upper())

    # --- Provider implementation ---

    def get_spot_quote(self, symbol: str) -> SpotQuote:
        key = self._check(symbol)
        if key in self._quotes:
            return self._quotes[key]
        return SpotQuote(
            symbol=key,
            price=150.00,
            day_change_pct=0.0,
            quote_type="EQUITY",
            short_name=f"{key} Inc.",
        )

    def get_extended_metadata(self, symbol: str) -> ExtendedMetadata:
        key = self._check(symbol)
        return self._metadata.get(key, ExtendedMetadata())

    def get_fund_profile(self, symbol: str) -> FundProfile | None:
        key = self._check(symbol)
        return self._fund_profiles.get(key)

    def get_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        with_dividends: bool = False,
    ) -> list[Bar]:
        key = self._check(symbol)
        if key in self._bars:
            return [
                b for b in self._bars[key]
                if start <= b.timestamp.date() <= end
            ]
        return self._generate_bars(start, end)

    def get_dividend_events(
        self, symbol: str, start: date, end: date,
    ) -> list[RawDividend] | None:
        key = self._check(symbol)
        return self._dividend_events.get(key, [])

    def capabilities(self) -> set[str]:
        return {"quotes", "metadata", "fund_profile", "bars", "dividends"}

    # --- Internals ---

    def _check(self, symbol: str) -> str:
        key = symbol.upper()
        if key in self._unknown:
            raise QuoteProviderError(
                f"Quote not found for symbol: {key}",
                code=QuoteProviderErrorCode.NOT_FOUND,
            )
        return key

    @staticmethod
    def _generate_bars(start: date, end: date) -> list[Bar]:
        """Generate flat synthetic weekday bars for the date range."""
        bars: list[Bar] = []
        current = start
        while current <= end:
            if current.weekday() < 5:
                bars.append(Bar(
                    timestamp=datetime.combine(current, time(14, 30), tzinfo=timezone.utc),
                    open=150.0,
                    high=150.25,
                    low=149.85,
                    close=150.0,
                    volume=10000.0,
                ))
            current += timedelta(days=1)
        return bars
