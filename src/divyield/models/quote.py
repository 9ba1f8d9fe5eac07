"""Spot quote data model."""

from __future__ import annotations

from dataclasses import dataclass

FUND_QUOTE_TYPES = frozenset({"ETF", "MUTUALFUND"})
FUND_NAME_MARKERS = ("ETF", "Fund")


@dataclass(frozen=True)
class SpotQuote:
    """Current price and headline quote fields for a symbol.

    Attributes:
        symbol: Ticker symbol.
        price: Regular-market price.
        day_change_pct: 1-day change, in percent.
        market_cap: Market capitalization in USD (absent for most funds).
        quote_type: Provider security type (EQUITY, ETF, MUTUALFUND, ...).
        short_name: Short display name.
        long_name: Full legal name.
        fifty_day_change: Change versus the 50-day average, as a ratio.
    """

    symbol: str
    price: float
    day_change_pct: float | None = None
    market_cap: float | None = None
    quote_type: str | None = None
    short_name: str | None = None
    long_name: str | None = None
    fifty_day_change: float | None = None

    @property
    def is_fund(self) -> bool:
        """True for ETFs and similar pooled vehicles.

        Some ETFs are typed as EQUITY upstream, so names carrying "ETF" or
        "Fund" also count.
        """
        if (self.quote_type or "").upper() in FUND_QUOTE_TYPES:
            return True
        for name in (self.short_name, self.long_name):
            if name and any(marker in name for marker in FUND_NAME_MARKERS):
                return True
        return False
