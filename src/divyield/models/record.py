"""Per-symbol analytics record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from divyield.models.bar import PricePoint
from divyield.models.dividend import DividendEvent
from divyield.models.frequency import PayFrequency

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class AnalyticsRecord:
    """Dividend analytics for one symbol, built fresh on every request.

    Attributes:
        symbol: Normalized ticker symbol.
        name: Display name with ETF/Fund/Trust suffixes removed.
        long_name: Cleaned full name.
        price: Spot price.
        day_change_pct: 1-day change, in percent.
        month_change_pct: Change across the short price window, in percent.
        fifty_day_change: Change versus the 50-day average, as a ratio.
        dividend_history: Dividend events, newest first.
        pay_frequency: Inferred cadence; None on error records.
        yield_rate: Resolved yield in percent (provider value unless zero).
        dividend_yield: Yield computed from the dividend stream, in percent.
        provider_yield_pct: Provider-reported yield, in percent.
        market_cap: Market capitalization in USD.
        total_net_assets: Fund net assets in USD.
        is_fund: Whether the security is an ETF or similar fund.
        recommendation: Analyst recommendation summary or "Unknown".
        price_history: Closing prices across the short window, oldest first.
        insight: Generated commentary.
        source: Data source label ("error" on failure records).
        fetched_at: When the record was built.
        error: Whether resolution failed.
        error_message: Failure description.
    """

    symbol: str
    name: str
    long_name: str | None = None
    price: float = 0.0
    day_change_pct: float | None = None
    month_change_pct: float = 0.0
    fifty_day_change: float | None = None
    dividend_history: tuple[DividendEvent, ...] = ()
    pay_frequency: PayFrequency | None = None
    yield_rate: float = 0.0
    dividend_yield: float = 0.0
    provider_yield_pct: float | None = None
    market_cap: float | None = None
    total_net_assets: float | None = None
    is_fund: bool = False
    recommendation: str = UNKNOWN
    price_history: tuple[PricePoint, ...] = ()
    insight: str = ""
    source: str = "yahoo"
    fetched_at: datetime | None = None
    error: bool = False
    error_message: str | None = None

    @classmethod
    def failed(cls, symbol: str, message: str) -> AnalyticsRecord:
        """Error-flagged record for a symbol that could not be resolved."""
        return cls(
            symbol=symbol,
            name=symbol,
            source="error",
            fetched_at=datetime.now(timezone.utc),
            error=True,
            error_message=message,
        )

    @property
    def frequency_label(self) -> str:
        return self.pay_frequency.value if self.pay_frequency else UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view using the public payload's camelCase keys."""
        data: dict[str, Any] = {
            "symbol": self.symbol,
            "name": self.name,
            "longName": self.long_name,
            "regularMarketPrice": self.price,
            "dayChange": self.day_change_pct,
            "monthChange": self.month_change_pct,
            "fiftyDayAverageChangePercent": self.fifty_day_change,
            "dividendHistory": [e.to_dict() for e in self.dividend_history],
            "payFrequency": self.frequency_label,
            "yieldRate": self.yield_rate,
            "dividendYield": self.dividend_yield,
            "providerYield": self.provider_yield_pct,
            "marketCap": self.market_cap,
            "totalNetAssets": self.total_net_assets,
            "isEtf": self.is_fund,
            "recommendationKey": self.recommendation,
            "priceHistory": [p.to_dict() for p in self.price_history],
            "opinion": self.insight,
            "source": self.source,
            "fetchDate": self.fetched_at.isoformat() if self.fetched_at else None,
        }
        if self.error:
            data["error"] = True
            data["errorMessage"] = self.error_message
        return data
