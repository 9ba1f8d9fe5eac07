"""Extended quote metadata models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecommendationTrend:
    """Analyst recommendation counts for the current period."""

    strong_buy: int = 0
    buy: int = 0
    hold: int = 0
    sell: int = 0
    strong_sell: int = 0

    @property
    def summary(self) -> str:
        return (
            f"Strong Buy: {self.strong_buy}, Buy: {self.buy}, Hold: {self.hold}, "
            f"Sell: {self.sell}, Strong Sell: {self.strong_sell}"
        )


@dataclass(frozen=True)
class ExtendedMetadata:
    """Best-effort quote metadata; every field may be absent.

    Attributes:
        recommendation: Analyst recommendation trend.
        provider_yield_pct: Provider-reported dividend yield, in percent.
        total_assets: Fund total assets in USD.
    """

    recommendation: RecommendationTrend | None = None
    provider_yield_pct: float | None = None
    total_assets: float | None = None


@dataclass(frozen=True)
class FundProfile:
    """Structured fund profile.

    Attributes:
        total_net_assets: Total net assets as reported, in millions of USD.
    """

    total_net_assets: float | None = None
