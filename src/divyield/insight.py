"""Templated commentary derived from an analytics record."""

from __future__ import annotations

from divyield.models.record import UNKNOWN, AnalyticsRecord

NO_RECOMMENDATION = frozenset({"", UNKNOWN, "No recommendations available"})


def yield_fragment(yield_rate: float) -> str:
    if yield_rate > 8:
        return f"High yield of {yield_rate:.2f}% may indicate elevated risk or potential dividend cut."
    if yield_rate > 5:
        return f"Above-average yield of {yield_rate:.2f}% offers attractive income potential."
    if yield_rate > 3:
        return f"Moderate yield of {yield_rate:.2f}% provides reasonable income."
    if yield_rate > 0:
        return f"Low yield of {yield_rate:.2f}% suggests focus on growth rather than income."
    return "This security currently pays no dividend."


def momentum_fragment(fifty_day_change: float | None) -> str | None:
    """Commentary on the change versus the 50-day average (a ratio)."""
    if not fifty_day_change:
        return None
    change = fifty_day_change * 100
    magnitude = f"{abs(change):.2f}"
    if change > 8:
        return f"Good positive momentum with {magnitude}% gain compared to 50-day average."
    if change > 2:
        return f"Slight positive momentum with {magnitude}% gain compared to 50-day average."
    if change < -8:
        return f"Strong negative momentum with {magnitude}% loss compared to 50-day average."
    if change < -5:
        return f"Concerning negative momentum with {magnitude}% loss compared to 50-day average."
    if change < -2:
        return f"Slight negative momentum with {magnitude}% loss compared to 50-day average."
    return None


def size_fragment(market_cap: float | None, total_net_assets: float | None) -> str | None:
    """Size bucket; market cap wins over fund net assets."""
    if market_cap:
        if market_cap > 200_000_000_000:
            return "This is a mega-cap stock with significant market presence."
        if market_cap > 10_000_000_000:
            return "This is a large-cap stock with established market position."
        if market_cap > 2_000_000_000:
            return "This is a mid-cap stock with growth potential."
        if market_cap > 300_000_000:
            return "This is a small-cap stock that may offer growth opportunities but with higher volatility."
        return "This is a micro-cap stock with higher risk and potentially higher reward."
    if total_net_assets:
        if total_net_assets > 10_000_000_000:
            return "This is a large ETF with substantial assets under management."
        if total_net_assets > 1_000_000_000:
            return "This is a mid-size ETF with reasonable liquidity."
        if total_net_assets > 100_000_000:
            return "This is a smaller ETF that may have less liquidity."
        return "This is a very small ETF which may have liquidity concerns."
    return None


def generate_insight(record: AnalyticsRecord) -> str:
    """Join yield, momentum, size and recommendation commentary in that order."""
    fragments = [
        yield_fragment(record.yield_rate),
        momentum_fragment(record.fifty_day_change),
        size_fragment(record.market_cap, record.total_net_assets),
    ]
    if record.recommendation not in NO_RECOMMENDATION:
        fragments.append(record.recommendation)
    return " ".join(f for f in fragments if f)
