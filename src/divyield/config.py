"""Analytics configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class QuoteProviderType(Enum):
    """Supported quote provider backends."""

    YAHOO = "yahoo"
    MOCK = "mock"


DEFAULT_SYMBOLS: tuple[str, ...] = (
    "PIN", "AIPI", "BMAX", "JEPQ", "ENB",
    "IIPR", "NLY", "WES", "VZ", "ARCC",
    "ED", "MO", "EPD", "SDIV", "DIV",
    "MPLX", "KMI", "CONY", "MSTY", "BGT",
)

DEFAULT_NET_ASSETS_VIEWS: tuple[str, ...] = ("profile", "holdings", "performance", "risk")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


@dataclass
class AnalyticsConfig:
    """Configuration for DividendAnalytics.

    Attributes:
        provider: Quote provider backend.
        history_years: Default dividend history window, in years.
        price_window_days: Short price-history window used for month change.
        recent_window_days: Trailing window used when annualizing dividends.
        request_timeout: Per-request HTTP timeout in seconds.
        fetch_timeout: Upper bound on any single outbound fetch, in seconds.
        quote_page_base_url: Base URL of the HTML quote pages scanned for net assets.
        net_assets_views: Secondary quote-page views tried after the main page.
        user_agent: User-Agent sent with HTTP requests.
        resolve_net_assets: Whether to run the net-assets fallback chain for funds.
        symbols: Default watchlist.
    """

    provider: QuoteProviderType = QuoteProviderType.YAHOO
    history_years: int = 2
    price_window_days: int = 14
    recent_window_days: int = 365
    request_timeout: float = 10.0
    fetch_timeout: float = 20.0
    quote_page_base_url: str = "https://finance.yahoo.com"
    net_assets_views: tuple[str, ...] = DEFAULT_NET_ASSETS_VIEWS
    user_agent: str = DEFAULT_USER_AGENT
    resolve_net_assets: bool = True
    symbols: list[str] = field(default_factory=lambda: list(DEFAULT_SYMBOLS))
