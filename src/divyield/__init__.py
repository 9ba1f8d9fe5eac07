"""divyield: dividend analytics for stocks and ETFs.

Resolves dividend history with provider fallback, infers payout cadence,
annualizes trailing dividends into a yield and summarizes the result as a
short textual insight.

Quick start::

    import asyncio
    from divyield import create_analytics_from_env
    analytics = create_analytics_from_env()
    record = asyncio.run(analytics.analyze("VZ"))
"""

from __future__ import annotations

import os

from divyield.analytics import DividendAnalytics, clean_security_name
from divyield.config import AnalyticsConfig, DEFAULT_SYMBOLS, QuoteProviderType
from divyield.documents import BaseDocumentFetcher, HttpDocumentFetcher, StaticDocumentFetcher
from divyield.errors import DocumentFetchError, QuoteProviderError, QuoteProviderErrorCode
from divyield.fallback import Strategy, first_success
from divyield.frequency import classify_frequency
from divyield.history import DividendHistoryResolver, normalize_event_date
from divyield.insight import generate_insight
from divyield.models.bar import Bar, PricePoint
from divyield.models.dividend import DividendEvent, RawDividend
from divyield.models.frequency import PayFrequency
from divyield.models.metadata import ExtendedMetadata, FundProfile, RecommendationTrend
from divyield.models.quote import SpotQuote
from divyield.models.record import AnalyticsRecord
from divyield.net_assets import NetAssetsResolver, extract_net_assets, parse_scaled_number
from divyield.yields import annualize_yield, resolve_yield

__version__ = "0.1.0"

__all__ = [
    # Orchestrator
    "DividendAnalytics",
    "create_analytics_from_env",
    "clean_security_name",
    # Components
    "DividendHistoryResolver",
    "NetAssetsResolver",
    "classify_frequency",
    "annualize_yield",
    "resolve_yield",
    "generate_insight",
    "normalize_event_date",
    "extract_net_assets",
    "parse_scaled_number",
    "Strategy",
    "first_success",
    # Config
    "AnalyticsConfig",
    "QuoteProviderType",
    "DEFAULT_SYMBOLS",
    # Documents
    "BaseDocumentFetcher",
    "HttpDocumentFetcher",
    "StaticDocumentFetcher",
    # Errors
    "QuoteProviderError",
    "QuoteProviderErrorCode",
    "DocumentFetchError",
    # Models
    "AnalyticsRecord",
    "Bar",
    "PricePoint",
    "DividendEvent",
    "RawDividend",
    "PayFrequency",
    "ExtendedMetadata",
    "FundProfile",
    "RecommendationTrend",
    "SpotQuote",
]


def create_analytics_from_env() -> DividendAnalytics:
    """Zero-config factory; reads settings from env vars.

    Environment variables:
        DIVYIELD_PROVIDER: Quote provider, "yahoo" or "mock" (default: "yahoo").
        DIVYIELD_HISTORY_YEARS: Default dividend history window (default: 2).
        DIVYIELD_PRICE_WINDOW_DAYS: Short price window for month change (default: 14).
        DIVYIELD_REQUEST_TIMEOUT: HTTP request timeout in seconds (default: 10).
        DIVYIELD_FETCH_TIMEOUT: Upper bound per outbound fetch in seconds (default: 20).
        DIVYIELD_SYMBOLS: Comma-separated default watchlist.
        DIVYIELD_NET_ASSETS: "0" disables the net-assets fallback chain (default: "1").
    """
    config = AnalyticsConfig(
        provider=QuoteProviderType(os.getenv("DIVYIELD_PROVIDER", "yahoo").strip().lower()),
        history_years=int(os.getenv("DIVYIELD_HISTORY_YEARS", "2")),
        price_window_days=int(os.getenv("DIVYIELD_PRICE_WINDOW_DAYS", "14")),
        request_timeout=float(os.getenv("DIVYIELD_REQUEST_TIMEOUT", "10")),
        fetch_timeout=float(os.getenv("DIVYIELD_FETCH_TIMEOUT", "20")),
        resolve_net_assets=os.getenv("DIVYIELD_NET_ASSETS", "1").strip() not in ("0", "false", "no"),
    )

    symbols = os.getenv("DIVYIELD_SYMBOLS")
    if symbols:
        config.symbols = [s.strip().upper() for s in symbols.split(",") if s.strip()]

    return DividendAnalytics(config)
