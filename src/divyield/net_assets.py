"""Fund net-assets resolution from quote pages and the fund profile."""

from __future__ import annotations

import logging
import math
import re

from divyield.config import AnalyticsConfig
from divyield.documents import BaseDocumentFetcher
from divyield.fallback import Strategy, call_with_timeout, first_success
from divyield.providers.base import BaseQuoteProvider

UNIT_MULTIPLIERS = {
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
    "T": 1_000_000_000_000,
}

# Fund profiles report total net assets in millions.
FUND_PROFILE_SCALE = 1_000_000

_VALUE = r"([\d,.]+[KMBT]?)<"

NET_ASSETS_LABELS = (
    r"Net Assets\s*</span>",
    r"Total Net Assets",
    r"Fund Total Assets",
    r"AUM",
    r"Assets Under Management",
    r"Total Assets",
    r"Fund AUM",
    r"ETF Assets",
    r"Fund Size",
    r"Asset Value",
    r"Net Asset Value",
)

NET_ASSETS_PATTERNS = tuple(
    re.compile(label + r".*?>" + _VALUE, re.IGNORECASE)
    for label in NET_ASSETS_LABELS
)


def parse_scaled_number(token: str) -> float | None:
    """Parse ``"2.5B"``-style tokens; None for non-numeric or non-positive values."""
    value = token.strip().replace(",", "").upper()
    multiplier = 1
    if value and value[-1] in UNIT_MULTIPLIERS:
        multiplier = UNIT_MULTIPLIERS[value[-1]]
        value = value[:-1]
    try:
        number = float(value) * multiplier
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def extract_net_assets(html: str) -> float | None:
    """Scan an HTML document for a labelled net-assets figure."""
    if not html:
        return None
    for pattern in NET_ASSETS_PATTERNS:
        match = pattern.search(html)
        if match:
            value = parse_scaled_number(match.group(1))
            if value is not None:
                return value
    return None


class NetAssetsResolver:
    """Find a fund's total net assets when structured data lacks it.

    Strategies, in order, stopping at the first match:
        1. the main quote page,
        2. each secondary view (profile, holdings, performance, risk),
        3. the provider's fund profile, scaled from millions.

    Without a fetcher the quote pages are skipped, and the fund profile is
    skipped for providers without the ``fund_profile`` capability.
    ``resolve`` never raises; total failure yields None.
    """

    def __init__(
        self,
        fetcher: BaseDocumentFetcher | None,
        provider: BaseQuoteProvider | None = None,
        config: AnalyticsConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.provider = provider
        self.config = config or AnalyticsConfig()
        self.log = logger or logging.getLogger(__name__)

    def quote_page_urls(self, symbol: str) -> list[str]:
        base = f"{self.config.quote_page_base_url.rstrip('/')}/quote/{symbol}"
        return [base] + [f"{base}/{view}" for view in self.config.net_assets_views]

    def strategies(self, symbol: str) -> list[Strategy[float]]:
        urls = self.quote_page_urls(symbol) if self.fetcher is not None else []
        chain: list[Strategy[float]] = [
            Strategy(url, lambda url=url: self._from_document(url))
            for url in urls
        ]
        if self.provider is not None and "fund_profile" in self.provider.capabilities():
            chain.append(Strategy("fund profile", lambda: self._from_fund_profile(symbol)))
        return chain

    async def resolve(self, symbol: str) -> float | None:
        if not symbol or not isinstance(symbol, str) or not symbol.strip():
            return None
        key = symbol.strip().upper()
        try:
            value = await first_success(
                self.strategies(key), label=f"net assets {key}", log=self.log,
            )
        except Exception as exc:
            self.log.warning("Error resolving net assets for %s: %s", key, exc)
            return None
        if value is not None:
            self.log.debug("Found net assets for %s: %s", key, value)
        return value

    async def _from_document(self, url: str) -> float | None:
        html = await call_with_timeout(
            self.fetcher.get, url,  # type: ignore[union-attr]
            timeout=self.config.fetch_timeout,
        )
        return extract_net_assets(html)

    async def _from_fund_profile(self, symbol: str) -> float | None:
        profile = await call_with_timeout(
            self.provider.get_fund_profile, symbol,  # type: ignore[union-attr]
            timeout=self.config.fetch_timeout,
        )
        if profile is None or not profile.total_net_assets:
            return None
        if profile.total_net_assets <= 0:
            return None
        return profile.total_net_assets * FUND_PROFILE_SCALE
