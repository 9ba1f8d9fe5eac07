"""Tests for fund net-assets parsing and resolution."""

import time

import pytest

from divyield.config import AnalyticsConfig, QuoteProviderType
from divyield.documents import StaticDocumentFetcher
from divyield.errors import QuoteProviderError
from divyield.models.metadata import FundProfile
from divyield.net_assets import NetAssetsResolver, extract_net_assets, parse_scaled_number
from divyield.providers.mock import MockProvider

BASE = "https://finance.yahoo.com/quote/SCHD"


class SlowFetcher(StaticDocumentFetcher):
    def get(self, url):
        time.sleep(0.3)
        return super().get(url)


class QuotesOnlyProvider(MockProvider):
    def capabilities(self):
        return {"quotes", "metadata"}


class TestParseScaledNumber:
    @pytest.mark.parametrize("token,expected", [
        ("2.5B", 2.5e9),
        ("750M", 7.5e8),
        ("1,234.5K", 1_234_500.0),
        ("3T", 3e12),
        ("12345", 12345.0),
        ("62.3b", 6.23e10),
    ])
    def test_valid(self, token, expected):
        assert parse_scaled_number(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["0", "0.0M", "abc", ".", "", "-5M"])
    def test_invalid(self, token):
        assert parse_scaled_number(token) is None


class TestExtractNetAssets:
    def test_total_net_assets_label(self):
        html = "<tr><td>Total Net Assets</td><td>2.5B</td></tr>"
        assert extract_net_assets(html) == pytest.approx(2.5e9)

    def test_span_label(self):
        html = '<span class="label">Net Assets</span><span class="value">750M</span>'
        assert extract_net_assets(html) == pytest.approx(7.5e8)

    def test_case_insensitive(self):
        html = "<div>aum</div><div>1.2B</div>"
        assert extract_net_assets(html) == pytest.approx(1.2e9)

    def test_absent(self):
        assert extract_net_assets("<html><body>Price 45.10</body></html>") is None

    def test_unparseable_value(self):
        assert extract_net_assets("<td>Total Net Assets</td><td>N/A</td>") is None

    def test_empty(self):
        assert extract_net_assets("") is None


class TestNetAssetsResolver:
    def test_quote_page_urls(self, mock_config):
        resolver = NetAssetsResolver(StaticDocumentFetcher(), config=mock_config)
        assert resolver.quote_page_urls("SCHD") == [
            BASE,
            f"{BASE}/profile",
            f"{BASE}/holdings",
            f"{BASE}/performance",
            f"{BASE}/risk",
        ]

    @pytest.mark.asyncio
    async def test_main_page(self, mock_config):
        fetcher = StaticDocumentFetcher({BASE: "<td>Net Assets</span><b>62.3B</b>"})
        resolver = NetAssetsResolver(fetcher, config=mock_config)
        assert await resolver.resolve("schd") == pytest.approx(6.23e10)
        assert fetcher.requested == [BASE]

    @pytest.mark.asyncio
    async def test_secondary_view(self, mock_config):
        fetcher = StaticDocumentFetcher({
            BASE: "<html>no figures here</html>",
            f"{BASE}/profile": "<td>Total Net Assets</td><td>1.5B</td>",
        })
        resolver = NetAssetsResolver(fetcher, config=mock_config)
        assert await resolver.resolve("SCHD") == pytest.approx(1.5e9)
        assert fetcher.requested == [BASE, f"{BASE}/profile"]

    @pytest.mark.asyncio
    async def test_fund_profile_fallback(self, mock_config, mock_provider):
        mock_provider.set_fund_profile("SCHD", FundProfile(total_net_assets=1234.5))
        fetcher = StaticDocumentFetcher()
        resolver = NetAssetsResolver(fetcher, mock_provider, config=mock_config)
        assert await resolver.resolve("SCHD") == pytest.approx(1_234_500_000.0)
        assert len(fetcher.requested) == 5

    @pytest.mark.asyncio
    async def test_without_fetcher(self, mock_config, mock_provider):
        mock_provider.set_fund_profile("SCHD", FundProfile(total_net_assets=80.0))
        resolver = NetAssetsResolver(None, mock_provider, config=mock_config)
        assert await resolver.resolve("SCHD") == pytest.approx(8e7)

    @pytest.mark.asyncio
    async def test_non_positive_profile(self, mock_config, mock_provider):
        mock_provider.set_fund_profile("SCHD", FundProfile(total_net_assets=-1.0))
        resolver = NetAssetsResolver(None, mock_provider, config=mock_config)
        assert await resolver.resolve("SCHD") is None

    @pytest.mark.asyncio
    async def test_all_fail(self, mock_config, mock_provider):
        resolver = NetAssetsResolver(StaticDocumentFetcher(), mock_provider, config=mock_config)
        assert await resolver.resolve("SCHD") is None

    @pytest.mark.asyncio
    async def test_provider_error(self, mock_config, mock_provider, monkeypatch):
        def boom(symbol):
            raise QuoteProviderError("upstream down")

        monkeypatch.setattr(mock_provider, "get_fund_profile", boom)
        resolver = NetAssetsResolver(None, mock_provider, config=mock_config)
        assert await resolver.resolve("SCHD") is None

    @pytest.mark.asyncio
    async def test_invalid_symbol(self, mock_config, mock_provider):
        resolver = NetAssetsResolver(StaticDocumentFetcher(), mock_provider, config=mock_config)
        assert await resolver.resolve("") is None

    @pytest.mark.asyncio
    async def test_slow_pages_fall_through_to_fund_profile(self, mock_provider):
        mock_provider.set_fund_profile("SCHD", FundProfile(total_net_assets=10.0))
        fetcher = SlowFetcher({BASE: "<td>Total Net Assets</td><td>62.3B</td>"})
        config = AnalyticsConfig(provider=QuoteProviderType.MOCK, fetch_timeout=0.05)
        resolver = NetAssetsResolver(fetcher, mock_provider, config=config)
        assert await resolver.resolve("SCHD") == pytest.approx(1e7)

    @pytest.mark.asyncio
    async def test_fund_profile_needs_capability(self, mock_config):
        provider = QuotesOnlyProvider()
        provider.set_fund_profile("SCHD", FundProfile(total_net_assets=10.0))
        resolver = NetAssetsResolver(StaticDocumentFetcher(), provider, config=mock_config)
        assert [s.name for s in resolver.strategies("SCHD")][-1] != "fund profile"
        assert await resolver.resolve("SCHD") is None
