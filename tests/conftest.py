"""Shared fixtures for divyield tests."""

from __future__ import annotations

import sys
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from divyield.config import AnalyticsConfig, QuoteProviderType
from divyield.models.bar import Bar
from divyield.models.dividend import DividendEvent
from divyield.providers.mock import MockProvider


def spaced_events(
    count: int,
    gap_days: int,
    amount: float = 1.0,
    newest: date | None = None,
) -> list[DividendEvent]:
    """``count`` events ``gap_days`` apart, newest first."""
    newest = newest or date.today() - timedelta(days=5)
    return [
        DividendEvent(ex_date=newest - timedelta(days=i * gap_days), amount=amount)
        for i in range(count)
    ]


def daily_bar(day: date, close: float, dividend: float | None = None) -> Bar:
    return Bar(
        timestamp=datetime.combine(day, time(14, 30), tzinfo=timezone.utc),
        close=close,
        dividend=dividend,
    )


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def mock_config() -> AnalyticsConfig:
    return AnalyticsConfig(provider=QuoteProviderType.MOCK, fetch_timeout=5.0)


@pytest.fixture
def monthly_events() -> list[DividendEvent]:
    """12 monthly payments of 1.0, newest first."""
    return spaced_events(12, 30)
