"""Trailing dividend annualization and yield calculation."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from divyield.frequency import classify_frequency
from divyield.models.dividend import DividendEvent, newest_first
from divyield.models.frequency import PayFrequency

RECENT_WINDOW_DAYS = 365


def recent_events(
    events: Sequence[DividendEvent],
    as_of: date | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> list[DividendEvent]:
    """Events dated within ``window_days`` before ``as_of``, newest first."""
    cutoff = (as_of or date.today()) - timedelta(days=window_days)
    return [e for e in newest_first(list(events)) if e.ex_date >= cutoff]


def annual_dividend(
    events: Sequence[DividendEvent],
    frequency: PayFrequency | None = None,
    as_of: date | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> float:
    """Estimate the annual dividend per share from a trailing stream.

    Annual payers use the most recent payment. Fixed-cadence payers sum the
    expected number of recent payments, extrapolating the average payment
    over any missing ones when less than a year of history exists. Payers
    without a fixed cadence sum the recent payments as-is.
    """
    if not events:
        return 0.0
    if frequency is None:
        frequency = classify_frequency(events)

    ordered = newest_first(list(events))
    if frequency is PayFrequency.ANNUAL:
        return ordered[0].amount

    recent = recent_events(ordered, as_of, window_days)
    recent_total = sum(e.amount for e in recent)
    expected = frequency.payments_per_year
    if expected is None:
        return recent_total

    if len(recent) >= expected:
        return sum(e.amount for e in recent[:expected])
    average = recent_total / max(1, len(recent))
    return recent_total + average * (expected - len(recent))


def annualize_yield(
    events: Sequence[DividendEvent],
    price: float | None,
    frequency: PayFrequency | None = None,
    as_of: date | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> float:
    """Annualized dividend yield in percent; 0 when events or price are missing."""
    if not events or not price:
        return 0.0
    return annual_dividend(events, frequency, as_of, window_days) / price * 100


def resolve_yield(provider_pct: float | None, computed_pct: float) -> float:
    """Prefer the provider-reported yield unless it is zero or absent."""
    if provider_pct:
        return provider_pct
    return computed_pct
