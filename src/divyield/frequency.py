"""Payout cadence inference from dividend event spacing."""

from __future__ import annotations

from collections.abc import Sequence

from divyield.models.dividend import DividendEvent, newest_first
from divyield.models.frequency import PayFrequency

# Inclusive upper bounds on the mean gap in days, checked in order.
GAP_THRESHOLDS: tuple[tuple[float, PayFrequency], ...] = (
    (35, PayFrequency.MONTHLY),
    (70, PayFrequency.BI_MONTHLY),
    (100, PayFrequency.QUARTERLY),
    (190, PayFrequency.SEMI_ANNUAL),
    (370, PayFrequency.ANNUAL),
)

# Quarterly payers that skip one quarter still touch 3-4 distinct months
# with a mean gap inside this range.
QUARTERLY_MONTH_COUNTS = frozenset({3, 4})
QUARTERLY_GAP_RANGE = (70.0, 120.0)


def payment_gaps(events: Sequence[DividendEvent]) -> list[int]:
    """Day gaps between consecutive events, newest first."""
    ordered = newest_first(list(events))
    return [
        (ordered[i - 1].ex_date - ordered[i].ex_date).days
        for i in range(1, len(ordered))
    ]


def classify_frequency(events: Sequence[DividendEvent]) -> PayFrequency:
    """Infer the payout cadence of a dividend stream.

    Rules, first match wins:
        1. No events -> No Records.
        2. One event -> Annual.
        3. Three or more events over exactly 3 or 4 distinct calendar months
           with a mean gap of 70-120 days -> Quarterly.
        4. Mean gap thresholds (inclusive): <=35 Monthly, <=70 Bi-Monthly,
           <=100 Quarterly, <=190 Semi-Annual, <=370 Annual, else Irregular.
    """
    if not events:
        return PayFrequency.NO_RECORDS
    if len(events) == 1:
        return PayFrequency.ANNUAL

    gaps = payment_gaps(events)
    mean_gap = sum(gaps) / len(gaps)

    if len(events) >= 3:
        months = {e.ex_date.month for e in events}
        low, high = QUARTERLY_GAP_RANGE
        if len(months) in QUARTERLY_MONTH_COUNTS and low <= mean_gap <= high:
            return PayFrequency.QUARTERLY

    for bound, frequency in GAP_THRESHOLDS:
        if mean_gap <= bound:
            return frequency
    return PayFrequency.IRREGULAR
