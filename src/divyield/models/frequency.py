"""Dividend payment frequency."""

from __future__ import annotations

from enum import Enum


class PayFrequency(Enum):
    """Inferred payout cadence. Values are display labels."""

    NO_RECORDS = "No Records"
    ANNUAL = "Annual"
    MONTHLY = "Monthly"
    BI_MONTHLY = "Bi-Monthly"
    QUARTERLY = "Quarterly"
    SEMI_ANNUAL = "Semi-Annual"
    IRREGULAR = "Irregular"

    @property
    def payments_per_year(self) -> int | None:
        """Expected payments per year, or None when there is no fixed cadence."""
        return _PAYMENTS_PER_YEAR.get(self)


_PAYMENTS_PER_YEAR: dict[PayFrequency, int] = {
    PayFrequency.ANNUAL: 1,
    PayFrequency.MONTHLY: 12,
    PayFrequency.BI_MONTHLY: 6,
    PayFrequency.QUARTERLY: 4,
    PayFrequency.SEMI_ANNUAL: 2,
}
