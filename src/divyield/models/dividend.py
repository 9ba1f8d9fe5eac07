"""Dividend event data models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DividendEvent:
    """Single recorded dividend payout.

    Attributes:
        ex_date: Calendar day of the payout event.
        amount: Dividend amount per share, always positive.
    """

    ex_date: date
    amount: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise ValueError(f"Dividend amount must be positive, got {self.amount!r}")

    def to_dict(self) -> dict[str, object]:
        return {"date": self.ex_date.isoformat(), "amount": self.amount}


@dataclass(frozen=True)
class RawDividend:
    """Un-normalized dividend event as reported by a provider's event stream.

    Attributes:
        date: Epoch seconds, epoch milliseconds, a day-count, an ISO string,
            or a date/datetime. Normalized by the history resolver.
        amount: Reported amount; may be missing or non-positive upstream.
    """

    date: int | float | str | date | datetime | None
    amount: float | None


def newest_first(events: list[DividendEvent] | tuple[DividendEvent, ...]) -> list[DividendEvent]:
    """Return a copy of ``events`` sorted by date, newest first."""
    return sorted(events, key=lambda e: e.ex_date, reverse=True)
