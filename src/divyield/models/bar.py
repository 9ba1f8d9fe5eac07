"""Daily bar data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Bar:
    """Single daily price bar, optionally carrying a dividend amount.

    Attributes:
        timestamp: Bar timestamp (start of session).
        close: Closing price.
        open: Opening price.
        high: High price.
        low: Low price.
        volume: Trading volume.
        dividend: Dividend paid on this day, if the query requested events.
    """

    timestamp: datetime
    close: float
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: float | None = None
    dividend: float | None = None


@dataclass(frozen=True)
class PricePoint:
    """Closing price for a calendar day."""

    date: date
    price: float

    def to_dict(self) -> dict[str, object]:
        return {"date": self.date.isoformat(), "price": self.price}
