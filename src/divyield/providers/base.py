"""Abstract base class for quote providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from divyield.models.bar import Bar
from divyield.models.dividend import RawDividend
from divyield.models.metadata import ExtendedMetadata, FundProfile
from divyield.models.quote import SpotQuote


class BaseQuoteProvider(ABC):
    """Abstract base for all quote providers.

    Subclasses must implement ``get_spot_quote``. All other methods default
    to ``NotImplementedError``; providers implement only the endpoints they
    support and advertise them via ``capabilities()``.

    Methods are synchronous and may block on network I/O; the analytics
    layer dispatches them to worker threads.
    """

    # --- Real-time (required) ---

    @abstractmethod
    def get_spot_quote(self, symbol: str) -> SpotQuote:
        """Get the current price and headline quote fields for a symbol.

        Raises:
            QuoteProviderError: ``NOT_FOUND`` for unknown symbols, other
                codes for transport or payload failures.
        """
        ...

    # --- Reference data ---

    def get_extended_metadata(self, symbol: str) -> ExtendedMetadata:
        """Get recommendation trend, provider yield and fund total assets."""
        raise NotImplementedError

    def get_fund_profile(self, symbol: str) -> FundProfile | None:
        """Get the structured fund profile, or None when not a fund."""
        raise NotImplementedError

    # --- Historical ---

    def get_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        with_dividends: bool = False,
    ) -> list[Bar]:
        """Fetch daily bars ordered by timestamp ascending.

        Args:
            symbol: Ticker symbol.
            start: Start date (inclusive).
            end: End date (inclusive).
            with_dividends: Attach the dividend paid on each day to its bar.
        """
        raise NotImplementedError

    def get_dividend_events(
        self, symbol: str, start: date, end: date,
    ) -> list[RawDividend] | None:
        """Query the windowed dividend event stream.

        Returns:
            Raw events in provider order, or None when the response carries
            no dividend section at all.
        """
        raise NotImplementedError

    # --- Capabilities ---

    def capabilities(self) -> set[str]:
        """Return the set of supported features.

        Possible values: ``quotes``, ``metadata``, ``fund_profile``,
        ``bars``, ``dividends``.
        """
        return {"quotes"}
