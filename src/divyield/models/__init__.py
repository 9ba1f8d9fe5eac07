"""Dividend analytics models."""

from divyield.models.bar import Bar, PricePoint
from divyield.models.dividend import DividendEvent, RawDividend
from divyield.models.frequency import PayFrequency
from divyield.models.metadata import ExtendedMetadata, FundProfile, RecommendationTrend
from divyield.models.quote import SpotQuote
from divyield.models.record import AnalyticsRecord

__all__ = [
    "Bar",
    "PricePoint",
    "DividendEvent",
    "RawDividend",
    "PayFrequency",
    "ExtendedMetadata",
    "FundProfile",
    "RecommendationTrend",
    "SpotQuote",
    "AnalyticsRecord",
]
