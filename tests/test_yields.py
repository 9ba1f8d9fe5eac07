"""Tests for dividend annualization and yield resolution."""

from datetime import date

import pytest
from conftest import spaced_events

from divyield.models.dividend import DividendEvent
from divyield.models.frequency import PayFrequency
from divyield.yields import annual_dividend, annualize_yield, recent_events, resolve_yield

AS_OF = date(2024, 6, 30)
NEWEST = date(2024, 6, 25)


class TestRecentEvents:
    def test_window_is_inclusive(self):
        events = [
            DividendEvent(ex_date=date(2023, 7, 1), amount=1.0),
            DividendEvent(ex_date=date(2023, 6, 30), amount=1.0),
        ]
        recent = recent_events(events, as_of=AS_OF)
        assert [e.ex_date for e in recent] == [date(2023, 7, 1)]

    def test_custom_window(self):
        events = spaced_events(12, 30, newest=NEWEST)
        assert len(recent_events(events, as_of=AS_OF, window_days=90)) == 3


class TestAnnualDividend:
    def test_empty(self):
        assert annual_dividend([], PayFrequency.MONTHLY, AS_OF) == 0.0

    def test_annual_uses_latest_payment(self):
        events = [
            DividendEvent(ex_date=date(2024, 3, 1), amount=2.5),
            DividendEvent(ex_date=date(2023, 3, 1), amount=2.0),
        ]
        assert annual_dividend(events, PayFrequency.ANNUAL, AS_OF) == 2.5

    def test_annual_outside_window(self):
        events = [DividendEvent(ex_date=date(2023, 1, 10), amount=3.0)]
        assert annual_dividend(events, PayFrequency.ANNUAL, AS_OF) == 3.0

    def test_full_year_of_monthly(self):
        events = spaced_events(12, 30, newest=NEWEST)
        assert annual_dividend(events, PayFrequency.MONTHLY, AS_OF) == pytest.approx(12.0)

    def test_surplus_payments_capped(self):
        events = spaced_events(16, 21, newest=NEWEST)
        assert annual_dividend(events, PayFrequency.MONTHLY, AS_OF) == pytest.approx(12.0)

    def test_partial_year_extrapolated(self):
        events = spaced_events(5, 30, newest=NEWEST)
        assert annual_dividend(events, PayFrequency.MONTHLY, AS_OF) == pytest.approx(12.0)

    def test_extrapolation_uses_average(self):
        events = [
            DividendEvent(ex_date=date(2024, 6, 1), amount=2.0),
            DividendEvent(ex_date=date(2024, 3, 1), amount=1.0),
        ]
        # 3.0 paid plus two missing payments at the 1.5 average.
        assert annual_dividend(events, PayFrequency.QUARTERLY, AS_OF) == pytest.approx(6.0)

    def test_irregular_sums_recent(self):
        events = [
            DividendEvent(ex_date=date(2024, 6, 1), amount=1.0),
            DividendEvent(ex_date=date(2023, 10, 1), amount=2.0),
            DividendEvent(ex_date=date(2022, 1, 1), amount=5.0),
        ]
        assert annual_dividend(events, PayFrequency.IRREGULAR, AS_OF) == pytest.approx(3.0)

    def test_stale_fixed_cadence(self):
        events = spaced_events(6, 30, newest=date(2022, 6, 1))
        assert annual_dividend(events, PayFrequency.MONTHLY, AS_OF) == 0.0

    def test_classifies_when_frequency_missing(self):
        events = spaced_events(5, 30, newest=NEWEST)
        assert annual_dividend(events, as_of=AS_OF) == pytest.approx(12.0)


class TestAnnualizeYield:
    def test_no_events(self):
        assert annualize_yield([], 100.0, PayFrequency.MONTHLY, AS_OF) == 0.0

    def test_no_price(self):
        events = spaced_events(12, 30, newest=NEWEST)
        assert annualize_yield(events, 0.0, PayFrequency.MONTHLY, AS_OF) == 0.0
        assert annualize_yield(events, None, PayFrequency.MONTHLY, AS_OF) == 0.0

    def test_annual_payer(self):
        events = [DividendEvent(ex_date=date(2024, 6, 20), amount=2.0)]
        assert annualize_yield(events, 100.0, PayFrequency.ANNUAL, AS_OF) == pytest.approx(2.0)

    def test_monthly_payer(self):
        events = spaced_events(12, 30, newest=NEWEST)
        assert annualize_yield(events, 100.0, PayFrequency.MONTHLY, AS_OF) == pytest.approx(12.0)

    def test_non_negative(self):
        events = spaced_events(4, 91, amount=0.5, newest=NEWEST)
        assert annualize_yield(events, 40.0, PayFrequency.QUARTERLY, AS_OF) >= 0


class TestResolveYield:
    def test_prefers_provider(self):
        assert resolve_yield(5.5, 4.0) == 5.5

    def test_missing_provider(self):
        assert resolve_yield(None, 4.0) == 4.0

    def test_zero_provider(self):
        assert resolve_yield(0.0, 4.0) == 4.0
