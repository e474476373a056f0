from datetime import date

import pytest

from curvelib.conventions.types import Frequency
from curvelib.curves import InstrumentKind, MarketInstrumentQuote


class NoBusinessDayCalendar:
    """Calendar on which every day is a holiday."""

    name = "NEVER"

    def is_business_day(self, dt):
        return False


@pytest.fixture(scope="module")
def reference_date():
    return date(2024, 1, 1)


@pytest.fixture(scope="module")
def scenario_quotes():
    return [
        MarketInstrumentQuote(0.05, InstrumentKind.DEPOSIT, maturity=date(2024, 7, 1)),
        MarketInstrumentQuote(
            0.045, InstrumentKind.SWAP, maturity=date(2025, 1, 1), frequency=Frequency.ANNUAL
        ),
    ]


@pytest.fixture
def never_calendar():
    return NoBusinessDayCalendar()
