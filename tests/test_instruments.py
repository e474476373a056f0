import math
from datetime import date

import pytest

from curvelib.conventions.calendars import NULL_CALENDAR
from curvelib.conventions.types import BusinessDayAdjustment, Frequency
from curvelib.curves import InstrumentKind, MarketInstrumentQuote, TermStructure
from curvelib.errors import InvalidRange
from curvelib.instruments import (
    CashFlow,
    DepositInstrument,
    FixedFloatSwapInstrument,
    FixedRateBond,
    ZeroCouponBond,
    create_instrument_from_quote,
    future_cash_flows,
)

REF = date(2024, 1, 1)


@pytest.fixture(scope="module")
def curve():
    dates = [date(2024, 7, 1), date(2025, 1, 1), date(2027, 1, 1), date(2034, 1, 1)]
    return TermStructure.from_zero_rates(REF, dates, [0.03, 0.031, 0.033, 0.036])


@pytest.fixture(scope="module")
def settle_curve():
    maturities = [
        date(2023, 10, 11),
        date(2024, 1, 10),
        date(2024, 4, 10),
        date(2024, 10, 10),
        date(2025, 10, 10),
        date(2026, 10, 12),
        date(2028, 10, 10),
        date(2030, 10, 10),
        date(2033, 10, 10),
        date(2038, 10, 11),
        date(2043, 10, 12),
        date(2053, 10, 10),
    ]
    yields = [0.02, 0.0219, 0.0237, 0.0267, 0.0312, 0.0343, 0.0378, 0.0393, 0.04, 0.0401, 0.0401, 0.04]
    return TermStructure.from_zero_rates(
        date(2023, 10, 10),
        maturities,
        yields,
        interpolation="NATURAL_CUBIC",
        interpolation_space="ZERO_RATE",
    )


def make_bond(issue=date(2023, 5, 8), maturity=date(2042, 11, 7), **kwargs):
    return FixedRateBond(
        issue,
        date(2023, 11, 7),
        date(2042, 5, 7),
        maturity,
        Frequency.SEMIANNUAL,
        0.062,
        face_value=1000.0,
        bond_id="20 yr bond",
        **kwargs,
    )


class TestDeposit:
    def test_cash_flows(self):
        deposit = DepositInstrument(REF, date(2024, 7, 1), 0.05)
        flows = deposit.cash_flows()
        assert [cf.payment_date for cf in flows] == [REF, date(2024, 7, 1)]
        assert flows[0].amount == -1.0
        assert flows[1].amount == pytest.approx(1.0 + 0.05 * 182 / 360)

    def test_implied_discount_factor_prices_to_zero(self, curve):
        deposit = DepositInstrument(REF, date(2024, 7, 1), 0.05, day_count="ACT/365F")
        df = deposit.implied_discount_factor(curve)
        assert df == pytest.approx(1.0 / (1.0 + 0.05 * 182 / 365))
        flat = TermStructure.from_pillars(REF, [date(2024, 7, 1)], [df])
        assert deposit.present_value(flat) == pytest.approx(0.0, abs=1e-15)

    def test_maturity_must_follow_start(self):
        with pytest.raises(InvalidRange):
            DepositInstrument(REF, REF, 0.05)


class TestSwap:
    def test_schedule_rolls_intermediate_dates(self):
        swap = FixedFloatSwapInstrument(REF, date(2027, 1, 1), 0.03, calendar=None)
        ends = [p.accrual_end for p in swap.periods]
        # New Year's Day is a TARGET holiday; the final date is kept as given
        assert ends == [date(2025, 1, 2), date(2026, 1, 2), date(2027, 1, 1)]
        assert swap.periods[0].accrual_start == REF

    def test_par_rate_zeroes_present_value(self, curve):
        swap = FixedFloatSwapInstrument(REF, date(2029, 1, 1), 0.0, Frequency.SEMIANNUAL)
        par = swap.par_rate(curve)
        at_par = FixedFloatSwapInstrument(REF, date(2029, 1, 1), par, Frequency.SEMIANNUAL)
        assert at_par.present_value(curve) == pytest.approx(0.0, abs=1e-14)
        assert at_par.fixed_leg_pv(curve) == pytest.approx(at_par.floating_leg_pv(curve))

    def test_receiver_value_sign(self, curve):
        swap = FixedFloatSwapInstrument(REF, date(2029, 1, 1), 0.0)
        par = swap.par_rate(curve)
        above = FixedFloatSwapInstrument(REF, date(2029, 1, 1), par + 0.01)
        below = FixedFloatSwapInstrument(REF, date(2029, 1, 1), par - 0.01)
        assert above.present_value(curve) > 0.0
        assert below.present_value(curve) < 0.0
        assert above.present_value(curve) == pytest.approx(0.01 * above.annuity(curve))

    def test_short_front_stub(self):
        swap = FixedFloatSwapInstrument(
            date(2024, 3, 15), date(2026, 1, 15), 0.03, calendar=NULL_CALENDAR
        )
        assert [p.accrual_start for p in swap.periods] == [
            date(2024, 3, 15),
            date(2025, 1, 15),
        ]


class TestZeroCouponBond:
    def test_final_discount_factor_is_price(self, curve):
        bond = ZeroCouponBond(REF, date(2025, 1, 1), 0.97)
        assert bond.solve_final_discount_factor(curve) == pytest.approx(0.97)

    def test_price_must_be_positive(self):
        with pytest.raises(ValueError):
            ZeroCouponBond(REF, date(2025, 1, 1), 0.0)


class TestFixedRateBond:
    def test_regular_schedule(self):
        bond = make_bond()
        flows = bond.cash_flows()
        assert bond.regular_coupon == pytest.approx(31.0)
        assert len(flows) == 39
        assert flows[0].amount == pytest.approx(31.0 * 183 / 184)
        assert flows[1].amount == pytest.approx(31.0)
        assert flows[-1].payment_date == date(2042, 11, 7)
        assert flows[-1].amount == pytest.approx(1031.0)

    def test_coupon_on_weekend_is_rolled(self):
        flows = {cf.due_date: cf for cf in make_bond().cash_flows()}
        rolled = flows[date(2026, 11, 7)]
        assert rolled.payment_date == date(2026, 11, 9)
        assert flows[date(2027, 5, 7)].payment_date == date(2027, 5, 7)

    def test_due_dates_do_not_drift(self):
        due = [cf.due_date for cf in make_bond().cash_flows()]
        assert all(d.day == 7 for d in due)

    def test_long_first_coupon(self):
        bond = make_bond(issue=date(2023, 3, 1))
        assert bond.cash_flows()[0].amount == pytest.approx(31.0 + 31.0 * 67 / 181)

    def test_short_final_coupon(self):
        bond = make_bond(maturity=date(2042, 9, 7))
        assert bond.cash_flows()[-1].amount == pytest.approx(1000.0 + 31.0 * 123 / 184)

    def test_long_final_coupon(self):
        bond = make_bond(maturity=date(2043, 1, 7))
        # 2042-11-07 to 2043-01-07 over 2042-11-07 to 2043-05-07
        assert bond.cash_flows()[-1].amount == pytest.approx(1000.0 + 31.0 + 31.0 * 61 / 181)

    def test_date_order_is_validated(self):
        with pytest.raises(ValueError):
            FixedRateBond(
                date(2023, 12, 1),
                date(2023, 11, 7),
                date(2042, 5, 7),
                date(2042, 11, 7),
                Frequency.SEMIANNUAL,
                0.062,
            )

    def test_accrued_interest(self):
        bond = make_bond()
        assert bond.accrued_interest(date(2024, 2, 7)) == pytest.approx(31.0 * 92 / 182)
        assert bond.accrued_interest(date(2023, 11, 7)) == 0.0
        assert bond.accrued_interest(date(2043, 1, 1)) == 0.0

    def test_present_value_at_settlement(self, settle_curve):
        bond = make_bond()
        pv = bond.present_value(settle_curve, date(2023, 10, 10))
        assert pv == pytest.approx(1314.5664389486, abs=1e-6)
        # published value for this bond on this spot-yield curve
        assert pv == pytest.approx(1314.5577192000126, rel=1e-5)
        assert bond.dirty_price(settle_curve, date(2023, 10, 10)) == pytest.approx(pv / 10.0)

    def test_clean_price_excludes_accrual(self, settle_curve):
        bond = make_bond()
        settle = date(2024, 2, 7)
        accrued = bond.accrued_interest(settle)
        assert bond.clean_price(settle_curve, settle) == pytest.approx(
            bond.dirty_price(settle_curve, settle) - accrued / 10.0
        )

    def test_settlement_drops_paid_flows(self, settle_curve):
        bond = make_bond()
        before = bond.present_value(settle_curve, date(2023, 11, 6))
        after = bond.present_value(settle_curve, date(2023, 11, 7))
        first = bond.cash_flows()[0].amount
        # crossing a coupon date removes roughly that coupon from the value
        assert before - after == pytest.approx(first, rel=0.01)


def test_future_cash_flows_use_due_date():
    flows = [
        CashFlow(date(2026, 11, 9), 31.0, due_date=date(2026, 11, 7)),
        CashFlow(date(2027, 5, 7), 31.0),
    ]
    assert future_cash_flows(date(2026, 11, 8), flows) == flows[1:]
    assert future_cash_flows(date(2026, 11, 6), flows) == flows


def test_present_value_discounts_to_settlement(curve):
    bond = ZeroCouponBond(REF, date(2030, 1, 1), 0.8)
    settle = date(2025, 1, 1)
    expected = curve.discount_factor(date(2030, 1, 1)) / curve.discount_factor(settle)
    assert bond.present_value(curve, settle) == pytest.approx(expected)
    assert bond.present_value(curve) == pytest.approx(
        -0.8 + curve.discount_factor(date(2030, 1, 1))
    )


class TestFactory:
    @pytest.mark.parametrize(
        "kind, cls",
        [
            (InstrumentKind.DEPOSIT, DepositInstrument),
            (InstrumentKind.SWAP, FixedFloatSwapInstrument),
            (InstrumentKind.ZERO_COUPON_BOND, ZeroCouponBond),
            (InstrumentKind.DISCOUNT_FACTOR, ZeroCouponBond),
        ],
    )
    def test_kind_mapping(self, kind, cls):
        quote = MarketInstrumentQuote(0.97, kind, maturity=date(2025, 1, 1))
        instrument = create_instrument_from_quote(REF, quote)
        assert type(instrument) is cls
        assert instrument.start_date == REF
        assert instrument.last_payment_date == date(2025, 1, 1)

    def test_tenor_maturity_is_adjusted(self):
        quote = MarketInstrumentQuote(0.04, InstrumentKind.DEPOSIT, tenor="1Y")
        instrument = create_instrument_from_quote(
            REF, quote, calendar=None, adjustment=BusinessDayAdjustment.FOLLOWING
        )
        assert instrument.maturity_date == date(2025, 1, 2)

    def test_day_count_default_and_override(self):
        quote = MarketInstrumentQuote(0.04, InstrumentKind.DEPOSIT, maturity=date(2025, 1, 1))
        assert create_instrument_from_quote(REF, quote).accrual_factor == pytest.approx(366 / 365)
        override = MarketInstrumentQuote(
            0.04, InstrumentKind.DEPOSIT, maturity=date(2025, 1, 1), day_count="ACT/360"
        )
        assert create_instrument_from_quote(REF, override).accrual_factor == pytest.approx(
            366 / 360
        )
        assert math.isclose(
            create_instrument_from_quote(REF, quote, day_count="ACT/360").accrual_factor, 366 / 360
        )
