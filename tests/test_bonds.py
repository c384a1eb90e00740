import pytest

from fincalc.errors import FinCalcError, RootNotBracketed
from fincalc.finance.bonds import (
    build_schedule,
    bond_price,
    bond_yield,
    convexity,
    macaulay_duration,
    modified_duration,
)


def test_schedule_shape():
    s = build_schedule(1000, 0.05, 0.06, 10, 2)
    assert s.periods == 20
    assert s.coupon == pytest.approx(25.0)
    assert s.period_yield == pytest.approx(0.03)
    assert len(s.cashflows) == 20
    assert s.cashflows[0] == (1, pytest.approx(25.0))
    assert s.cashflows[-1] == (20, pytest.approx(1025.0))


def test_schedule_rounds_fractional_periods():
    assert build_schedule(100, 0.04, 0.04, 2.6, 2).periods == 5


def test_discount_bond_price_and_duration_ballpark():
    p = bond_price(1000, 0.05, 0.06, 10, 2)
    assert 900 < p < 1000
    d = macaulay_duration(1000, 0.05, 0.06, 10, 2)
    assert 6 < d < 9


def test_par_bond_prices_at_face():
    assert bond_price(1000, 0.07, 0.07, 12, 4) == pytest.approx(1000.0, abs=1e-9)


def test_zero_coupon_price():
    assert bond_price(1000, 0.0, 0.08, 5, 2) == pytest.approx(1000 / 1.04 ** 10, rel=1e-12)


@pytest.mark.parametrize("freq", [1, 2, 4])
@pytest.mark.parametrize("y", [0.01, 0.05, 0.12, 0.3, 0.45])
def test_yield_round_trips_price(y, freq):
    price = bond_price(1000, 0.05, y, 10, freq)
    assert bond_yield(1000, 0.05, price, 10, freq) == pytest.approx(y, abs=1e-6)


def test_yield_of_par_bond_is_coupon():
    assert bond_yield(100, 0.06, 100, 7, 2) == pytest.approx(0.06, abs=1e-8)


def test_yield_without_sign_change_is_not_bracketed():
    # PV minus a negative price stays positive on the whole bracket
    with pytest.raises(RootNotBracketed):
        bond_yield(1000, 0.05, -1000.0, 10, 1)


def test_zero_coupon_duration_equals_maturity():
    assert macaulay_duration(1000, 0.0, 0.07, 8, 2) == 8.0
    assert macaulay_duration(1000, 0.0, 0.03, 7, 1) == pytest.approx(7.0, abs=1e-12)


def test_coupon_bond_duration_is_shorter_than_maturity():
    assert macaulay_duration(1000, 0.08, 0.06, 10, 1) < 10


def test_modified_duration():
    mac = macaulay_duration(1000, 0.05, 0.06, 10, 2)
    assert modified_duration(1000, 0.05, 0.06, 10, 2) == pytest.approx(mac / 1.03, rel=1e-12)


@pytest.mark.parametrize("freq", [1, 2])
def test_convexity_matches_second_difference(freq):
    y, h = 0.06, 1e-4
    p0 = bond_price(1000, 0.05, y, 10, freq)
    up = bond_price(1000, 0.05, y + h, 10, freq)
    dn = bond_price(1000, 0.05, y - h, 10, freq)
    numeric = (up + dn - 2 * p0) / (p0 * h * h)
    assert convexity(1000, 0.05, y, 10, freq) == pytest.approx(numeric, rel=1e-4)


def test_zero_coupon_convexity_closed_form():
    # m(m+1) / ((1+y)^2 * freq^2) for a single payment at period m
    m, y = 10, 0.04
    expected = m * (m + 1) / ((1 + y) ** 2 * 4)
    assert convexity(1000, 0.0, 0.08, 5, 2) == pytest.approx(expected, rel=1e-12)


@pytest.mark.parametrize("fn", [bond_price, macaulay_duration, modified_duration, convexity])
def test_maturity_shorter_than_one_coupon_period_is_rejected(fn):
    with pytest.raises(FinCalcError, match="at least one coupon period"):
        fn(1000, 0.05, 0.06, 0.2, 1)


def test_zero_frequency_is_rejected():
    with pytest.raises(FinCalcError, match="coupon frequency"):
        build_schedule(1000, 0.05, 0.06, 10, 0)
