"""
Tests for the Black-Scholes leg pricer.
"""

import math

import pytest

from catalyst_options_bt.pricing import norm_cdf, price_option, intrinsic_value
from catalyst_options_bt.strategy.models import OptionKind


def test_norm_cdf_midpoint():
    assert norm_cdf(0.0) == pytest.approx(0.5, abs=1e-6)


@pytest.mark.parametrize("z", [0.1, 0.5, 1.0, 1.96, 3.0, 6.0])
def test_norm_cdf_symmetry(z):
    assert norm_cdf(z) + norm_cdf(-z) == pytest.approx(1.0, abs=1e-12)


def test_norm_cdf_known_values():
    assert norm_cdf(1.0) == pytest.approx(0.841345, abs=1e-6)
    assert norm_cdf(-1.96) == pytest.approx(0.024998, abs=1e-6)


def test_atm_call_reference_price():
    px = price_option(100.0, 100.0, 30 / 365, 0.02, 0.3, OptionKind.CALL)
    assert px == pytest.approx(3.52, abs=0.02)


@pytest.mark.parametrize(
    "s,k,vol",
    [
        (120.0, 110.0, 0.8),
        (100.0, 100.0, 0.3),
        (50.0, 65.0, 1.5),
        (300.0, 250.0, 0.4),
        (80.0, 95.0, 0.05),
    ],
)
@pytest.mark.parametrize("days", [1, 10, 45])
def test_put_call_parity(s, k, vol, days):
    t, r = days / 365, 0.02
    call = price_option(s, k, t, r, vol, OptionKind.CALL)
    put = price_option(s, k, t, r, vol, OptionKind.PUT)
    assert call - put == pytest.approx(s - k * math.exp(-r * t), abs=1e-4)


@pytest.mark.parametrize("vol", [0.3, 1.5])
def test_monotone_in_spot(vol):
    spots = [20.0 + 0.5 * i for i in range(400)]
    calls = [price_option(s, 100.0, 30 / 365, 0.02, vol, OptionKind.CALL) for s in spots]
    puts = [price_option(s, 100.0, 30 / 365, 0.02, vol, OptionKind.PUT) for s in spots]
    assert all(b >= a - 1e-9 for a, b in zip(calls, calls[1:]))
    assert all(b <= a + 1e-9 for a, b in zip(puts, puts[1:]))


def test_expired_option_is_intrinsic():
    assert price_option(110.0, 100.0, 0.0, 0.02, 0.5, OptionKind.CALL) == 10.0
    assert price_option(110.0, 100.0, -1.0, 0.02, 0.5, OptionKind.PUT) == 0.0
    assert price_option(90.0, 100.0, 0.0, 0.02, 0.5, OptionKind.PUT) == 10.0


def test_zero_volatility_is_intrinsic():
    assert price_option(110.0, 100.0, 0.25, 0.02, 0.0, OptionKind.CALL) == 10.0


def test_price_never_negative_far_out_of_the_money():
    assert price_option(10.0, 500.0, 1 / 365, 0.02, 0.2, OptionKind.CALL) >= 0.0
    assert price_option(500.0, 10.0, 1 / 365, 0.02, 0.2, OptionKind.PUT) >= 0.0


def test_higher_vol_raises_price():
    low = price_option(100.0, 100.0, 30 / 365, 0.02, 0.3, OptionKind.PUT)
    high = price_option(100.0, 100.0, 30 / 365, 0.02, 1.5, OptionKind.PUT)
    assert high > low


def test_intrinsic_value():
    assert intrinsic_value(OptionKind.CALL, 100.0, 90.0) == 0.0
    assert intrinsic_value(OptionKind.PUT, 100.0, 90.0) == 10.0
