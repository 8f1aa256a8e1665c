"""
Tests for position valuation and cost basis.
"""

import logging

import pytest

from catalyst_options_bt.portfolio.valuation import (
    CONTRACT_MULTIPLIER,
    live_position_value,
    opening_value,
    position_value,
)
from catalyst_options_bt.pricing import price_option
from catalyst_options_bt.strategy.models import Action, OptionKind, OptionLeg


def _leg(action, kind, strike):
    return OptionLeg(Action(action), OptionKind(kind), strike)


def test_straddle_is_sum_of_legs():
    legs = [_leg("BUY", "CALL", 100), _leg("BUY", "PUT", 100)]
    call = price_option(100.0, 100.0, 30 / 365, 0.02, 0.8, OptionKind.CALL)
    put = price_option(100.0, 100.0, 30 / 365, 0.02, 0.8, OptionKind.PUT)
    assert position_value(legs, 100.0, 0.8, 30, 0.02) == pytest.approx(call + put)


def test_sell_leg_subtracts():
    long_value = position_value([_leg("BUY", "CALL", 100)], 100.0, 0.5, 20)
    short_value = position_value([_leg("SELL", "CALL", 100)], 100.0, 0.5, 20)
    assert short_value == pytest.approx(-long_value)


def test_live_value_is_per_contract():
    legs = [_leg("BUY", "CALL", 100), _leg("SELL", "CALL", 110)]
    assert live_position_value(legs, 105.0, 0.6, 15) == pytest.approx(
        position_value(legs, 105.0, 0.6, 15) * CONTRACT_MULTIPLIER
    )


def test_opening_value_debit():
    legs = [_leg("BUY", "CALL", 100)]
    initial, basis = opening_value(legs, 100.0, 0.3, 30, 0.02)
    assert initial < 0
    assert basis == pytest.approx(abs(initial))


def test_opening_value_reference_long_call():
    legs = [_leg("BUY", "CALL", 100)]
    initial, basis = opening_value(legs, 100.0, 0.30, 30, 0.02)
    assert initial == pytest.approx(-3.52, abs=0.02)
    assert basis == pytest.approx(3.52, abs=0.02)


def test_opening_value_credit():
    legs = [_leg("SELL", "PUT", 100)]
    initial, basis = opening_value(legs, 100.0, 0.3, 30, 0.02)
    assert initial > 0
    assert basis == pytest.approx(initial)


def test_opening_value_fallback_for_flat_position(caplog):
    legs = [_leg("BUY", "CALL", 100), _leg("SELL", "CALL", 100)]
    with caplog.at_level(logging.WARNING, logger="catalyst_options_bt.portfolio.valuation"):
        initial, basis = opening_value(legs, 100.0, 0.3, 30, 0.02)
    assert initial == pytest.approx(0.0)
    assert basis == pytest.approx(10.0)
    assert "fallback cost basis" in caplog.text


def test_opening_value_requires_legs():
    with pytest.raises(ValueError):
        opening_value([], 100.0, 0.3, 30)


def test_expired_position_values_at_intrinsic():
    legs = [_leg("BUY", "CALL", 100), _leg("BUY", "PUT", 100)]
    assert position_value(legs, 130.0, 0.4, 0) == pytest.approx(30.0)
