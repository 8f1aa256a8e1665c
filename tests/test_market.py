"""
Tests for the synthetic market snapshot.
"""

from datetime import date

import numpy as np

from catalyst_options_bt.data.market import generate_market_snapshot


def test_biotech_snapshot():
    snap = generate_market_snapshot("mrna", np.random.default_rng(0), today=date(2025, 1, 1))
    assert snap.ticker == "MRNA"
    assert 50.0 <= snap.spot <= 500.0
    assert 150.0 <= snap.base_iv <= 200.0
    assert snap.catalyst_date == date(2025, 1, 26)


def test_tech_and_unknown_snapshot_iv():
    for ticker in ["AAPL", "ZZZZ"]:
        snap = generate_market_snapshot(ticker, np.random.default_rng(1))
        assert 80.0 <= snap.base_iv <= 120.0


def test_option_chain_shape():
    snap = generate_market_snapshot("VRTX", np.random.default_rng(2))
    chain = snap.options_chain
    assert len(chain) == 10
    assert len(snap.calls()) == 5
    assert len(snap.puts()) == 5
    strikes = sorted(snap.calls()["strike"])
    assert all(b - a == 5.0 for a, b in zip(strikes, strikes[1:]))
    assert (chain["bid"] >= 0.01).all()
    assert (chain["ask"] >= chain["bid"]).all()
    assert (chain["iv"] >= 50.0).all()


def test_snapshot_deterministic_with_seed():
    a = generate_market_snapshot("NVDA", np.random.default_rng(9), today=date(2025, 6, 1))
    b = generate_market_snapshot("NVDA", np.random.default_rng(9), today=date(2025, 6, 1))
    assert a.spot == b.spot
    assert a.options_chain.equals(b.options_chain)
