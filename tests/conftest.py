from __future__ import annotations

import logging

import pytest

from negboa import (
    Bid,
    LinearAdditiveUtilityFunction,
    NegotiationSession,
    make_issue,
    make_os,
)
from negboa.helpers import create_loggers


@pytest.fixture
def issues():
    """Three issues with three values each."""
    return [
        make_issue(["low", "mid", "high"], "price"),
        make_issue(3, "quantity"),
        make_issue(["slow", "fast", "express"], "delivery"),
    ]


@pytest.fixture
def outcome_space(issues):
    return make_os(issues, name="trade")


@pytest.fixture
def ufun(outcome_space):
    """Best bid is ("high", 2, "slow") with utility one."""
    return LinearAdditiveUtilityFunction(
        weights=[5, 3, 2],
        values=[
            {"low": 0.0, "mid": 0.5, "high": 1.0},
            {0: 1.0, 1: 2.0, 2: 3.0},
            {"slow": 1.0, "fast": 0.5, "express": 0.2},
        ],
        outcome_space=outcome_space,
    )


@pytest.fixture
def quiet_logger():
    return create_loggers(module_name="negboa.tests", screen_level=logging.ERROR)


@pytest.fixture
def session(ufun, quiet_logger):
    return NegotiationSession(ufun, name="test", logger=quiet_logger)


@pytest.fixture
def offer():
    """Records an opponent bid in a session and lets a model learn from it."""

    def _offer(session: NegotiationSession, model, values, time: float) -> Bid:
        bid = Bid(values)
        session.receive_bid(bid, time)
        model.update(bid, time)
        return bid

    return _offer
