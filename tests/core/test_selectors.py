from __future__ import annotations

import random

import pytest
from attrs import define, field

from negboa import (
    Bid,
    BidDetails,
    HardHeadedFrequencyModel,
    NoModel,
    OpponentModel,
    WeightedBidSelector,
)
from negboa.warnings import NegboaParameterWarning


@define
class FixedModel(OpponentModel):
    """An opponent model with known utilities (zero for unknown bids)."""

    utilities: dict = field(factory=dict)

    def update(self, bid, time):
        pass

    def eval(self, bid):
        return self.utilities.get(bid, 0.0)


def details(v: int, u: float) -> BidDetails:
    return BidDetails(Bid((v,)), u)


def test_single_candidate_is_returned_unchanged():
    selector = WeightedBidSelector(model=FixedModel())
    only = details(0, 0.8)
    assert selector.select([only]) is only


def test_empty_candidates_are_an_error():
    with pytest.raises(ValueError):
        WeightedBidSelector(model=FixedModel()).select([])


def test_scoring_needs_a_model():
    with pytest.raises(ValueError):
        WeightedBidSelector().select([details(0, 0.8), details(1, 0.8)])


def test_selects_the_best_weighted_score():
    a, b, c = details(0, 0.90), details(1, 0.85), details(2, 0.80)
    model = FixedModel({a.bid: 0.1, b.bid: 0.6, c.bid: 0.7})
    selector = WeightedBidSelector(model=model)
    # 0.7 * 0.85 + 0.3 * 0.6 = 0.775 beats 0.66 and 0.77
    assert selector.select([a, b, c]) is b
    scored = selector.score([a, b, c])
    assert [_.opponent_utility for _ in scored] == [0.1, 0.6, 0.7]
    assert scored[1].score == pytest.approx(0.775)


def test_ties_go_to_the_first_candidate():
    a, b = details(0, 0.8), details(1, 0.8)
    selector = WeightedBidSelector(model=FixedModel({a.bid: 0.4, b.bid: 0.4}))
    assert selector.select([a, b]) is a
    assert selector.select([b, a]) is b


def test_uninformative_model_picks_randomly():
    candidates = [details(v, 0.8) for v in range(5)]
    selector = WeightedBidSelector(model=NoModel(), rng=random.Random(3))
    chosen = [selector.select(candidates) for _ in range(60)]
    assert all(_ in candidates for _ in chosen)
    assert len({_.bid for _ in chosen}) > 1


def test_tiny_estimates_are_uninformative():
    a, b = details(0, 0.8), details(1, 0.7)
    model = FixedModel({a.bid: 0.0001, b.bid: 0.00005})
    selector = WeightedBidSelector(model=model, rng=random.Random(0))
    chosen = {selector.select([a, b]).bid for _ in range(40)}
    assert chosen == {a.bid, b.bid}


def test_decision_metric():
    selector = WeightedBidSelector(own_weight=1.0, opponent_weight=3.0)
    assert selector.decision_metric(1.0, 0.0) == pytest.approx(0.25)
    assert WeightedBidSelector().decision_metric(1.0, 0.0) == pytest.approx(0.7)


@pytest.mark.parametrize(
    "time, expected", [(0.0, True), (1.0, True), (1.05, True), (1.1, False), (2.0, False)]
)
def test_model_updates_stop_at_the_threshold(time, expected):
    assert WeightedBidSelector().may_update(time) is expected


def test_invalid_weights_are_reset(session):
    selector = WeightedBidSelector(model=NoModel())
    with pytest.warns(NegboaParameterWarning):
        selector.init(session, {"ownWeight": -1})
    assert (selector.own_weight, selector.opponent_weight) == (0.7, 0.3)
    selector.init(session, {"ownWeight": 0.5, "opponentWeight": 0.5, "t": 0.5})
    assert selector.parameters() == {"t": 0.5, "ownWeight": 0.5, "opponentWeight": 0.5}
    assert not selector.may_update(0.6)


# ============================================================================
# Candidate windows
# ============================================================================


@pytest.fixture
def selector(session):
    model = HardHeadedFrequencyModel()
    model.init(session)
    s = WeightedBidSelector(model=model)
    s.init(session)
    return s


@pytest.mark.parametrize("target", [0.0, 0.3, 0.55, 0.8, 0.99, 1.0])
def test_candidates_are_never_below_the_target(selector, target):
    found = selector.candidates(target)
    assert found
    assert all(_.my_utility >= target - 1e-9 for _ in found)
    assert all(_.my_utility <= 1.01 + 1e-9 for _ in found)


def test_candidate_window_is_widened_once_when_sparse(selector, session):
    # the domain has far fewer bids than expected so the window is widened
    found = selector.candidates(0.5)
    assert {_.bid for _ in found} == {
        _.bid for _ in session.outcome_space.bids_in_range(0.5, 0.52)
    }


def test_candidate_window_grows_until_a_bid_is_found(selector, session):
    utils = sorted({round(_.my_utility, 9) for _ in session.outcome_space.all_bids})
    gaps = [(b - a, a) for a, b in zip(utils, utils[1:])]
    width, below = max(gaps)
    target = below + 1e-6
    found = selector.candidates(target)
    assert found
    assert min(_.my_utility for _ in found) >= target
    assert min(_.my_utility for _ in found) == pytest.approx(below + width, abs=1e-6)


def test_unreachable_targets_fall_back_to_the_best_bid(selector, session):
    assert selector.candidates(1.5) == [session.max_bid()]
    assert selector(1.5) == session.max_bid()
