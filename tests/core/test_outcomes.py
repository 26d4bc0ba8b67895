from __future__ import annotations

import random

import hypothesis.strategies as st
import pytest
from hypothesis import given

from negboa import (
    Bid,
    BidDetails,
    Issue,
    LinearAdditiveUtilityFunction,
    SortedOutcomeSpace,
    make_issue,
    make_os,
)


def test_make_issue_from_int():
    issue = make_issue(4, "count")
    assert issue.values == (0, 1, 2, 3)
    assert issue.cardinality == len(issue) == 4
    assert issue.name == "count"


def test_make_issue_generates_names():
    a, b = make_issue(["x", "y"]), make_issue(["x", "y"])
    assert a.name and b.name and a.name != b.name


@pytest.mark.parametrize("values", [[], ["a", "a"]])
def test_invalid_issues_are_rejected(values):
    with pytest.raises(ValueError):
        Issue(values, "bad")


def test_issue_validity_never_raises():
    issue = make_issue(["a", "b"], "letters")
    assert issue.is_valid("a")
    assert not issue.is_valid("c")
    assert not issue.is_valid([1, 2])
    assert issue.index("b") == 1


def test_outcome_space_basics(outcome_space):
    assert outcome_space.n_issues == 3
    assert outcome_space.issue_names == ["price", "quantity", "delivery"]
    assert outcome_space.cardinality == 27
    bids = list(outcome_space.enumerate())
    assert len(bids) == len(set(bids)) == 27
    assert all(outcome_space.is_valid(_) for _ in bids)
    assert not outcome_space.is_valid(Bid(("low", 0)))
    assert not outcome_space.is_valid(Bid(("low", 7, "slow")))


def test_random_bids_are_valid(outcome_space):
    rng = random.Random(1)
    for _ in range(20):
        assert outcome_space.is_valid(outcome_space.random_bid(rng))


def test_make_os_checks_issues():
    with pytest.raises(ValueError):
        make_os([])
    with pytest.raises(ValueError):
        make_os([make_issue(2, "a"), make_issue(3, "a")])
    assert make_os([2, ["x", "y", "z"]]).cardinality == 6


def test_bid_dict_conversion(outcome_space):
    names = outcome_space.issue_names
    bid = Bid.from_dict({"delivery": "fast", "price": "mid", "quantity": 1}, names)
    assert bid == Bid(("mid", 1, "fast"))
    assert bid.to_dict(names) == {"price": "mid", "quantity": 1, "delivery": "fast"}
    assert str(bid) == "('mid', 1, 'fast')"


bid_values = st.lists(st.integers(0, 3), min_size=1, max_size=6)


@given(a=bid_values, b=bid_values)
def test_bid_distance_is_symmetric_and_bounded(a, b):
    x, y = Bid(a), Bid(b)
    assert x.distance(y) == y.distance(x)
    assert 0.0 <= x.distance(y) <= 1.0
    assert x.distance(x) == 0.0


def test_bid_distance_counts_missing_positions():
    assert Bid((1, 2, 3)).distance(Bid((1, 2))) == pytest.approx(1 / 3)
    assert Bid((1, 2)).count_equal_values(Bid((1, 5))) == 1


# ============================================================================
# Sorted outcome space
# ============================================================================


def test_sorted_space_orders_bids(ufun):
    space = SortedOutcomeSpace(ufun)
    assert len(space) == 27
    utils = [_.my_utility for _ in space.all_bids]
    assert utils == sorted(utils, reverse=True)
    assert space.max_bid().bid == Bid(("high", 2, "slow"))
    assert space.max_bid().my_utility == pytest.approx(1.0)
    assert space.min_bid().bid == Bid(("low", 0, "express"))
    assert space.min_bid().my_utility == pytest.approx(0.3 / 3 + 0.2 * 0.2)


@given(lower=st.floats(0.0, 1.0), width=st.floats(0.0, 0.5))
def test_bids_in_range_is_complete(lower, width):
    os = make_os([3, 3], name="small")
    ufun = LinearAdditiveUtilityFunction(
        [1, 2], [{0: 0.0, 1: 0.3, 2: 1.0}, {0: 0.1, 1: 0.6, 2: 1.0}], os
    )
    space = SortedOutcomeSpace(ufun)
    upper = lower + width
    found = space.bids_in_range(lower, upper)
    expected = [
        _ for _ in space.all_bids if lower - 1e-12 <= _.my_utility <= upper + 1e-12
    ]
    assert {_.bid for _ in found} == {_.bid for _ in expected}
    assert [_.my_utility for _ in found] == sorted(
        (_.my_utility for _ in found), reverse=True
    )


def test_bids_in_empty_range(ufun):
    space = SortedOutcomeSpace(ufun)
    assert space.bids_in_range(0.8, 0.7) == []
    assert space.bids_in_range(1.5, 2.0) == []


def test_bid_near_utility(ufun):
    space = SortedOutcomeSpace(ufun)
    assert space.bid_near_utility(5.0) == space.max_bid()
    assert space.bid_near_utility(-1.0) == space.min_bid()
    for target in (0.2, 0.45, 0.7, 0.9):
        near = space.bid_near_utility(target)
        gap = abs(near.my_utility - target)
        assert all(abs(_.my_utility - target) >= gap - 1e-12 for _ in space.all_bids)


def test_details_annotates_bids(ufun):
    space = SortedOutcomeSpace(ufun)
    d = space.details(Bid(("high", 2, "slow")), time=0.3)
    assert isinstance(d, BidDetails)
    assert d.my_utility == pytest.approx(1.0)
    assert d.time == 0.3
