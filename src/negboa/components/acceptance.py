"""Acceptance policies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from attrs import define

from negboa.common import BOAParameter, ResponseType

from .base import AcceptancePolicy

if TYPE_CHECKING:
    from negboa.outcomes import BidDetails

__all__ = ["ACCombiFloor", "ACCombiTime"]


@define
class ACCombiFloor(AcceptancePolicy):
    """
    Accepts the last opponent offer if any of the following holds:

    1. ``a * u(last) + b >= u(next)``: the offer (with a small margin) is at
       least as good as the bid we would send next.
    2. ``time >= t`` and ``u(last) >= tt * u(best)``: close to the deadline,
       the offer is near the best offer ever received.
    3. ``u(last) >= c``: the offer is good regardless of time.

    Args:
        a: Scaling factor of the opponent offer utility.
        b: Offset added to the scaled opponent offer utility.
        c: Utility above which any offer is accepted (should be high).
        t: Time after which offers near the best received are accepted.
        tt: Fraction of the best received utility accepted after `t`.
    """

    PARAMETERS = (
        BOAParameter(
            "a",
            1.02,
            "Accept when the opponent's utility * a + b is greater than the utility of our current bid",
        ),
        BOAParameter(
            "b",
            0.0,
            "Accept when the opponent's utility * a + b is greater than the utility of our current bid",
        ),
        BOAParameter(
            "c",
            0.95,
            "Accept when the opponent's utility is higher than c. (c should be set pretty high)",
        ),
        BOAParameter(
            "t",
            0.99,
            "Accept offers close to the best received when the passed time is higher or equal to t",
        ),
        BOAParameter(
            "tt",
            0.8,
            "Fraction of the best received utility accepted after time t",
        ),
    )

    a: float = 1.02
    b: float = 0.0
    c: float = 0.95
    t: float = 0.99
    tt: float = 0.8

    def acceptable(
        self, next_util: float, last_util: float, best_util: float, time: float
    ) -> bool:
        return (
            self.a * last_util + self.b >= next_util
            or (time >= self.t and last_util >= self.tt * best_util)
            or last_util >= self.c
        )

    def decide(
        self,
        next_own_bid: BidDetails | None,
        last_opponent_bid: BidDetails | None,
        best_opponent_bid: BidDetails | None,
        time: float,
    ) -> ResponseType:
        if last_opponent_bid is None:
            return ResponseType.REJECT_OFFER
        last = last_opponent_bid.my_utility
        nxt = next_own_bid.my_utility if next_own_bid is not None else float("inf")
        best = best_opponent_bid.my_utility if best_opponent_bid is not None else last
        if self.acceptable(nxt, last, best, time):
            return ResponseType.ACCEPT_OFFER
        return ResponseType.REJECT_OFFER


@define
class ACCombiTime(AcceptancePolicy):
    """
    Accepts the last opponent offer if ``a * u(last) + b >= u(next)``, if
    ``time >= t`` or if ``u(last) >= c``.

    Args:
        a: Scaling factor of the opponent offer utility.
        b: Offset added to the scaled opponent offer utility.
        c: Utility above which any offer is accepted.
        t: Time after which any offer is accepted.
    """

    PARAMETERS = (
        BOAParameter(
            "a",
            1.02,
            "Accept when the opponent's utility * a + b is greater than the utility of our current bid",
        ),
        BOAParameter(
            "b",
            0.0,
            "Accept when the opponent's utility * a + b is greater than the utility of our current bid",
        ),
        BOAParameter(
            "c",
            0.98,
            "Accept when the opponent's utility is higher than c. (c should be set pretty high)",
        ),
        BOAParameter(
            "t", 0.99, "Accept when the passed time of the round is higher or equal to t"
        ),
    )

    a: float = 1.02
    b: float = 0.0
    c: float = 0.98
    t: float = 0.99

    def decide(
        self,
        next_own_bid: BidDetails | None,
        last_opponent_bid: BidDetails | None,
        best_opponent_bid: BidDetails | None,
        time: float,
    ) -> ResponseType:
        if last_opponent_bid is None:
            return ResponseType.REJECT_OFFER
        last = last_opponent_bid.my_utility
        nxt = next_own_bid.my_utility if next_own_bid is not None else float("inf")
        if self.a * last + self.b >= nxt or time >= self.t or last >= self.c:
            return ResponseType.ACCEPT_OFFER
        return ResponseType.REJECT_OFFER
