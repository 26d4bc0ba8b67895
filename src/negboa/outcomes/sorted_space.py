from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .bids import Bid, BidDetails

if TYPE_CHECKING:
    from negboa.preferences import LinearAdditiveUtilityFunction

__all__ = ["SortedOutcomeSpace"]

EPS = 1e-12


class SortedOutcomeSpace:
    """
    All bids of an outcome space sorted by our own utility.

    This is the primitive used by offering policies to find bids at a given
    utility level.

    Args:
        ufun: The (own) utility function used for sorting.

    Remarks:
        - The outcome space is enumerated once at construction.
        - Bids with equal utility keep their enumeration order.
    """

    def __init__(self, ufun: LinearAdditiveUtilityFunction):
        self._ufun = ufun
        bids = list(ufun.outcome_space.enumerate())
        utils = np.asarray([float(ufun(_)) for _ in bids], dtype=float)
        order = np.argsort(utils, kind="stable")
        self._utils = utils[order]
        self._details = [BidDetails(bids[i], float(utils[i])) for i in order]

    @property
    def ufun(self) -> LinearAdditiveUtilityFunction:
        return self._ufun

    @property
    def all_bids(self) -> list[BidDetails]:
        """All bids from the best to the worst."""
        return self._details[::-1]

    def __len__(self) -> int:
        return len(self._details)

    def max_bid(self) -> BidDetails:
        return self._details[-1]

    def min_bid(self) -> BidDetails:
        return self._details[0]

    def bids_in_range(self, lower: float, upper: float) -> list[BidDetails]:
        """
        Bids with a utility in the closed range [lower, upper], best first.
        """
        if upper < lower:
            return []
        lo = int(np.searchsorted(self._utils, lower - EPS, side="left"))
        hi = int(np.searchsorted(self._utils, upper + EPS, side="right"))
        return self._details[lo:hi][::-1]

    def bid_near_utility(self, utility: float) -> BidDetails:
        """
        The bid whose utility is nearest to `utility`.

        Remarks:
            - When two bids are equally near, the one with the higher utility is returned.
        """
        n = len(self._utils)
        indx = int(np.searchsorted(self._utils, utility, side="left"))
        if indx <= 0:
            return self._details[0]
        if indx >= n:
            return self._details[-1]
        below, above = self._utils[indx - 1], self._utils[indx]
        if utility - below < above - utility:
            return self._details[indx - 1]
        return self._details[indx]

    def details(self, bid: Bid, time: float = 0.0) -> BidDetails:
        """Annotates a bid with our utility for it."""
        return BidDetails(bid, float(self._ufun(bid)), time)
