"""
The per-session context shared by all BOA components.
"""
from __future__ import annotations

import logging
from typing import Iterator

from negboa import warnings
from negboa.helpers.logging import session_logger
from negboa.helpers.strings import unique_name
from negboa.outcomes import Bid, BidDetails, SortedOutcomeSpace
from negboa.preferences import LinearAdditiveUtilityFunction

__all__ = ["BidHistory", "NegotiationSession"]


class BidHistory:
    """
    An append-only sequence of bids annotated with our utility and the time they were made.
    """

    def __init__(self) -> None:
        self._history: list[BidDetails] = []

    def add(self, details: BidDetails) -> None:
        self._history.append(details)

    def last(self) -> BidDetails | None:
        return self._history[-1] if self._history else None

    def best(self) -> BidDetails | None:
        """The bid with the highest utility for us (the earliest one on ties)."""
        best = None
        for d in self._history:
            if best is None or d.my_utility > best.my_utility:
                best = d
        return best

    def window(self, n: int) -> list[BidDetails]:
        """The last `n` entries (oldest first)."""
        if n <= 0:
            return []
        return self._history[-n:]

    @property
    def bids(self) -> list[Bid]:
        return [_.bid for _ in self._history]

    def __getitem__(self, indx: int) -> BidDetails:
        return self._history[indx]

    def __len__(self) -> int:
        return len(self._history)

    def __iter__(self) -> Iterator[BidDetails]:
        return iter(self._history)

    def __bool__(self) -> bool:
        return bool(self._history)


class NegotiationSession:
    """
    Everything known about one bilateral negotiation.

    Args:
        ufun: Our own utility function (fixed for the session).
        outcome_space: Sorted bids of the domain. Created from `ufun` if not given.
        time: Initial normalized time.
        name: Session name (used in log messages).
        logger: The logger to use. Created with `session_logger` if not given.

    Remarks:
        - Time is normalized: 0 is the start and 1 the deadline. Values slightly
          above 1 are accepted.
        - Every session owns its histories. Nothing is shared between sessions.
    """

    def __init__(
        self,
        ufun: LinearAdditiveUtilityFunction,
        outcome_space: SortedOutcomeSpace | None = None,
        time: float = 0.0,
        name: str | None = None,
        logger: logging.Logger | None = None,
    ):
        self._ufun = ufun
        self._outcome_space = (
            outcome_space if outcome_space is not None else SortedOutcomeSpace(ufun)
        )
        self._time = max(0.0, float(time))
        self.name = name if name else unique_name("session", add_time=False)
        self.opponent_bid_history = BidHistory()
        self.own_bid_history = BidHistory()
        self.logger = logger if logger is not None else session_logger()

    @property
    def ufun(self) -> LinearAdditiveUtilityFunction:
        return self._ufun

    @property
    def outcome_space(self) -> SortedOutcomeSpace:
        return self._outcome_space

    @property
    def issues(self):
        return self._ufun.outcome_space.issues

    @property
    def time(self) -> float:
        return self._time

    def set_time(self, time: float) -> float:
        """
        Advances the normalized time of the session and returns the current time.

        Remarks:
            - Time never moves backwards. Earlier times are ignored with a warning.
        """
        time = float(time)
        if time < self._time:
            warnings.warn(
                f"{self.name}: time cannot move from {self._time} back to {time}",
                warnings.NegboaTimeWarning,
            )
            return self._time
        self._time = time
        return self._time

    def utility(self, bid: Bid | None) -> float:
        return float(self._ufun(bid))

    def receive_bid(self, bid: Bid, time: float | None = None) -> BidDetails:
        """Records a bid made by the opponent and returns its details."""
        if time is not None:
            self.set_time(time)
        details = BidDetails(bid, self.utility(bid), self._time)
        self.opponent_bid_history.add(details)
        return details

    def record_own_bid(self, details: BidDetails) -> BidDetails:
        """Records a bid we sent (stamped with the current time)."""
        details = BidDetails(details.bid, details.my_utility, self._time)
        self.own_bid_history.add(details)
        return details

    def max_bid(self) -> BidDetails:
        return self._outcome_space.max_bid()

    def loginfo(self, s: str) -> None:
        """logs session-level information"""
        self.logger.info(f"{self.name}: {s.strip()}")

    def logdebug(self, s: str) -> None:
        """logs debug-level information"""
        self.logger.debug(f"{self.name}: {s.strip()}")

    def logwarning(self, s: str) -> None:
        """logs warning-level information"""
        self.logger.warning(f"{self.name}: {s.strip()}")
