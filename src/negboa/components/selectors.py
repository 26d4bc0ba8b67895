"""Bid selectors (opponent-model strategies)."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Sequence

from attrs import define, field

from negboa import warnings
from negboa.common import BOAParameter

from .base import BidSelector

if TYPE_CHECKING:
    from negboa.outcomes import BidDetails

__all__ = ["ScoredBid", "WeightedBidSelector"]

UNINFORMATIVE_EPS = 0.0001


@define(frozen=True)
class ScoredBid:
    """A candidate together with its estimated opponent utility and its score."""

    details: BidDetails
    opponent_utility: float
    score: float


@define
class WeightedBidSelector(BidSelector):
    """
    Selects the candidate maximizing a weighted mean of our utility and the
    estimated utility of the opponent.

    ``(own_weight * own + opponent_weight * opponent) / (own_weight + opponent_weight)``

    Remarks:
        - A single candidate is returned as is.
        - Ties go to the first candidate.
        - If the model estimates (almost) zero utility for every candidate, it
          carries no information yet and a random candidate is returned.
        - The model should not be updated once `update_threshold` is reached.
          The default is above 1 because a session may run slightly past its deadline.

    Args:
        own_weight: Weight of our own utility.
        opponent_weight: Weight of the estimated opponent utility.
        update_threshold: Time after which the opponent model is not updated.
        rng: Random generator used when the model is uninformative.
    """

    PARAMETERS = (
        BOAParameter("t", 1.1, "Time after which the OM should not be updated", "update_threshold"),
        BOAParameter("ownWeight", 0.7, "Weight of the agent's own utility", "own_weight"),
        BOAParameter(
            "opponentWeight", 0.3, "Weight of the opponent's utility", "opponent_weight"
        ),
    )

    own_weight: float = 0.7
    opponent_weight: float = 0.3
    update_threshold: float = 1.1
    rng: random.Random = field(factory=random.Random, kw_only=True)

    def on_init(self) -> None:
        if (
            self.own_weight < 0
            or self.opponent_weight < 0
            or self.own_weight + self.opponent_weight <= 0
        ):
            warnings.warn(
                f"{self.name}: invalid weights ownWeight={self.own_weight}, "
                f"opponentWeight={self.opponent_weight}. Using 0.7 and 0.3",
                warnings.NegboaParameterWarning,
            )
            self.own_weight, self.opponent_weight = 0.7, 0.3

    def decision_metric(self, own_utility: float, opponent_utility: float) -> float:
        return (
            self.own_weight * own_utility + self.opponent_weight * opponent_utility
        ) / (self.own_weight + self.opponent_weight)

    def score(self, candidates: Sequence[BidDetails]) -> list[ScoredBid]:
        if self.model is None:
            raise ValueError(f"{self.name} needs an opponent model to score bids")
        scored = []
        for d in candidates:
            opp = float(self.model(d.bid))
            scored.append(ScoredBid(d, opp, self.decision_metric(d.my_utility, opp)))
        return scored

    def select(self, candidates: Sequence[BidDetails]) -> BidDetails:
        if not candidates:
            raise ValueError("Cannot select from an empty list of candidates")
        if len(candidates) == 1:
            return candidates[0]
        scored = self.score(candidates)
        if all(_.opponent_utility <= UNINFORMATIVE_EPS for _ in scored):
            return self.rng.choice(list(candidates))
        best: ScoredBid | None = None
        for s in scored:
            if best is None or s.score > best.score:
                best = s
        assert best is not None
        return best.details

    def may_update(self, time: float) -> bool:
        return time < self.update_threshold
