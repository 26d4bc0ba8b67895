"""Offering policies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from attrs import define, field

from negboa import warnings
from negboa.common import BOAParameter
from negboa.helpers.timing import bounded_delay

from .base import OfferingPolicy
from .models import NoModel

if TYPE_CHECKING:
    from negboa.outcomes import BidDetails

__all__ = ["RegimeSwitchingOffering", "concession_curve"]


def concession_curve(t: float, min_utility: float, e: float = 1.0) -> float:
    """
    Time dependent target utility going from 1 at t = 0 to `min_utility` at t = 1.

    ``min_utility + (1 - min_utility) * (1 - t ** (1 / e))`` with `t` clipped to [0, 1].

    Remarks:
        - e < 1 concedes slowly (boulware), e > 1 concedes early (conceder) and
          e == 0 never concedes.
    """
    t = min(1.0, max(0.0, t))
    if e == 0:
        return 1.0
    return min_utility + (1.0 - min_utility) * (1.0 - pow(t, 1.0 / e))


@define
class RegimeSwitchingOffering(OfferingPolicy):
    """
    A time dependent offering policy that switches behavior with the opponent profile.

    - Cooperative opponents: the target utility follows `concession_curve`.
    - Offensive opponents: the target stays at `offensive_utility` until
      `concede_threshold` of the time passed and follows the curve afterwards.
      After `scare_threshold` the policy pauses for `scare_delay` seconds before
      every offer to put pressure on the opponent. The pause never changes the
      bid.

    The bid offered is the one nearest to the target utility when no opponent
    model is used. Otherwise the selector chooses among bids just above the target.

    Args:
        min_utility: Minimum target utility.
        e: Concession exponent.
        offensive_utility: Target utility used against offensive opponents.
        scare_threshold: Time after which offers are delayed against offensive opponents.
        concede_threshold: Time after which the policy concedes against offensive opponents.
        scare_delay: Length of the pause in seconds.
        delay: The function used to pause (receives seconds).
    """

    PARAMETERS = (
        BOAParameter("minUtility", 0.5, "Minimum utility", "min_utility"),
        BOAParameter("e", 1.0, "Concession exponent (1 is linear)"),
        BOAParameter(
            "offensiveUtility", 0.9, "Starting offensive utility", "offensive_utility"
        ),
        BOAParameter(
            "scareThreshold", 0.9, "Scare opponent time threshold", "scare_threshold"
        ),
        BOAParameter(
            "concedeThreshold",
            0.9,
            "Offensive profile concede time threshold",
            "concede_threshold",
        ),
        BOAParameter(
            "scareDelay",
            0.1,
            "Seconds to wait before offering once the scare threshold passed",
            "scare_delay",
        ),
    )

    min_utility: float = 0.5
    e: float = 1.0
    offensive_utility: float = 0.9
    scare_threshold: float = 0.9
    concede_threshold: float = 0.9
    scare_delay: float = 0.1
    delay: Callable[[float], object] = field(default=bounded_delay, kw_only=True)

    def on_init(self) -> None:
        super().on_init()
        if not 0.0 <= self.min_utility <= 1.0:
            warnings.warn(
                f"{self.name}: minUtility must be in [0, 1] (got {self.min_utility}). Using 0.5",
                warnings.NegboaParameterWarning,
            )
            self.min_utility = 0.5
        if self.e < 0:
            warnings.warn(
                f"{self.name}: e cannot be negative (got {self.e}). Using 1",
                warnings.NegboaParameterWarning,
            )
            self.e = 1.0

    def is_opponent_cooperative(self) -> bool:
        return self.model is not None and self.model.is_cooperative()

    def target_utility(self, time: float) -> float:
        if self.is_opponent_cooperative() or time >= self.concede_threshold:
            return concession_curve(time, self.min_utility, self.e)
        return min(1.0, max(self.min_utility, self.offensive_utility))

    def uses_model(self) -> bool:
        return (
            self.model is not None
            and not isinstance(self.model, NoModel)
            and self.selector is not None
        )

    def next_bid(self, time: float) -> BidDetails:
        assert self.session is not None, "The offering policy is not bound to a session"
        cooperative = self.is_opponent_cooperative()
        if not cooperative and time >= self.scare_threshold:
            self.delay(self.scare_delay)
        target = self.target_utility(time)
        if self.uses_model():
            bid = self.selector(target)  # type: ignore
        else:
            bid = self.session.outcome_space.bid_near_utility(target)
        self.session.logdebug(
            f"{'cooperative' if cooperative else 'offensive'} profile at {time:.3f}: "
            f"target {target:.3f} -> {bid.bid} ({bid.my_utility:.3f})"
        )
        self._current = bid
        return bid
