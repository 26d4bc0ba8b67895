"""Opponent models.

The models estimate the preferences of the opponent from the sequence of bids
it makes and classify it as cooperative or offensive.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

import numpy as np
from attrs import define, field

from negboa import warnings
from negboa.common import BOAParameter

from .base import OpponentModel

if TYPE_CHECKING:
    from negboa.outcomes import Bid, Issue
    from negboa.session import BidHistory

__all__ = [
    "CooperationTracker",
    "NoModel",
    "HardHeadedFrequencyModel",
    "TimeBlendedFrequencyModel",
    "BayesianModel",
    "valid_issues",
]

DEFAULT_WINDOW = 4


def valid_issues(issues: Sequence[Issue], bid: Bid) -> list[bool]:
    """
    For every issue, whether the bid assigns it a known value.

    Issues the bid does not cover and values outside the domain are reported
    with a `NegboaUnexpectedValueWarning`.
    """
    result = [i < len(bid) and issue.is_valid(bid[i]) for i, issue in enumerate(issues)]
    if len(bid) != len(issues) or not all(result):
        bad = [issue.name for issue, ok in zip(issues, result) if not ok]
        warnings.warn(
            f"Bid {bid} does not match the domain (issues: {bad}, expected "
            f"{len(issues)} values got {len(bid)}). Ignoring the offending issues",
            warnings.NegboaUnexpectedValueWarning,
        )
    return result


@define
class CooperationTracker:
    """
    Classifies the opponent as cooperative or offensive.

    The opponent becomes offensive (for the rest of the session) as soon as two
    consecutive bids among its last `window` bids differ both in our utility
    and as bids.

    Args:
        window: Number of recent opponent moves checked.
    """

    window: int = DEFAULT_WINDOW
    _cooperative: bool = field(init=False, default=True)

    @property
    def cooperative(self) -> bool:
        return self._cooperative

    def update(self, history: BidHistory) -> bool:
        """Re-evaluates the classification and returns it."""
        if not self._cooperative:
            return False
        n = len(history)
        if n <= self.window:
            return True
        for i in range(n - self.window, n):
            before, after = history[i - 1], history[i]
            if before.my_utility != after.my_utility and before.bid != after.bid:
                self._cooperative = False
                break
        return self._cooperative


@define
class NoModel(OpponentModel):
    """
    A model that learns nothing.

    Offering policies bypass bid selection when they are given this model and
    offer the bid nearest to their target utility instead.
    """

    def update(self, bid: Bid, time: float) -> None:
        pass

    def eval(self, bid: Bid | None) -> float:
        return 0.0


@define
class HardHeadedFrequencyModel(OpponentModel):
    """
    Frequency based opponent model.

    Issues on which the opponent repeats its previous value are assumed to be
    important for it and values it offers often are assumed to be preferred.

    Weights: with `n` issues, `golden = l / n`. When a bid arrives (except the
    first), every issue that kept its value and whose weight is below
    ``1 - n * golden / (1 + golden * n_unchanged)`` is raised by `golden`
    (without crossing that cap). All weights are then divided by one plus the
    total raise so that they keep summing to one.

    No weight ever exceeds `max_weight`, the largest value the cap above can
    take (``1 / (1 + l)`` with two or more issues). Any excess left after the
    division is moved to the issues below it.

    Values: every value starts with a score of 1 and gains `v` whenever the
    opponent offers it. Scores are divided by the largest score of their issue
    when evaluating.

    Args:
        learning_coef: The learning coefficient `l` in [0, 1].
        value_addition: The score added to an offered value `v`.
        window: Number of recent moves used to classify the opponent `m`.
    """

    PARAMETERS = (
        BOAParameter(
            "l",
            0.2,
            "The learning coefficient determines how quickly the issue weights are learned",
            "learning_coef",
        ),
        BOAParameter(
            "v",
            1.0,
            "Score added to a value each time the opponent offers it",
            "value_addition",
        ),
        BOAParameter(
            "m",
            DEFAULT_WINDOW,
            "Number of recent opponent moves checked before considering the opponent non-cooperative",
            "window",
        ),
    )

    learning_coef: float = 0.2
    value_addition: float = 1.0
    window: int = DEFAULT_WINDOW
    _weights: list[float] = field(init=False, factory=list)
    _scores: list[dict] = field(init=False, factory=list)
    _max_scores: list[float] = field(init=False, factory=list)
    _golden: float = field(init=False, default=0.0)
    _max_weight: float = field(init=False, default=1.0)
    _tracker: CooperationTracker = field(init=False, factory=CooperationTracker)

    def on_init(self) -> None:
        assert self.session is not None
        if not 0.0 <= self.learning_coef <= 1.0:
            warnings.warn(
                f"{self.name}: the learning coefficient must be in [0, 1] (got {self.learning_coef}). Using 0.2",
                warnings.NegboaParameterWarning,
            )
            self.learning_coef = 0.2
        if self.window < 1:
            warnings.warn(
                f"{self.name}: window must be at least 1 (got {self.window}). Using {DEFAULT_WINDOW}",
                warnings.NegboaParameterWarning,
            )
            self.window = DEFAULT_WINDOW
        issues = self.session.issues
        n = len(issues)
        self._weights = [1.0 / n] * n
        self._scores = [{v: 1.0 for v in issue.values} for issue in issues]
        self._max_scores = [1.0] * n
        self._golden = self.learning_coef / n
        # the per-update cap when every issue is unchanged
        self._max_weight = 1.0 / (1.0 + self.learning_coef) if n > 1 else 1.0
        self._tracker = CooperationTracker(self.window)

    @property
    def golden_value(self) -> float:
        return self._golden

    @property
    def max_weight(self) -> float:
        """Upper bound of every issue weight for the whole session."""
        return self._max_weight

    @property
    def weights(self) -> tuple[float, ...]:
        return tuple(self._weights)

    @property
    def issue_weights(self) -> dict[str, float]:
        assert self.session is not None
        return {i.name: w for i, w in zip(self.session.issues, self._weights)}

    @property
    def value_scores(self) -> list[dict]:
        """Unnormalized value scores per issue (copies)."""
        return [dict(_) for _ in self._scores]

    def update(self, bid: Bid, time: float) -> None:
        if not self._weights or self.session is None:
            return
        history = self.record(bid, time)
        valid = valid_issues(self.session.issues, bid)
        if len(history) >= 2:
            previous = history[-2].bid
            self._reweigh(
                [
                    ok and i < len(previous) and previous[i] == bid[i]
                    for i, ok in enumerate(valid)
                ]
            )
        for i, ok in enumerate(valid):
            if not ok:
                continue
            s = self._scores[i][bid[i]] + self.value_addition
            self._scores[i][bid[i]] = s
            self._max_scores[i] = max(self._max_scores[i], s)
        self._tracker.update(history)

    def _reweigh(self, unchanged: list[bool]) -> None:
        n = len(self._weights)
        golden = self._golden
        cap = 1.0 - n * golden / (1.0 + golden * sum(unchanged))
        raises = [
            min(golden, cap - w) if same and w < cap else 0.0
            for w, same in zip(self._weights, unchanged)
        ]
        total = 1.0 + sum(raises)
        self._weights = self._clamp(
            [(w + r) / total for w, r in zip(self._weights, raises)]
        )

    def _clamp(self, weights: list[float]) -> list[float]:
        """Caps weights at `max_weight` and shares the excess by the room left below it."""
        cap = self._max_weight
        excess = sum(w - cap for w in weights if w > cap)
        if excess <= 0.0:
            return weights
        room = sum(cap - w for w in weights if w < cap)
        if room <= 0.0:
            return weights
        return [cap if w >= cap else w + excess * (cap - w) / room for w in weights]

    def frequency_utility(self, bid: Bid) -> float:
        """The additive utility of the bid under the current weight and value estimates."""
        u = 0.0
        for i, (w, scores, mx) in enumerate(
            zip(self._weights, self._scores, self._max_scores)
        ):
            if i >= len(bid) or mx <= 0:
                continue
            try:
                s = scores.get(bid[i], 0.0)
            except TypeError:
                s = 0.0
            u += w * s / mx
        return min(1.0, max(0.0, u))

    def eval(self, bid: Bid | None) -> float:
        if bid is None or not self._weights:
            return 0.0
        return self.frequency_utility(bid)

    def is_cooperative(self) -> bool:
        return self._tracker.cooperative


@define
class TimeBlendedFrequencyModel(HardHeadedFrequencyModel):
    """
    Frequency model blended with how recently the opponent offered a similar bid.

    The time signal finds the historical opponent bid most similar to the
    evaluated bid (smallest distance, the most recent on ties) and returns
    ``(index + 1) / len(history)``: 1 for the latest bid and close to 0 for
    the earliest.

    Args:
        w_frequency: Weight of the frequency estimate.
        w_time: Weight of the time signal.

    Remarks:
        - If the two weights do not sum to one (or one is negative) both are
          reset to 0.5.
    """

    PARAMETERS = HardHeadedFrequencyModel.PARAMETERS + (
        BOAParameter("w_frequency", 0.5, "Weight of the frequency based estimate"),
        BOAParameter("w_time", 0.5, "Weight of the recency of the most similar opponent bid"),
    )

    w_frequency: float = 0.5
    w_time: float = 0.5

    def on_init(self) -> None:
        super().on_init()
        if (
            self.w_frequency < 0
            or self.w_time < 0
            or not math.isclose(self.w_frequency + self.w_time, 1.0, abs_tol=1e-9)
        ):
            warnings.warn(
                f"{self.name}: w_frequency ({self.w_frequency}) and w_time ({self.w_time}) "
                f"must be non-negative and sum to 1. Using 0.5 for both",
                warnings.NegboaParameterWarning,
            )
            self.w_frequency, self.w_time = 0.5, 0.5

    def time_utility(self, bid: Bid) -> float:
        if self.session is None:
            return 1.0
        history = self.session.opponent_bid_history
        if not history:
            return 1.0
        closest, smallest = 0, float("inf")
        for i, d in enumerate(history):
            distance = bid.distance(d.bid)
            if distance <= smallest:
                closest, smallest = i, distance
        return (closest + 1) / len(history)

    def eval(self, bid: Bid | None) -> float:
        if bid is None or not self._weights:
            return 0.0
        return self.w_frequency * self.frequency_utility(
            bid
        ) + self.w_time * self.time_utility(bid)


@define
class BayesianModel(OpponentModel):
    """
    Bayesian opponent model.

    Keeps a posterior over a fixed set of issue-weight hypotheses drawn from a
    uniform Dirichlet prior. Each opponent bid multiplies the probability of a
    hypothesis by ``exp(rationality * u)`` where `u` is the utility of the bid
    under that hypothesis. Value utilities are the normalized value scores
    (as in `HardHeadedFrequencyModel`).

    Args:
        n_hypotheses: Number of weight hypotheses.
        rationality: Assumed opponent rationality. Higher values make the
            posterior react faster.
        most_probable_only: If above zero, evaluate with the most probable
            hypothesis only instead of the posterior average.
        value_addition: Score added to an offered value.
        window: Number of recent moves used to classify the opponent.
        seed: Seed of the generator of hypotheses.
    """

    PARAMETERS = (
        BOAParameter("hypotheses", 10, "Number of issue-weight hypotheses", "n_hypotheses"),
        BOAParameter(
            "rationality",
            5.0,
            "How strongly the opponent is assumed to prefer bids good for itself",
        ),
        BOAParameter(
            "mostProbableOnly",
            0.0,
            "If higher than 0 the most probable hypothesis is only used",
            "most_probable_only",
        ),
        BOAParameter(
            "v", 1.0, "Score added to a value each time the opponent offers it", "value_addition"
        ),
        BOAParameter(
            "m",
            DEFAULT_WINDOW,
            "Number of recent opponent moves checked before considering the opponent non-cooperative",
            "window",
        ),
    )

    n_hypotheses: int = 10
    rationality: float = 5.0
    most_probable_only: float = 0.0
    value_addition: float = 1.0
    window: int = DEFAULT_WINDOW
    seed: int | None = None
    _hypotheses: np.ndarray = field(init=False, default=None)
    _probs: np.ndarray = field(init=False, default=None)
    _scores: list[dict] = field(init=False, factory=list)
    _max_scores: list[float] = field(init=False, factory=list)
    _tracker: CooperationTracker = field(init=False, factory=CooperationTracker)

    def on_init(self) -> None:
        assert self.session is not None
        if self.n_hypotheses < 1:
            warnings.warn(
                f"{self.name}: at least one hypothesis is needed (got {self.n_hypotheses}). Using 10",
                warnings.NegboaParameterWarning,
            )
            self.n_hypotheses = 10
        if self.window < 1:
            warnings.warn(
                f"{self.name}: window must be at least 1 (got {self.window}). Using {DEFAULT_WINDOW}",
                warnings.NegboaParameterWarning,
            )
            self.window = DEFAULT_WINDOW
        issues = self.session.issues
        rng = np.random.default_rng(self.seed)
        self._hypotheses = rng.dirichlet(np.ones(len(issues)), size=self.n_hypotheses)
        self._probs = np.full(self.n_hypotheses, 1.0 / self.n_hypotheses)
        self._scores = [{v: 1.0 for v in issue.values} for issue in issues]
        self._max_scores = [1.0] * len(issues)
        self._tracker = CooperationTracker(self.window)

    @property
    def hypotheses(self) -> np.ndarray:
        return self._hypotheses.copy()

    @property
    def probabilities(self) -> np.ndarray:
        return self._probs.copy()

    @property
    def weights(self) -> tuple[float, ...]:
        """Posterior expectation of the issue weights."""
        return tuple(float(_) for _ in self._probs @ self._hypotheses)

    @property
    def issue_weights(self) -> dict[str, float]:
        assert self.session is not None
        return {i.name: w for i, w in zip(self.session.issues, self.weights)}

    def _value_utils(self, bid: Bid) -> np.ndarray:
        utils = np.zeros(len(self._scores))
        for i, (scores, mx) in enumerate(zip(self._scores, self._max_scores)):
            if i >= len(bid):
                continue
            try:
                utils[i] = scores.get(bid[i], 0.0) / mx
            except TypeError:
                continue
        return utils

    def update(self, bid: Bid, time: float) -> None:
        if self._hypotheses is None or self.session is None:
            return
        history = self.record(bid, time)
        valid = valid_issues(self.session.issues, bid)
        utils = self._hypotheses @ self._value_utils(bid)
        posterior = self._probs * np.exp(self.rationality * (utils - utils.max()))
        total = posterior.sum()
        if total > 0:
            self._probs = posterior / total
        for i, ok in enumerate(valid):
            if not ok:
                continue
            s = self._scores[i][bid[i]] + self.value_addition
            self._scores[i][bid[i]] = s
            self._max_scores[i] = max(self._max_scores[i], s)
        self._tracker.update(history)

    def eval(self, bid: Bid | None) -> float:
        if bid is None or self._hypotheses is None:
            return 0.0
        utils = self._hypotheses @ self._value_utils(bid)
        if self.most_probable_only > 0:
            u = utils[int(np.argmax(self._probs))]
        else:
            u = self._probs @ utils
        return float(min(1.0, max(0.0, u)))

    def is_cooperative(self) -> bool:
        return self._tracker.cooperative
