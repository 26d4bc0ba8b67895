from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from negboa.outcomes import Bid, OutcomeSpace

__all__ = ["LinearAdditiveUtilityFunction"]


class LinearAdditiveUtilityFunction:
    """
    An additive utility function over discrete issues.

    The utility of a bid is the sum over issues of the issue weight times the
    evaluation of the value the bid assigns to that issue. Evaluations are
    divided by the maximum evaluation of their issue so each lies in [0, 1].

    Args:
        weights: Issue weights (non-negative). Normalized to sum to one.
        values: For each issue a mapping from value to its (non-negative) evaluation.
        outcome_space: The outcome space on which the function is defined.
        reserved_value: Utility of ending without agreement.

    Remarks:
        - Values missing from the mapping of an issue evaluate to zero.
        - The function is fixed for the session. Nothing in this package mutates it.
    """

    def __init__(
        self,
        weights: Sequence[float],
        values: Sequence[Mapping[Any, float]],
        outcome_space: OutcomeSpace,
        reserved_value: float = 0.0,
    ):
        if len(weights) != len(outcome_space.issues) or len(values) != len(
            outcome_space.issues
        ):
            raise ValueError(
                f"Expected {len(outcome_space.issues)} weights and value mappings, got "
                f"{len(weights)} and {len(values)}"
            )
        w = np.asarray(weights, dtype=float)
        if (w < 0).any() or w.sum() <= 0:
            raise ValueError(f"Weights must be non-negative with a positive sum: {weights}")
        self._weights = tuple(float(_) for _ in w / w.sum())
        evaluations = []
        for issue, mapping in zip(outcome_space.issues, values):
            mx = max((float(_) for _ in mapping.values()), default=0.0)
            if any(float(_) < 0 for _ in mapping.values()):
                raise ValueError(f"Negative evaluation for issue {issue.name}")
            evaluations.append(
                {k: (float(v) / mx if mx > 0 else 0.0) for k, v in mapping.items()}
            )
        self._values = tuple(evaluations)
        self.outcome_space = outcome_space
        self.reserved_value = reserved_value

    @classmethod
    def random(
        cls,
        outcome_space: OutcomeSpace,
        reserved_value: float = 0.0,
        seed: int | None = None,
    ) -> LinearAdditiveUtilityFunction:
        """Generates a random additive utility function on the given outcome space."""
        rng = np.random.default_rng(seed)
        weights = rng.random(len(outcome_space.issues)) + 1e-3
        values = [
            dict(zip(issue.values, rng.random(issue.cardinality) + 1e-3))
            for issue in outcome_space.issues
        ]
        return cls(weights, values, outcome_space, reserved_value=reserved_value)

    @property
    def weights(self) -> tuple[float, ...]:
        return self._weights

    def weight(self, issue_index: int) -> float:
        return self._weights[issue_index]

    def evaluation(self, issue_index: int, value: Any) -> float:
        """Normalized evaluation of `value` for the given issue (0 if unknown)."""
        try:
            return self._values[issue_index].get(value, 0.0)
        except TypeError:
            return 0.0

    def eval(self, bid: Bid | None) -> float:
        if bid is None:
            return self.reserved_value
        return sum(
            w * self.evaluation(i, v)
            for i, (w, v) in enumerate(zip(self._weights, bid))
        )

    def __call__(self, bid: Bid | None) -> float:
        return self.eval(bid)

    def extreme_outcomes(self) -> tuple[Bid, Bid]:
        """Returns the worst and the best bids (found by enumeration)."""
        worst = best = None
        uworst, ubest = float("inf"), float("-inf")
        for bid in self.outcome_space.enumerate():
            u = self.eval(bid)
            if u < uworst:
                worst, uworst = bid, u
            if u > ubest:
                best, ubest = bid, u
        assert worst is not None and best is not None
        return worst, best

    def __str__(self):
        return f"LinearAdditiveUtilityFunction(weights={self._weights})"
