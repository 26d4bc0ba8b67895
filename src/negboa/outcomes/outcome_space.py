from __future__ import annotations

import itertools
import math
import random
from typing import Iterable, Iterator, Sequence

from attrs import define, field

from .bids import Bid
from .issues import Issue, make_issue

__all__ = ["OutcomeSpace", "make_os"]


@define(frozen=True)
class OutcomeSpace:
    """
    The set of all legal bids: the cartesian product of the values of the issues.
    """

    issues: tuple[Issue, ...] = field(converter=tuple)
    name: str = ""

    def __attrs_post_init__(self):
        names = [_.name for _ in self.issues]
        if len(set(names)) != len(names):
            raise ValueError(f"Issue names must be unique. Got {names}")

    @property
    def issue_names(self) -> list[str]:
        return [_.name for _ in self.issues]

    @property
    def n_issues(self) -> int:
        return len(self.issues)

    @property
    def cardinality(self) -> int:
        return math.prod(_.cardinality for _ in self.issues)

    def enumerate(self) -> Iterator[Bid]:
        """Yields every bid of the outcome space."""
        for values in itertools.product(*(_.values for _ in self.issues)):
            yield Bid(values)

    def random_bid(self, rng: random.Random | None = None) -> Bid:
        if rng is None:
            rng = random.Random()
        return Bid(tuple(rng.choice(_.values) for _ in self.issues))

    def is_valid(self, bid: Bid) -> bool:
        """Checks that the bid assigns a legal value to every issue."""
        if len(bid) != len(self.issues):
            return False
        return all(issue.is_valid(v) for issue, v in zip(self.issues, bid))

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self.issues)


def make_os(
    issues: Sequence[Issue | int | Iterable] | None = None, name: str = ""
) -> OutcomeSpace:
    """
    Creates an outcome space from a list of issues.

    Anything that is not already an `Issue` is passed to `make_issue`.
    """
    if not issues:
        raise ValueError("Cannot create an outcome space without issues")
    return OutcomeSpace(
        tuple(_ if isinstance(_, Issue) else make_issue(_) for _ in issues), name=name
    )
