from __future__ import annotations

from typing import Any, Iterator, Mapping, Sequence

from attrs import define, field

__all__ = ["Bid", "BidDetails"]


@define(frozen=True)
class Bid:
    """
    A complete assignment of one value to every issue (in issue order).

    Bids are immutable and compared by value.

    Examples:
        >>> Bid((1, "a")) == Bid([1, "a"])
        True
        >>> Bid((1, "a", 3)).distance(Bid((1, "b", 4)))
        0.6666666666666666
    """

    values: tuple = field(converter=tuple)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any], issue_names: Sequence[str]) -> Bid:
        """Creates a bid from a mapping of issue names to values."""
        return cls(tuple(d[_] for _ in issue_names))

    def to_dict(self, issue_names: Sequence[str]) -> dict[str, Any]:
        return dict(zip(issue_names, self.values))

    def count_equal_values(self, other: Bid) -> int:
        """Number of issues that take the same value in both bids."""
        return sum(1 for a, b in zip(self.values, other.values) if a == b)

    def distance(self, other: Bid) -> float:
        """
        Fraction of issues at which the two bids differ.

        Remarks:
            - Symmetric and in [0, 1].
            - Positions present in only one of the bids count as different.
        """
        n = max(len(self.values), len(other.values))
        if n == 0:
            return 0.0
        return (n - self.count_equal_values(other)) / n

    def __getitem__(self, indx: int) -> Any:
        return self.values[indx]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __str__(self) -> str:
        return str(self.values)


@define(frozen=True)
class BidDetails:
    """A bid annotated with our own utility for it and the time it was made."""

    bid: Bid
    my_utility: float
    time: float = 0.0
